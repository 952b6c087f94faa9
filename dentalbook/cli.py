"""Small CLI helpers wired to project scripts for developer convenience.

Usage (from project root):
  dentalbook-runserver --host=0.0.0.0 --port=8000 --no-reload
  dentalbook-tests
  dentalbook-migrate            # defaults to `alembic upgrade head`
  dentalbook-init-env           # copies .env.example -> .env if missing
  dentalbook-token <principal>  # prints a bearer token for the principal
  dentalbook-book --name=... --contact=... --date=YYYY-MM-DD --service=Hygiene
"""
from __future__ import annotations

import asyncio
import sys
import shutil
import subprocess
from datetime import date
from pathlib import Path
from typing import Dict, List


def _args() -> List[str]:
    return sys.argv[1:]


def _flags() -> Dict[str, str]:
    flags = {}
    for a in _args():
        if a.startswith("--") and "=" in a:
            key, value = a[2:].split("=", 1)
            flags[key] = value
    return flags


def runserver() -> None:
    """Run Uvicorn programmatically. Accepts simple flags:

    --host=<host>  (default 127.0.0.1)
    --port=<port>  (default 8000)
    --no-reload    (disable auto-reload)
    --reload       (enable auto-reload)
    """
    import uvicorn

    host = "127.0.0.1"
    port = 8000
    reload = True

    for a in _args():
        if a.startswith("--host="):
            host = a.split("=", 1)[1]
        elif a.startswith("--port="):
            try:
                port = int(a.split("=", 1)[1])
            except ValueError:
                print(f"Ignoring invalid port: {a}")
        elif a == "--no-reload":
            reload = False
        elif a == "--reload":
            reload = True

    print(f"Starting uvicorn on {host}:{port} (reload={reload})")
    uvicorn.run("dentalbook.main:app", host=host, port=port, reload=reload)


def run_tests() -> None:
    """Run pytest with any forwarded args."""
    args = _args()
    cmd = ["pytest"] + args
    subprocess.run(cmd, check=True)


def run_migrations() -> None:
    """Run alembic. If no args provided, runs `alembic upgrade head`."""
    args = _args()
    if args:
        cmd = ["alembic"] + args
    else:
        cmd = ["alembic", "upgrade", "head"]
    subprocess.run(cmd, check=True)


def init_env() -> None:
    """Copy `.env.example` to `.env` if `.env` is missing."""
    root = Path(__file__).resolve().parents[1]
    src = root / ".env.example"
    dst = root / ".env"
    if dst.exists():
        print(f".env already exists at {dst}")
        return
    if not src.exists():
        print(f".env.example not found at {src}")
        return
    shutil.copy(src, dst)
    print(f"Created .env from .env.example at {dst}")


def issue_token() -> None:
    """Print a bearer token whose subject is the given principal."""
    from dentalbook.core.security import create_access_token

    args = [a for a in _args() if not a.startswith("--")]
    if not args:
        print("Usage: dentalbook-token <principal>")
        sys.exit(2)
    token, _ = create_access_token(args[0])
    print(token)


def book() -> None:
    """Submit one booking through the retrying booking flow and print the outcome."""
    from dentalbook.client.api import ClinicClient
    from dentalbook.client.booking import BookingForm, BookingSubmissionFlow
    from dentalbook.client.network import NetworkMonitor
    from dentalbook.core.logger import setup_logging

    setup_logging()
    flags = _flags()
    form = BookingForm(
        patient_name=flags.get("name", ""),
        contact_info=flags.get("contact", ""),
        date=date.fromisoformat(flags["date"]) if flags.get("date") else None,
        service=flags.get("service"),
        notes=flags.get("notes"),
    )

    async def _run() -> int:
        async with ClinicClient(base_url=flags.get("url")) as client:
            network = NetworkMonitor(base_url=client.base_url)
            await network.check_connectivity()
            await client.connect()
            flow = BookingSubmissionFlow(
                client,
                network=network,
                notify=lambda n: print(f"[{n.level}] {n.title} {n.description}".rstrip()),
                success_display_seconds=0,
            )
            outcome = await flow.submit(form)
            await flow.wait_until_idle()
            print(outcome.model_dump_json(indent=2))
            return 0 if outcome.appointment_id is not None else 1

    sys.exit(asyncio.run(_run()))


if __name__ == "__main__":
    # Allow running the helpers directly: python -m dentalbook.cli runserver
    if len(sys.argv) <= 1:
        print(__doc__)
        sys.exit(0)
    cmd = sys.argv[1]
    sys.argv.pop(1)
    if cmd == "runserver":
        runserver()
    elif cmd in ("run-tests", "tests", "test"):
        run_tests()
    elif cmd in ("migrate", "alembic"):
        run_migrations()
    elif cmd in ("init-env", "initenv"):
        init_env()
    elif cmd in ("issue-token", "token"):
        issue_token()
    elif cmd == "book":
        book()
    else:
        print(f"Unknown command: {cmd}")
