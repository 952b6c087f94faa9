"""Lightweight per-IP per-path rate limiter for write endpoints."""
import time
from collections import defaultdict, deque
from fastapi import HTTPException, Request, status
from dentalbook.core.config import settings
from dentalbook.utils.helpers import get_client_ip

# In-memory sliding window buckets: key -> deque[timestamps]
_buckets = defaultdict(deque)
_last_sweep = 0.0


def _sweep(window_start: float) -> None:
    """Drop buckets with no hits inside the current window."""
    stale = [key for key, bucket in _buckets.items() if not bucket or bucket[-1] <= window_start]
    for key in stale:
        del _buckets[key]


async def rate_limit(request: Request):
    global _last_sweep
    if not settings.RATE_LIMIT_ENABLED:
        return True

    now = time.time()
    window = settings.RATE_LIMIT_PERIOD_SECONDS
    limit = settings.RATE_LIMIT_REQUESTS

    key = f"{get_client_ip(request)}:{request.url.path}"
    window_start = now - window

    if now - _last_sweep >= window:
        _sweep(window_start)
        _last_sweep = now

    bucket = _buckets[key]

    # Drop old entries outside the window
    while bucket and bucket[0] <= window_start:
        bucket.popleft()

    if len(bucket) >= limit:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many requests. Please slow down.",
        )

    bucket.append(now)
    return True


def reset_rate_limits() -> None:
    global _last_sweep
    _buckets.clear()
    _last_sweep = 0.0
