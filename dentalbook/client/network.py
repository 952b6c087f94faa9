"""Connectivity tracking for the booking client."""
import logging
from datetime import datetime, timezone
from typing import Optional

import httpx

from dentalbook.core.config import settings

logger = logging.getLogger(__name__)


class NetworkMonitor:
    """
    Remembers whether the backend was reachable at the last check.

    Starts optimistic (online) and is refreshed by `check_connectivity()`,
    a HEAD request against `/health` with a short timeout.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.BACKEND_URL
        self.timeout = timeout if timeout is not None else settings.NETWORK_CHECK_TIMEOUT_SECONDS
        self.transport = transport
        self.is_online = True
        self.is_checking = False
        self.last_checked: Optional[datetime] = None

    def set_online(self, online: bool) -> None:
        self.is_online = online
        self.last_checked = datetime.now(timezone.utc)

    async def check_connectivity(self) -> bool:
        self.is_checking = True
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self.transport
            ) as http:
                response = await http.head("/health")
            online = response.is_success
        except httpx.HTTPError as e:
            logger.info(f"Connectivity check failed: {e}")
            online = False
        finally:
            self.is_checking = False

        self.set_online(online)
        return online
