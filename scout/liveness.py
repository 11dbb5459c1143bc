"""Liveness probing for discovered sites.

HEAD first to stay cheap. Servers that refuse HEAD (or block it by user agent)
get one ranged GET for the first few bytes.
"""

import asyncio

import httpx

from config.config import DEFAULT_PROBE_USER_AGENT
from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT_MS = 5000
FALLBACK_STATUSES = frozenset({403, 404, 405, 503})
RANGE_HEADER = "bytes=0-10"


def _is_ok(status_code: int) -> bool:
    return 200 <= status_code < 300


class LivenessProber:
    """
    Checks whether a URL currently serves content.

    Every failure mode (timeouts, connection errors, bad statuses) collapses
    to False; is_reachable never raises.
    """

    def __init__(
        self,
        user_agent: str = DEFAULT_PROBE_USER_AGENT,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            user_agent: Descriptive bot user agent sent with every probe
            timeout_ms: Default per-attempt budget
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.user_agent = user_agent
        self.timeout_ms = timeout_ms
        self._transport = transport

    async def _attempt(
        self, client: httpx.AsyncClient, method: str, url: str, timeout_s: float, headers: dict[str, str]
    ) -> int:
        response = await asyncio.wait_for(client.request(method, url, headers=headers), timeout=timeout_s)
        return response.status_code

    async def is_reachable(self, url: str, timeout_ms: int | None = None) -> bool:
        timeout_s = (timeout_ms or self.timeout_ms) / 1000
        headers = {"User-Agent": self.user_agent}

        try:
            async with httpx.AsyncClient(
                timeout=timeout_s, follow_redirects=True, transport=self._transport
            ) as client:
                status = await self._attempt(client, "HEAD", url, timeout_s, headers)
                if _is_ok(status):
                    return True
                if status not in FALLBACK_STATUSES:
                    logger.debug(f"HEAD {url} returned {status}")
                    return False

                status = await self._attempt(
                    client, "GET", url, timeout_s, {**headers, "Range": RANGE_HEADER}
                )
                return _is_ok(status)
        except Exception as exc:
            logger.debug(
                "Liveness probe failed",
                extra={"extra_fields": {"url": url, "error": str(exc), "error_type": type(exc).__name__}},
            )
            return False
