from abc import ABC
from typing import Any, Optional

import httpx

from utils.logger import get_logger

logger = get_logger(__name__)


class UpstreamAPIError(RuntimeError):
    """A third-party service answered with a non-2xx status or could not be reached."""

    def __init__(self, service: str, message: str, status_code: int = 502, details: str = ""):
        super().__init__(f"{service}: {message}")
        self.service = service
        self.status_code = status_code
        self.details = details


class BaseServiceClient(ABC):
    """
    Abstract base class for third-party HTTP service clients.
    Subclasses set SERVICE_NAME and supply their auth headers.
    """

    SERVICE_NAME = "upstream"

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout_s: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: API key for the service
            base_url: Service root URL
            timeout_s: Per-request timeout in seconds
            transport: Optional httpx transport (tests inject httpx.MockTransport)
        """
        if not api_key:
            raise ValueError(f"{self.SERVICE_NAME} API key is required")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._transport = transport

    def auth_headers(self) -> dict[str, str]:
        return {}

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        """
        Send one request and decode the JSON body.

        Raises:
            UpstreamAPIError: On transport failures and non-2xx responses
        """
        url = f"{self.base_url}{path}"
        headers = {"Content-Type": "application/json", **self.auth_headers()}

        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
                response = await client.request(method, url, headers=headers, json=json, params=params)
        except httpx.HTTPError as exc:
            logger.error(
                f"{self.SERVICE_NAME} request failed",
                extra={"extra_fields": {"url": url, "error": str(exc), "error_type": type(exc).__name__}},
            )
            raise UpstreamAPIError(self.SERVICE_NAME, str(exc) or type(exc).__name__) from exc

        if response.is_error:
            logger.error(
                f"{self.SERVICE_NAME} returned {response.status_code}",
                extra={"extra_fields": {"url": url, "status": response.status_code}},
            )
            raise UpstreamAPIError(
                self.SERVICE_NAME,
                f"{response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                details=response.text,
            )

        return response.json() if response.content else {}
