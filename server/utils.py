"""Shared utilities for FastAPI routes."""

from collections.abc import Mapping

from fastapi import Request
from fastapi.responses import JSONResponse

from api.base_client import UpstreamAPIError
from utils.logger import get_logger

logger = get_logger(__name__)

SENSITIVE_HEADERS = {"x-api-key", "authorization"}


def redact_sensitive_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """
    Redact auth-bearing headers before logging.
    """
    redacted: dict[str, str] = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS and value:
            redacted[key] = "[REDACTED]"
        else:
            redacted[key] = value
    return redacted


def upstream_status(status_code: int) -> int:
    """Pass upstream 4xx/5xx through; anything else becomes a 502."""
    return status_code if 400 <= status_code < 600 else 502


async def upstream_error_response(request: Request, exc: UpstreamAPIError) -> JSONResponse:
    logger.error(
        f"Upstream {exc.service} error on {request.url.path}",
        extra={"extra_fields": {"status": exc.status_code, "service": exc.service}},
    )
    return JSONResponse(
        status_code=upstream_status(exc.status_code),
        content={"error": f"{exc.service.capitalize()} API Error", "details": exc.details or str(exc)},
    )
