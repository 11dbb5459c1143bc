"""FastAPI dependencies for authentication and service access."""

import os

from fastapi import Header, HTTPException, Request, status

from api.linear_client import LinearClient
from api.openai_client import TicketSummarizer
from api.yutori_client import YutoriClient
from config.config import Config
from server.utils import redact_sensitive_headers
from utils.logger import get_logger

logger = get_logger(__name__)


async def get_api_key(request: Request, x_api_key: str | None = Header(None)):
    """Validate API key from X-API-Key header."""
    valid_keys_str = os.getenv("API_KEYS", "")
    redacted_headers = redact_sensitive_headers(dict(request.headers))

    if not valid_keys_str:
        logger.error(
            "API authentication not configured",
            extra={"extra_fields": {"path": request.url.path, "headers": redacted_headers}},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="API authentication not configured",
        )

    valid_keys = [k.strip() for k in valid_keys_str.split(",") if k.strip()]

    if not x_api_key or x_api_key not in valid_keys:
        logger.warning(
            "API authentication failed",
            extra={"extra_fields": {"path": request.url.path, "headers": redacted_headers}},
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or missing API key"
        )

    return x_api_key


def _missing_key(name: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"{name} is not set"
    )


def get_discovery_orchestrator():
    """Dependency to get the discovery orchestrator (singleton pattern)."""
    from scout.factory import create_discovery_orchestrator_from_env

    if not hasattr(get_discovery_orchestrator, "_instance"):
        get_discovery_orchestrator._instance = create_discovery_orchestrator_from_env()
    return get_discovery_orchestrator._instance


def get_yutori_client() -> YutoriClient:
    config = Config()
    if not config.YUTORI_API_KEY:
        raise _missing_key("YUTORI_API_KEY")
    return YutoriClient(api_key=config.YUTORI_API_KEY, base_url=config.YUTORI_API_URL)


def get_linear_client() -> LinearClient:
    config = Config()
    if not config.LINEAR_API_KEY:
        raise _missing_key("LINEAR_API_KEY")
    return LinearClient(api_key=config.LINEAR_API_KEY)


def get_ticket_summarizer() -> TicketSummarizer:
    config = Config()
    if not config.OPENAI_API_KEY:
        raise _missing_key("OPENAI_API_KEY")
    return TicketSummarizer(api_key=config.OPENAI_API_KEY, model_name=config.OPENAI_TICKET_MODEL)
