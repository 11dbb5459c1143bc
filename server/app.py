"""FastAPI application factory."""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.base_client import UpstreamAPIError
from server.routes import browser_agent, health, owners, scout, scouts, tickets
from server.utils import upstream_error_response
from utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup/shutdown logic."""
    logger.info("FastAPI server starting up")

    required_keys = ["API_KEYS"]
    optional_keys = ["YUTORI_API_KEY", "OPENAI_API_KEY", "LINEAR_API_KEY"]
    missing = [k for k in required_keys if not os.getenv(k)]
    if missing:
        logger.warning(f"Missing environment variables: {missing}")
    unset = [k for k in optional_keys if not os.getenv(k)]
    if unset:
        logger.info(f"Provider keys not configured (related endpoints will return 500): {unset}")

    yield

    logger.info("FastAPI server shutting down")


def create_app() -> FastAPI:
    """Factory function to create FastAPI application."""
    app = FastAPI(
        title="AccessScout API",
        description="Find early-stage sites, audit them for accessibility and file tickets",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(UpstreamAPIError, upstream_error_response)

    app.include_router(health.router)
    app.include_router(scout.router)
    app.include_router(scouts.router)
    app.include_router(browser_agent.router)
    app.include_router(owners.router)
    app.include_router(tickets.router)

    return app
