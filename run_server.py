#!/usr/bin/env python3
"""FastAPI server entry point for AccessScout."""

import argparse
import os

import uvicorn
from dotenv import load_dotenv


def main() -> None:
    load_dotenv()

    parser = argparse.ArgumentParser(description="AccessScout API server")
    parser.add_argument("--host", default=os.getenv("SERVER_HOST", "127.0.0.1"), help="Host to bind to")
    parser.add_argument("--port", type=int, default=int(os.getenv("SERVER_PORT", "8000")), help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload (development only)")
    args = parser.parse_args()

    if not os.getenv("API_KEYS"):
        print("Warning: API_KEYS is not set; every /v1 request will be rejected.")

    uvicorn.run(
        "server.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
