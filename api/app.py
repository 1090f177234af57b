"""
Module 08 - FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import json
import logging
import os
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import health, whitelist, ballots
from api.errors import APIError, api_error_handler, domain_error_handler, generic_error_handler
from core.schemas.errors import WhitelistException


# Configure logging: respects BALLOTPROOF_LOG_LEVEL env var and ballotproof.json log_level
def _resolve_log_level() -> int:
    """Resolve log level from env var or ballotproof.json, defaulting to INFO."""
    raw = os.getenv("BALLOTPROOF_LOG_LEVEL")
    if raw is None:
        cfg_path = Path.cwd() / "ballotproof.json"
        if cfg_path.exists():
            try:
                with open(cfg_path) as f:
                    raw = json.load(f).get("log_level")
            except (OSError, ValueError, AttributeError):
                raw = None
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="BallotProof API",
        description="""
HTTP API for Merkle-whitelisted ballots.

## Endpoints

- **POST /whitelist/generate** - Build a whitelist root and per-address proofs
- **POST /whitelist/verify** - Check a leaf and proof against a root
- **POST /ballots** - Create a ballot (optional whitelist root)
- **POST /ballots/{id}/vote** - Vote with a whitelist proof
- **POST /ballots/{id}/finalize** - Close a ballot after its end time
- **GET /ballots/{id}/results** - Vote counts and winners
- **GET /health** - Health check

## Whitelist Roots

A root of all zeros disables the whitelist: every address may vote and
proofs are ignored.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(WhitelistException, domain_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(whitelist.router)
    app.include_router(ballots.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    from api.deps import get_runtime_config

    config = get_runtime_config()
    uvicorn.run(app, host=config.api.host, port=config.api.port)
