"""
Module 08 - Health Check Route

Liveness probe; also reports whether the shared ballot registry is paused.
"""

from fastapi import APIRouter, Depends

from api.deps import get_registry
from api.models.responses import HealthResponse
from core.ballots import BallotRegistry


router = APIRouter(tags=["health"])

SERVICE_NAME = "ballotproof-api"


def _status(registry: BallotRegistry) -> HealthResponse:
    return HealthResponse(
        ok=True,
        service=SERVICE_NAME,
        version="v1",
        registry_paused=registry.paused,
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(registry: BallotRegistry = Depends(get_registry)) -> HealthResponse:
    """Service status for liveness probes."""
    return _status(registry)


@router.get("/", response_model=HealthResponse)
async def root(registry: BallotRegistry = Depends(get_registry)) -> HealthResponse:
    """Same as /health."""
    return _status(registry)
