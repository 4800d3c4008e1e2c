"""Health endpoints.

``GET /health`` reports service name, version and uptime; ``GET /health/live``
is the liveness probe.  Neither touches the engine: a wedged entity lock
must not make the process look dead.
"""

from __future__ import annotations

import time
from datetime import UTC, datetime

from fastapi import APIRouter
from pydantic import BaseModel, Field

# Module-level start time — set when the service first imports this module.
_START_TIME = time.monotonic()


class HealthResponse(BaseModel):
    """Health envelope returned from ``GET /health``."""

    status: str = "healthy"
    service: str = ""
    version: str = ""
    uptime_s: float = Field(default_factory=lambda: round(time.monotonic() - _START_TIME, 1))
    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())


class LivenessResponse(BaseModel):
    """Response for liveness probes — always ``{"status": "alive"}``."""

    status: str = "alive"


def create_health_router(service_name: str, version: str, prefix: str = "/health") -> APIRouter:
    """Create an ``APIRouter`` with ``{prefix}`` and ``{prefix}/live``."""
    router = APIRouter(tags=["health"])

    @router.get(prefix, response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(service=service_name, version=version)

    @router.get(f"{prefix}/live", response_model=LivenessResponse)
    def liveness() -> LivenessResponse:
        """Liveness probe — always 200 if the process is running."""
        return LivenessResponse()

    return router
