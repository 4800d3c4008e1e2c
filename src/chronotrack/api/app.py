"""
FastAPI application factory.

``create_app()`` wires middleware, routers, error handlers, logging and
the shared engine into a single ``FastAPI`` instance.  It is the single
composition root; the rest of the codebase never touches ``FastAPI``
directly.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from chronotrack.api.middleware.errors import request_validation_handler, unhandled_exception_handler
from chronotrack.api.middleware.request_id import RequestIDMiddleware
from chronotrack.core.logging import configure_logging, get_logger
from chronotrack.core.settings import ChronoSettings, get_settings
from chronotrack.ops.context import Services


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan — startup / shutdown hooks."""
    log = get_logger("chronotrack.api")
    log.info(
        "chronotrack API starting",
        version=app.version,
        lock_timeout_s=app.state.settings.lock_timeout_s,
    )
    yield
    log.info("chronotrack API shutting down")


def create_app(
    *,
    settings: ChronoSettings | None = None,
    services: Services | None = None,
) -> FastAPI:
    """Build and return a fully-configured FastAPI application.

    Parameters
    ----------
    settings : ChronoSettings | None
        Override settings (useful for testing).  When ``None`` the cached
        singleton from :func:`get_settings` is used.
    services : Services | None
        Pre-built registry/engine bundle (e.g. over a durable store).  When
        ``None`` a fresh in-memory bundle is created.
    """
    settings = settings or get_settings()
    configure_logging(
        level=settings.log_level,
        json_format=settings.json_logs,
        service="chronotrack",
    )

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
    )

    app.state.settings = settings
    app.state.services = services or Services.in_memory(lock_timeout=settings.lock_timeout_s)

    # ── Middleware ───────────────────────────────────────────────────
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Exception handlers ───────────────────────────────────────────
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # ── Routers ──────────────────────────────────────────────────────
    from chronotrack.api.health import create_health_router
    from chronotrack.api.routers import jobs, runs

    app.include_router(create_health_router("chronotrack", version=settings.api_version))

    prefix = settings.api_prefix
    app.include_router(jobs.router, prefix=prefix, tags=["jobs"])
    app.include_router(runs.router, prefix=prefix, tags=["runs"])

    return app
