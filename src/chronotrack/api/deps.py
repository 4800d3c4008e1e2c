"""
FastAPI dependency injection — shared singletons and per-request factories.

Usage in routers::

    from chronotrack.api.deps import OpContext

    @router.get("/things")
    def list_things(ctx: OpContext):
        ...

The :class:`~chronotrack.ops.context.Services` bundle is created once per
application in :func:`~chronotrack.api.app.create_app` and stored on
``app.state``; every request gets its own :class:`OperationContext` over it.
"""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import Depends, Request

from chronotrack.ops.context import OperationContext, Services


def get_services(request: Request) -> Services:
    """The application-wide registry/engine bundle."""
    return request.app.state.services


def get_operation_context(
    request: Request,
    services: Annotated[Services, Depends(get_services)],
) -> OperationContext:
    """Build an :class:`OperationContext` from the current request."""
    request_id = getattr(request.state, "request_id", str(uuid.uuid4()))
    return OperationContext(services=services, request_id=request_id, caller="api")


OpContext = Annotated[OperationContext, Depends(get_operation_context)]
