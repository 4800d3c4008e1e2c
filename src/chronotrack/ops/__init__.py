"""
Operations layer — the service facade over the registry and the engine.

- All functions accept ``OperationContext`` as first argument
- All functions return ``OperationResult[T]``; engine errors come back as
  failures, never as exceptions
- All functions are transport-agnostic (no HTTP, no CLI knowledge)

Usage::

    from chronotrack.ops import OperationContext, Services
    from chronotrack.ops.jobs import create_job
    from chronotrack.ops.requests import CreateJobRequest

    ctx = OperationContext(services=Services.in_memory())
    result = create_job(ctx, CreateJobRequest(name="nightly-export"))
    assert result.success
"""

from chronotrack.ops.context import OperationContext, Services
from chronotrack.ops.result import OperationError, OperationResult, PagedResult

__all__ = [
    "OperationContext",
    "OperationError",
    "OperationResult",
    "PagedResult",
    "Services",
]
