"""
Run operations.

Create, transition, inspect and annotate job runs, wrapping
:class:`~chronotrack.runs.engine.RunLifecycleEngine` with typed
request/response contracts.

Error codes produced here:

- ``JOB_NOT_FOUND`` — run creation against an unknown job
- ``RUN_NOT_FOUND`` — transition/annotate on an unknown run
- ``NOT_FOUND`` — plain lookup miss (``get_run``)
- ``INVALID_TRANSITION`` — details carry ``current`` and ``target``
- ``MISSING_ERROR_MESSAGE`` — FAILED requested without a message
- ``VALIDATION_FAILED`` — unknown status name, malformed metadata
- ``CONTENTION`` — run lock not acquired in time (retryable)
"""

from __future__ import annotations

from chronotrack.core.errors import ChronoError
from chronotrack.core.logging import get_logger
from chronotrack.domain.models import JobRun
from chronotrack.ops.context import OperationContext
from chronotrack.ops.requests import (
    AnnotateRunRequest,
    CreateRunRequest,
    GetRunRequest,
    ListJobRunsRequest,
    TransitionRunRequest,
)
from chronotrack.ops.result import OperationResult, PagedResult, start_timer

logger = get_logger(__name__)


def _rejected(op: str, ctx: OperationContext, exc: ChronoError, elapsed_ms: float) -> OperationResult[JobRun]:
    logger.info(
        "op_rejected",
        op=op,
        request_id=ctx.request_id,
        code=exc.code,
        **exc.details,
    )
    return OperationResult.from_error(exc, elapsed_ms=elapsed_ms)


def _internal(op: str, ctx: OperationContext, exc: Exception, elapsed_ms: float) -> OperationResult[JobRun]:
    logger.exception("op_failed", op=op, request_id=ctx.request_id, error=str(exc))
    return OperationResult.fail("INTERNAL", f"{op} failed: {exc}", elapsed_ms=elapsed_ms)


def create_run(ctx: OperationContext, request: CreateRunRequest) -> OperationResult[JobRun]:
    """Create a run for an existing job."""
    timer = start_timer()
    try:
        run = ctx.runs.create_run(
            request.job_id,
            initial_status=request.status,
            metadata=request.metadata,
        )
        return OperationResult.ok(run, elapsed_ms=timer.elapsed_ms)
    except ChronoError as exc:
        return _rejected("create_run", ctx, exc, timer.elapsed_ms)
    except Exception as exc:
        return _internal("create_run", ctx, exc, timer.elapsed_ms)


def transition_run(ctx: OperationContext, request: TransitionRunRequest) -> OperationResult[JobRun]:
    """Apply a validated status transition to a run."""
    timer = start_timer()
    try:
        run = ctx.runs.transition(
            request.run_id,
            request.status,
            timestamp=request.timestamp,
            error_message=request.error_message,
            expected_status=request.expected_status,
        )
        return OperationResult.ok(run, elapsed_ms=timer.elapsed_ms)
    except ChronoError as exc:
        return _rejected("transition_run", ctx, exc, timer.elapsed_ms)
    except Exception as exc:
        return _internal("transition_run", ctx, exc, timer.elapsed_ms)


def get_run(ctx: OperationContext, request: GetRunRequest) -> OperationResult[JobRun]:
    timer = start_timer()
    run = ctx.runs.get_run(request.run_id)
    if run is None:
        return OperationResult.fail(
            "NOT_FOUND",
            f"Run {request.run_id} not found",
            details={"run_id": request.run_id},
            elapsed_ms=timer.elapsed_ms,
        )
    return OperationResult.ok(run, elapsed_ms=timer.elapsed_ms)


def list_runs_for_job(ctx: OperationContext, request: ListJobRunsRequest) -> PagedResult[JobRun]:
    """Run history of a job in creation order; empty for unknown jobs."""
    timer = start_timer()
    runs = ctx.runs.list_runs_for_job(request.job_id)
    return PagedResult.from_items(runs, elapsed_ms=timer.elapsed_ms)


def annotate_run(ctx: OperationContext, request: AnnotateRunRequest) -> OperationResult[JobRun]:
    """Merge metadata keys into a run, whatever its status."""
    timer = start_timer()
    try:
        run = ctx.runs.annotate(request.run_id, request.metadata)
        return OperationResult.ok(run, elapsed_ms=timer.elapsed_ms)
    except ChronoError as exc:
        return _rejected("annotate_run", ctx, exc, timer.elapsed_ms)
    except Exception as exc:
        return _internal("annotate_run", ctx, exc, timer.elapsed_ms)
