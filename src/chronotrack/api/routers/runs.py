"""
Runs router — inspect, transition and annotate job runs.

Endpoints:
    GET    /runs/{run_id}               Get a run
    POST   /runs/{run_id}/transition    Apply a status transition
    PATCH  /runs/{run_id}/metadata      Merge metadata keys
"""

from __future__ import annotations

from fastapi import APIRouter, Path, Request

from chronotrack.api.deps import OpContext
from chronotrack.api.schemas.common import SuccessResponse
from chronotrack.api.schemas.domains import AnnotateRunBody, JobRunSchema, TransitionRunBody
from chronotrack.api.utils import _handle_error

router = APIRouter(prefix="/runs")


@router.get("/{run_id}", response_model=SuccessResponse[JobRunSchema])
def get_run(ctx: OpContext, request: Request, run_id: int = Path(..., ge=1, description="Run id")):
    """Get a single run.

    Raises:
        404 NOT_FOUND: Unknown run id.
    """
    from chronotrack.ops.requests import GetRunRequest
    from chronotrack.ops.runs import get_run as _get

    result = _get(ctx, GetRunRequest(run_id=run_id))
    if not result.success:
        return _handle_error(result, request)
    return SuccessResponse(data=JobRunSchema(**result.data.to_dict()), elapsed_ms=result.elapsed_ms)


@router.post("/{run_id}/transition", response_model=SuccessResponse[JobRunSchema])
def transition_run(
    ctx: OpContext,
    body: TransitionRunBody,
    request: Request,
    run_id: int = Path(..., ge=1, description="Run id"),
):
    """Move a run to a new status.

    Example:
        POST /api/v1/runs/1/transition
        {"status": "FAILED", "error_message": "exit code 3"}

    Raises:
        404 RUN_NOT_FOUND: Unknown run id.
        409 INVALID_TRANSITION: Not allowed from the current status.
        400 MISSING_ERROR_MESSAGE: FAILED without ``error_message``.
        423 CONTENTION: Run locked by another request for too long.
    """
    from chronotrack.ops.requests import TransitionRunRequest
    from chronotrack.ops.runs import transition_run as _transition

    result = _transition(
        ctx,
        TransitionRunRequest(
            run_id=run_id,
            status=body.status,
            timestamp=body.timestamp,
            error_message=body.error_message,
            expected_status=body.expected_status,
        ),
    )
    if not result.success:
        return _handle_error(result, request)
    return SuccessResponse(data=JobRunSchema(**result.data.to_dict()), elapsed_ms=result.elapsed_ms)


@router.patch("/{run_id}/metadata", response_model=SuccessResponse[JobRunSchema])
def annotate_run(
    ctx: OpContext,
    body: AnnotateRunBody,
    request: Request,
    run_id: int = Path(..., ge=1, description="Run id"),
):
    """Merge keys into a run's metadata (allowed in every status)."""
    from chronotrack.ops.requests import AnnotateRunRequest
    from chronotrack.ops.runs import annotate_run as _annotate

    result = _annotate(ctx, AnnotateRunRequest(run_id=run_id, metadata=body.metadata))
    if not result.success:
        return _handle_error(result, request)
    return SuccessResponse(data=JobRunSchema(**result.data.to_dict()), elapsed_ms=result.elapsed_ms)
