"""
Jobs router — create, list, inspect, update and archive jobs, and the
per-job run endpoints (create run, run history).

Endpoints:
    POST   /jobs                      Create a job
    GET    /jobs                      List jobs (``include_archived`` flag)
    GET    /jobs/{job_id}             Get a job
    PATCH  /jobs/{job_id}             Update a job (partial)
    POST   /jobs/{job_id}/archive     Archive (soft-delete) a job
    POST   /jobs/{job_id}/runs        Create a run for a job
    GET    /jobs/{job_id}/runs        List runs for a job (creation order)
"""

from __future__ import annotations

from fastapi import APIRouter, Path, Query, Request

from chronotrack.api.deps import OpContext
from chronotrack.api.schemas.common import ListResponse, SuccessResponse
from chronotrack.api.schemas.domains import (
    CreateJobBody,
    CreateRunBody,
    JobRunSchema,
    JobSchema,
    UpdateJobBody,
)
from chronotrack.api.utils import _handle_error

router = APIRouter(prefix="/jobs")


@router.post("", response_model=SuccessResponse[JobSchema], status_code=201)
def create_job(ctx: OpContext, body: CreateJobBody, request: Request):
    """Create a job definition.

    Raises:
        400 VALIDATION_FAILED: Empty name.
    """
    from chronotrack.ops.jobs import create_job as _create
    from chronotrack.ops.requests import CreateJobRequest

    result = _create(ctx, CreateJobRequest(name=body.name, description=body.description, type=body.type))
    if not result.success:
        return _handle_error(result, request)
    return SuccessResponse(data=JobSchema(**result.data.to_dict()), elapsed_ms=result.elapsed_ms)


@router.get("", response_model=ListResponse[JobSchema])
def list_jobs(
    ctx: OpContext,
    request: Request,
    include_archived: bool = Query(False, description="Include archived jobs"),
):
    """List jobs in creation order."""
    from chronotrack.ops.jobs import list_jobs as _list
    from chronotrack.ops.requests import ListJobsRequest

    result = _list(ctx, ListJobsRequest(include_archived=include_archived))
    if not result.success:
        return _handle_error(result, request)
    return ListResponse(
        data=[JobSchema(**job.to_dict()) for job in result.data or []],
        total=result.total,
        elapsed_ms=result.elapsed_ms,
    )


@router.get("/{job_id}", response_model=SuccessResponse[JobSchema])
def get_job(ctx: OpContext, request: Request, job_id: int = Path(..., ge=1, description="Job id")):
    """Get a single job.

    Raises:
        404 NOT_FOUND: Unknown job id.
    """
    from chronotrack.ops.jobs import get_job as _get
    from chronotrack.ops.requests import GetJobRequest

    result = _get(ctx, GetJobRequest(job_id=job_id))
    if not result.success:
        return _handle_error(result, request)
    return SuccessResponse(data=JobSchema(**result.data.to_dict()), elapsed_ms=result.elapsed_ms)


@router.patch("/{job_id}", response_model=SuccessResponse[JobSchema])
def update_job(
    ctx: OpContext,
    body: UpdateJobBody,
    request: Request,
    job_id: int = Path(..., ge=1, description="Job id"),
):
    """Update the supplied fields of a job.

    Only keys present in the body are applied; ``description`` and ``type``
    may be cleared with an explicit ``null``.

    Raises:
        400 VALIDATION_FAILED: Empty name or null name/archived.
        404 NOT_FOUND: Unknown job id.
    """
    from chronotrack.ops.jobs import update_job as _update
    from chronotrack.ops.requests import UpdateJobRequest

    result = _update(ctx, UpdateJobRequest(job_id=job_id, changes=body.model_dump(exclude_unset=True)))
    if not result.success:
        return _handle_error(result, request)
    return SuccessResponse(data=JobSchema(**result.data.to_dict()), elapsed_ms=result.elapsed_ms)


@router.post("/{job_id}/archive", response_model=SuccessResponse[JobSchema])
def archive_job(ctx: OpContext, request: Request, job_id: int = Path(..., ge=1, description="Job id")):
    """Archive (soft-delete) a job.  Its runs remain available."""
    from chronotrack.ops.jobs import archive_job as _archive
    from chronotrack.ops.requests import ArchiveJobRequest

    result = _archive(ctx, ArchiveJobRequest(job_id=job_id))
    if not result.success:
        return _handle_error(result, request)
    return SuccessResponse(data=JobSchema(**result.data.to_dict()), elapsed_ms=result.elapsed_ms)


@router.post("/{job_id}/runs", response_model=SuccessResponse[JobRunSchema], status_code=201)
def create_run(
    ctx: OpContext,
    request: Request,
    body: CreateRunBody | None = None,
    job_id: int = Path(..., ge=1, description="Parent job id"),
):
    """Create a run for a job (status defaults to PENDING).

    Raises:
        404 JOB_NOT_FOUND: Unknown job id.
        400 VALIDATION_FAILED: Unknown status name.
    """
    from chronotrack.ops.requests import CreateRunRequest
    from chronotrack.ops.runs import create_run as _create

    body = body or CreateRunBody()
    result = _create(ctx, CreateRunRequest(job_id=job_id, status=body.status, metadata=body.metadata))
    if not result.success:
        return _handle_error(result, request)
    return SuccessResponse(data=JobRunSchema(**result.data.to_dict()), elapsed_ms=result.elapsed_ms)


@router.get("/{job_id}/runs", response_model=ListResponse[JobRunSchema])
def list_job_runs(ctx: OpContext, request: Request, job_id: int = Path(..., description="Job id")):
    """Run history of a job in creation order; empty for unknown jobs."""
    from chronotrack.ops.requests import ListJobRunsRequest
    from chronotrack.ops.runs import list_runs_for_job as _list

    result = _list(ctx, ListJobRunsRequest(job_id=job_id))
    if not result.success:
        return _handle_error(result, request)
    return ListResponse(
        data=[JobRunSchema(**run.to_dict()) for run in result.data or []],
        total=result.total,
        elapsed_ms=result.elapsed_ms,
    )
