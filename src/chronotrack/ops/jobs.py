"""
Job operations.

CRUD over job definitions, wrapping :class:`~chronotrack.jobs.registry.JobRegistry`
with typed request/response contracts.  A lookup that misses becomes a
``NOT_FOUND`` failure here; bad input becomes ``VALIDATION_FAILED``.
"""

from __future__ import annotations

from chronotrack.core.errors import ChronoError
from chronotrack.core.logging import get_logger
from chronotrack.domain.models import Job
from chronotrack.ops.context import OperationContext
from chronotrack.ops.requests import (
    ArchiveJobRequest,
    CreateJobRequest,
    GetJobRequest,
    ListJobsRequest,
    UpdateJobRequest,
)
from chronotrack.ops.result import OperationResult, PagedResult, start_timer

logger = get_logger(__name__)


def _not_found(job_id: int, elapsed_ms: float) -> OperationResult[Job]:
    return OperationResult.fail(
        "NOT_FOUND",
        f"Job {job_id} not found",
        details={"job_id": job_id},
        elapsed_ms=elapsed_ms,
    )


def create_job(ctx: OperationContext, request: CreateJobRequest) -> OperationResult[Job]:
    """Create a job definition."""
    timer = start_timer()
    try:
        job = ctx.jobs.create(request.name, description=request.description, type=request.type)
        return OperationResult.ok(job, elapsed_ms=timer.elapsed_ms)
    except ChronoError as exc:
        logger.info("op_rejected", op="create_job", request_id=ctx.request_id, code=exc.code)
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", op="create_job", request_id=ctx.request_id, error=str(exc))
        return OperationResult.fail("INTERNAL", f"Failed to create job: {exc}", elapsed_ms=timer.elapsed_ms)


def list_jobs(ctx: OperationContext, request: ListJobsRequest | None = None) -> PagedResult[Job]:
    """List jobs in creation order, hiding archived ones unless asked."""
    timer = start_timer()
    request = request or ListJobsRequest()
    try:
        jobs = ctx.jobs.list(include_archived=request.include_archived)
        return PagedResult.from_items(jobs, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", op="list_jobs", request_id=ctx.request_id, error=str(exc))
        return PagedResult.fail("INTERNAL", f"Failed to list jobs: {exc}", elapsed_ms=timer.elapsed_ms)


def get_job(ctx: OperationContext, request: GetJobRequest) -> OperationResult[Job]:
    timer = start_timer()
    job = ctx.jobs.get_by_id(request.job_id)
    if job is None:
        return _not_found(request.job_id, timer.elapsed_ms)
    return OperationResult.ok(job, elapsed_ms=timer.elapsed_ms)


def update_job(ctx: OperationContext, request: UpdateJobRequest) -> OperationResult[Job]:
    """Apply a partial update to a job."""
    timer = start_timer()
    try:
        job = ctx.jobs.update(request.job_id, **request.changes)
    except ChronoError as exc:
        logger.info("op_rejected", op="update_job", request_id=ctx.request_id, code=exc.code)
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", op="update_job", request_id=ctx.request_id, error=str(exc))
        return OperationResult.fail("INTERNAL", f"Failed to update job: {exc}", elapsed_ms=timer.elapsed_ms)

    if job is None:
        return _not_found(request.job_id, timer.elapsed_ms)
    return OperationResult.ok(job, elapsed_ms=timer.elapsed_ms)


def archive_job(ctx: OperationContext, request: ArchiveJobRequest) -> OperationResult[Job]:
    """Soft-delete a job.  Its runs stay queryable and transitionable."""
    timer = start_timer()
    try:
        job = ctx.jobs.archive(request.job_id)
    except ChronoError as exc:
        logger.info("op_rejected", op="archive_job", request_id=ctx.request_id, code=exc.code)
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)

    if job is None:
        return _not_found(request.job_id, timer.elapsed_ms)
    return OperationResult.ok(job, elapsed_ms=timer.elapsed_ms)
