"""
Typed request objects for operations.

Each dataclass represents the *input* contract for a single operation
function.  Requests carry only transport-agnostic data — no raw HTTP
bodies, no Typer params.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

# ------------------------------------------------------------------ #
# Job operations
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class CreateJobRequest:
    """Request for :func:`chronotrack.ops.jobs.create_job`."""

    name: str = ""
    description: str | None = None
    type: str | None = None


@dataclass(frozen=True, slots=True)
class ListJobsRequest:
    """Request for :func:`chronotrack.ops.jobs.list_jobs`."""

    include_archived: bool = False


@dataclass(frozen=True, slots=True)
class GetJobRequest:
    job_id: int = 0


@dataclass(frozen=True, slots=True)
class UpdateJobRequest:
    """Request for :func:`chronotrack.ops.jobs.update_job`.

    Attributes:
        job_id: Job to update.
        changes: Only the fields to change; keys absent here are untouched.
            Allowed keys: ``name``, ``description``, ``type``, ``archived``.
    """

    job_id: int = 0
    changes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ArchiveJobRequest:
    job_id: int = 0


# ------------------------------------------------------------------ #
# Run operations
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class CreateRunRequest:
    """Request for :func:`chronotrack.ops.runs.create_run`.

    Attributes:
        job_id: Parent job.
        status: Optional starting status (defaults to ``PENDING``).
        metadata: Optional initial metadata.
    """

    job_id: int = 0
    status: str | None = None
    metadata: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class TransitionRunRequest:
    """Request for :func:`chronotrack.ops.runs.transition_run`.

    Attributes:
        run_id: Run to transition.
        status: Target status name.
        timestamp: When the change happened (defaults to now).
        error_message: Required when *status* is ``FAILED``.
        expected_status: Optional source status guard; rejected as an invalid
            transition if the run has already left it.
    """

    run_id: int = 0
    status: str = ""
    timestamp: datetime | None = None
    error_message: str | None = None
    expected_status: str | None = None


@dataclass(frozen=True, slots=True)
class GetRunRequest:
    run_id: int = 0


@dataclass(frozen=True, slots=True)
class ListJobRunsRequest:
    """Request for :func:`chronotrack.ops.runs.list_runs_for_job`."""

    job_id: int = 0


@dataclass(frozen=True, slots=True)
class AnnotateRunRequest:
    """Request for :func:`chronotrack.ops.runs.annotate_run`."""

    run_id: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)
