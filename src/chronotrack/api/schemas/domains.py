"""
Domain-specific Pydantic schemas for the API layer.

These mirror the domain dataclasses (``Job``, ``JobRun``) as Pydantic
models for JSON serialisation, OpenAPI schema generation and request
validation.  Optional fields are always present in responses and are
``null`` when unset.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

RunStatusName = Literal["PENDING", "RUNNING", "SUCCESS", "FAILED", "CANCELLED"]
"""
Run status values:

- ``PENDING``: created, not started
- ``RUNNING``: started
- ``SUCCESS``: finished successfully (terminal)
- ``FAILED``: finished with an error message (terminal)
- ``CANCELLED``: cancelled before or during execution (terminal)
"""


# ── Jobs ─────────────────────────────────────────────────────────────────


class JobSchema(BaseModel):
    """A job definition."""

    id: int
    name: str
    description: str | None = None
    type: str | None = None
    archived: bool = False
    created_at: datetime
    updated_at: datetime


class CreateJobBody(BaseModel):
    """Request body for ``POST /jobs``."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(description="Job name (non-empty)")
    description: str | None = Field(default=None, description="Free-text description")
    type: str | None = Field(default=None, description="Free-text job type")


class UpdateJobBody(BaseModel):
    """Request body for ``PATCH /jobs/{job_id}``; only supplied fields change."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    description: str | None = None
    type: str | None = None
    archived: bool | None = None


# ── Runs ─────────────────────────────────────────────────────────────────


class JobRunSchema(BaseModel):
    """A job run and its lifecycle timestamps."""

    id: int
    job_id: int
    status: RunStatusName
    created_at: datetime
    started_at: datetime | None = None
    finished_at: datetime | None = None
    cancelled_at: datetime | None = None
    error_message: str | None = None
    metadata: dict[str, Any] | None = None


class CreateRunBody(BaseModel):
    """Request body for ``POST /jobs/{job_id}/runs``."""

    model_config = ConfigDict(extra="forbid")

    status: str | None = Field(default=None, description="Starting status; defaults to PENDING")
    metadata: dict[str, Any] | None = Field(default=None, description="Initial run metadata")


class TransitionRunBody(BaseModel):
    """Request body for ``POST /runs/{run_id}/transition``."""

    model_config = ConfigDict(extra="forbid")

    status: str = Field(description="Target status")
    timestamp: datetime | None = Field(default=None, description="When the change happened; defaults to now")
    error_message: str | None = Field(default=None, description="Required when status is FAILED")
    expected_status: str | None = Field(
        default=None, description="Reject unless the run is currently in this status"
    )


class AnnotateRunBody(BaseModel):
    """Request body for ``PATCH /runs/{run_id}/metadata``."""

    model_config = ConfigDict(extra="forbid")

    metadata: dict[str, Any] = Field(description="Keys to add or overwrite")
