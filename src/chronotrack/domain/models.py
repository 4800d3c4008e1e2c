"""Domain models for jobs and job runs.

Defines the core data structures:
- Job: a named, reusable unit of work definition (never physically deleted)
- JobRun: one execution attempt of a Job with its own lifecycle status
- RunStatus: the run state machine and its transition table

These models are used by the JobRegistry, the RunLifecycleEngine, the ops
layer and the API schemas.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from chronotrack.core.errors import InvalidTransitionError, ValidationError
from chronotrack.core.timestamps import to_iso8601


class RunStatus(str, Enum):
    """Status of a job run.

    Valid transition graph::

        PENDING   → RUNNING | CANCELLED
        RUNNING   → SUCCESS | FAILED | CANCELLED
        SUCCESS   → (terminal)
        FAILED    → (terminal)
        CANCELLED → (terminal)
    """

    PENDING = "PENDING"
    RUNNING = "RUNNING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return not RUN_VALID_TRANSITIONS[self]

    @classmethod
    def parse(cls, value: RunStatus | str) -> RunStatus:
        """Coerce a status name (any case) to :class:`RunStatus`.

        Raises:
            ValidationError: If *value* names no status.
        """
        if isinstance(value, RunStatus):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValidationError(
                f"Unknown run status '{value}' (expected one of: {allowed})",
                field="status",
            ) from None


# --- RunStatus transition rules ---

RUN_VALID_TRANSITIONS: dict[RunStatus, frozenset[RunStatus]] = {
    RunStatus.PENDING: frozenset({
        RunStatus.RUNNING,
        RunStatus.CANCELLED,
    }),
    RunStatus.RUNNING: frozenset({
        RunStatus.SUCCESS,
        RunStatus.FAILED,
        RunStatus.CANCELLED,
    }),
    RunStatus.SUCCESS: frozenset(),  # terminal
    RunStatus.FAILED: frozenset(),  # terminal
    RunStatus.CANCELLED: frozenset(),  # terminal
}


def validate_run_transition(current: RunStatus, target: RunStatus) -> None:
    """Raise :class:`InvalidTransitionError` if *current → target* is illegal.

    Same-state requests are illegal too; there are no no-op transitions.

    Example:
        >>> validate_run_transition(RunStatus.RUNNING, RunStatus.SUCCESS)
        >>> validate_run_transition(RunStatus.SUCCESS, RunStatus.RUNNING)
        Traceback (most recent call last):
        ...
        InvalidTransitionError: Invalid run status transition: SUCCESS → RUNNING
    """
    if target not in RUN_VALID_TRANSITIONS.get(current, frozenset()):
        raise InvalidTransitionError(current.value, target.value)


@dataclass
class Job:
    """A named job definition.

    ``archived`` is the soft-delete flag; archived jobs keep their id,
    their fields and their runs.
    """

    id: int
    name: str
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    type: str | None = None
    archived: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "type": self.type,
            "archived": self.archived,
            "created_at": to_iso8601(self.created_at),
            "updated_at": to_iso8601(self.updated_at),
        }


@dataclass
class JobRun:
    """One execution attempt of a :class:`Job`.

    ``started_at``, ``finished_at`` and ``cancelled_at`` are written once by
    the transition that owns them and never rewritten.  ``metadata`` is
    ``None`` until something is supplied.
    """

    id: int
    job_id: int
    status: RunStatus
    created_at: datetime
    started_at: datetime | None = None
    finished_at: datetime | None = None
    cancelled_at: datetime | None = None
    error_message: str | None = None
    metadata: dict[str, Any] | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @property
    def duration_seconds(self) -> float | None:
        """Seconds from start to finish, when both are known."""
        if self.started_at and self.finished_at:
            return (self.finished_at - self.started_at).total_seconds()
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "job_id": self.job_id,
            "status": self.status.value,
            "created_at": to_iso8601(self.created_at),
            "started_at": to_iso8601(self.started_at),
            "finished_at": to_iso8601(self.finished_at),
            "cancelled_at": to_iso8601(self.cancelled_at),
            "error_message": self.error_message,
            "metadata": dict(self.metadata) if self.metadata is not None else None,
        }
