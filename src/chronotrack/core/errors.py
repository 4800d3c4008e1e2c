"""
Structured error types for chronotrack.

Every failure the lifecycle engine can raise is a :class:`ChronoError`
subclass carrying a machine-readable ``code``, an :class:`ErrorCategory`,
a ``retryable`` flag, and free-form ``details``.  The ops layer turns these
into :class:`~chronotrack.ops.result.OperationResult` failures and the API
layer turns those into RFC 7807 responses.

Manifesto:
    - **Typed hierarchy:** one class per failure kind, never a bare Exception
    - **Hard vs soft failures:** lookups return ``None``; only state-machine
      violations, referential breaks and lock contention raise
    - **Rich context:** ``InvalidTransitionError`` carries both statuses

Architecture:
    ::

        ┌────────────────────────────────────────────────────────┐
        │                     ChronoError                         │
        │          (code, category, retryable, details)           │
        ├────────────────────────────────────────────────────────┤
        │  ValidationError          MissingErrorMessageError      │
        │  (VALIDATION)             (VALIDATION)                  │
        │                                                         │
        │  JobNotFoundError         RunNotFoundError              │
        │  (NOT_FOUND)              (NOT_FOUND)                   │
        │                                                         │
        │  InvalidTransitionError   ContentionError               │
        │  (STATE)                  (CONCURRENCY, retryable)      │
        └────────────────────────────────────────────────────────┘

Examples:
    >>> err = InvalidTransitionError("SUCCESS", "RUNNING")
    >>> err.code
    'INVALID_TRANSITION'
    >>> err.details
    {'current': 'SUCCESS', 'target': 'RUNNING'}

Tags:
    error-handling, exception-hierarchy, chronotrack, state-machine
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    VALIDATION = "VALIDATION"  # Bad input, missing required fields
    NOT_FOUND = "NOT_FOUND"  # Referenced entity does not exist
    STATE = "STATE"  # Illegal lifecycle transition
    CONCURRENCY = "CONCURRENCY"  # Lock timeouts
    INTERNAL = "INTERNAL"  # Bugs, unexpected state


class ChronoError(Exception):
    """Base class for all chronotrack errors.

    Attributes:
        message: Human-readable description.
        code: Machine-readable code, stable across releases.
        category: :class:`ErrorCategory` used for routing.
        retryable: Whether repeating the same call may succeed.
        details: Extra structured context (ids, statuses).
        cause: Underlying exception, if any.
    """

    default_code: str = "INTERNAL"
    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        retryable: bool | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = self.default_code
        self.category = self.default_category
        self.retryable = self.default_retryable if retryable is None else retryable
        self.details: dict[str, Any] = dict(details or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logging and API responses."""
        result: dict[str, Any] = {
            "error_type": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        if self.details:
            result["details"] = dict(self.details)
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code!r})"


class ValidationError(ChronoError):
    """Input failed validation (empty job name, unknown status, ...)."""

    default_code = "VALIDATION_FAILED"
    default_category = ErrorCategory.VALIDATION

    def __init__(self, message: str, *, field: str | None = None, **kwargs: Any) -> None:
        details = kwargs.pop("details", None) or {}
        if field is not None:
            details.setdefault("field", field)
        super().__init__(message, details=details, **kwargs)
        self.field = field


class JobNotFoundError(ChronoError):
    """A run referenced a job id that does not resolve."""

    default_code = "JOB_NOT_FOUND"
    default_category = ErrorCategory.NOT_FOUND

    def __init__(self, job_id: int) -> None:
        super().__init__(f"Job {job_id} not found", details={"job_id": job_id})
        self.job_id = job_id


class RunNotFoundError(ChronoError):
    """A mutation targeted a run id that does not exist."""

    default_code = "RUN_NOT_FOUND"
    default_category = ErrorCategory.NOT_FOUND

    def __init__(self, run_id: int) -> None:
        super().__init__(f"Run {run_id} not found", details={"run_id": run_id})
        self.run_id = run_id


class InvalidTransitionError(ChronoError):
    """Raised when an illegal run status transition is attempted.

    Transition validation is strict.  If a legitimate transition is
    blocked, add it to ``RUN_VALID_TRANSITIONS`` explicitly.
    """

    default_code = "INVALID_TRANSITION"
    default_category = ErrorCategory.STATE

    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            f"Invalid run status transition: {current} → {target}",
            details={"current": current, "target": target},
        )
        self.current = current
        self.target = target


class MissingErrorMessageError(ChronoError):
    """Transition to FAILED was requested without a non-empty error message."""

    default_code = "MISSING_ERROR_MESSAGE"
    default_category = ErrorCategory.VALIDATION

    def __init__(self, run_id: int) -> None:
        super().__init__(
            f"Run {run_id}: an error message is required to mark the run FAILED",
            details={"run_id": run_id},
        )
        self.run_id = run_id


class ContentionError(ChronoError):
    """Exclusive access to an entity could not be obtained in time."""

    default_code = "CONTENTION"
    default_category = ErrorCategory.CONCURRENCY
    default_retryable = True

    def __init__(self, key: str, timeout: float) -> None:
        super().__init__(
            f"Timed out after {timeout:g}s waiting for lock on {key}",
            details={"key": key, "timeout_s": timeout},
        )
        self.key = key
        self.timeout = timeout


__all__ = [
    "ChronoError",
    "ContentionError",
    "ErrorCategory",
    "InvalidTransitionError",
    "JobNotFoundError",
    "MissingErrorMessageError",
    "RunNotFoundError",
    "ValidationError",
]
