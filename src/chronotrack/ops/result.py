"""
Operation result envelope.

Provides :class:`OperationResult` — a typed success/failure envelope that
every operation function returns.  It is designed for API/CLI consumers and
carries *warnings*, *elapsed_ms*, and *metadata* alongside the payload.
Engine exceptions are folded in with :meth:`OperationResult.from_error`, so
callers branch on ``result.error.code`` instead of catching.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, TypeVar

from chronotrack.core.errors import ChronoError, ErrorCategory

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class OperationError:
    """Structured error detail for failed operations.

    Attributes:
        code: Machine-readable code (``NOT_FOUND``, ``INVALID_TRANSITION``, …).
        message: Human-readable description of the error.
        category: Optional :class:`ErrorCategory` for routing/alerting.
        details: Extra key/value context (statuses, ids, field names).
        retryable: Whether the caller should retry the operation.
    """

    code: str
    message: str
    category: ErrorCategory | None = None
    details: dict[str, Any] = field(default_factory=dict)
    retryable: bool = False


@dataclass
class OperationResult[T]:
    """Envelope returned by every operation function.

    Factory methods :meth:`ok`, :meth:`fail` and :meth:`from_error` should
    be used instead of the constructor directly.
    """

    success: bool
    data: T | None = None
    error: OperationError | None = None
    warnings: list[str] = field(default_factory=list)
    elapsed_ms: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict)

    # ------------------------------------------------------------------ #
    # Factory helpers
    # ------------------------------------------------------------------ #

    @classmethod
    def ok(
        cls,
        data: T,
        *,
        warnings: list[str] | None = None,
        elapsed_ms: float = 0.0,
        metadata: dict[str, Any] | None = None,
    ) -> OperationResult[T]:
        """Create a successful result."""
        return cls(
            success=True,
            data=data,
            warnings=warnings or [],
            elapsed_ms=elapsed_ms,
            metadata=metadata or {},
        )

    @classmethod
    def fail(
        cls,
        code: str,
        message: str,
        *,
        category: ErrorCategory | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
        warnings: list[str] | None = None,
        elapsed_ms: float = 0.0,
        metadata: dict[str, Any] | None = None,
    ) -> OperationResult[T]:
        """Create a failed result."""
        return cls(
            success=False,
            error=OperationError(
                code=code,
                message=message,
                category=category,
                details=details or {},
                retryable=retryable,
            ),
            warnings=warnings or [],
            elapsed_ms=elapsed_ms,
            metadata=metadata or {},
        )

    @classmethod
    def from_error(cls, exc: ChronoError, *, elapsed_ms: float = 0.0) -> OperationResult[T]:
        """Translate a :class:`ChronoError` into a failed result."""
        return cls.fail(
            exc.code,
            exc.message,
            category=exc.category,
            details=exc.details,
            retryable=exc.retryable,
            elapsed_ms=elapsed_ms,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict (for JSON responses)."""
        d: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            d["data"] = self.data.to_dict() if hasattr(self.data, "to_dict") else self.data
        if self.error is not None:
            d["error"] = {
                "code": self.error.code,
                "message": self.error.message,
                "retryable": self.error.retryable,
            }
            if self.error.details:
                d["error"]["details"] = self.error.details
        if self.warnings:
            d["warnings"] = self.warnings
        if self.elapsed_ms:
            d["elapsed_ms"] = round(self.elapsed_ms, 2)
        if self.metadata:
            d["metadata"] = self.metadata
        return d


@dataclass
class PagedResult(OperationResult[list[T]]):
    """Result for list operations.

    Lists are unpaginated; ``total`` is the number of items returned.
    """

    total: int = 0

    @classmethod
    def from_items(
        cls,
        items: list[T],
        *,
        warnings: list[str] | None = None,
        elapsed_ms: float = 0.0,
        metadata: dict[str, Any] | None = None,
    ) -> PagedResult[T]:
        return cls(
            success=True,
            data=items,
            total=len(items),
            warnings=warnings or [],
            elapsed_ms=elapsed_ms,
            metadata=metadata or {},
        )

    def to_dict(self) -> dict[str, Any]:
        d = super().to_dict()
        if self.data is not None:
            d["data"] = [i.to_dict() if hasattr(i, "to_dict") else i for i in self.data]
        d["total"] = self.total
        return d


# ------------------------------------------------------------------ #
# Timing helper
# ------------------------------------------------------------------ #


class _Timer:
    """Minimal stopwatch for timing operations."""

    __slots__ = ("_start",)

    def __init__(self) -> None:
        self._start = time.perf_counter()

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self._start) * 1000


def start_timer() -> _Timer:
    """Return a lightweight timer.  Use ``timer.elapsed_ms`` when done."""
    return _Timer()
