"""
Common API schemas — shared envelopes and RFC 7807 errors.

Every endpoint returns either :class:`SuccessResponse` / :class:`ListResponse`
(2xx) or :class:`ProblemDetail` (4xx/5xx).

Response Envelope Conventions:
    - All 2xx responses use ``SuccessResponse[T]`` or ``ListResponse[T]``
    - All 4xx/5xx responses use ``ProblemDetail`` (RFC 7807)
    - ``elapsed_ms`` tracks server-side processing time
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


# ── RFC 7807 Problem Detail ─────────────────────────────────────────────


class ErrorDetail(BaseModel):
    """Structured error detail; ``code`` is the ops-layer error code."""

    code: str = Field(description="Machine-readable error code (e.g., 'INVALID_TRANSITION')")
    message: str = Field(description="Human-readable error description")
    field: str | None = Field(default=None, description="Field path if error is field-specific")


class ProblemDetail(BaseModel):
    """RFC 7807 «Problem Details for HTTP APIs».

    Error Codes:
        - ``NOT_FOUND`` / ``JOB_NOT_FOUND`` / ``RUN_NOT_FOUND`` (404)
        - ``VALIDATION_FAILED`` / ``MISSING_ERROR_MESSAGE`` (400)
        - ``INVALID_TRANSITION`` (409): ``context`` carries current/target
        - ``CONTENTION`` (423): entity lock timed out, retry later
        - ``INTERNAL`` (500): Unexpected server error

    Example:
        {
            "type": "about:blank",
            "title": "Invalid run status transition: SUCCESS → RUNNING",
            "status": 409,
            "detail": "",
            "instance": "/api/v1/runs/1/transition",
            "errors": [{"code": "INVALID_TRANSITION", "message": "...", "field": null}],
            "context": {"current": "SUCCESS", "target": "RUNNING"}
        }
    """

    type: str = Field(default="about:blank", description="Error type URI (usually 'about:blank')")
    title: str = Field(description="Short human-readable error summary")
    status: int = Field(description="HTTP status code (e.g., 400, 404, 500)")
    detail: str = Field(default="", description="Human-readable explanation of the error")
    instance: str = Field(default="", description="URI of the failing request")
    errors: list[ErrorDetail] = Field(
        default_factory=list,
        description="List of field-level or nested error details",
    )
    context: dict[str, Any] = Field(
        default_factory=dict,
        description="Structured error context (ids, statuses)",
    )


# ── Success Envelopes ────────────────────────────────────────────────────


class SuccessResponse(BaseModel, Generic[T]):
    """Standard success envelope for single-item responses."""

    data: T = Field(description="Response payload (type varies by endpoint)")
    elapsed_ms: float = Field(default=0.0, description="Server-side processing time in milliseconds")
    warnings: list[str] = Field(default_factory=list, description="Non-fatal warnings")


class ListResponse(BaseModel, Generic[T]):
    """Success envelope for list responses (unpaginated)."""

    data: list[T] = Field(description="All matching items")
    total: int = Field(description="Number of items in ``data``")
    elapsed_ms: float = Field(default=0.0, description="Server-side processing time in milliseconds")
    warnings: list[str] = Field(default_factory=list, description="Non-fatal warnings")
