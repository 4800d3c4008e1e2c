"""
Error-handling middleware — maps ops-layer error codes to RFC 7807 responses.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from chronotrack.api.schemas.common import ErrorDetail, ProblemDetail
from chronotrack.core.logging import get_logger

logger = get_logger(__name__)

# ── Error code → HTTP status mapping ─────────────────────────────────────

ERROR_CODE_TO_STATUS: dict[str, int] = {
    "NOT_FOUND": 404,
    "JOB_NOT_FOUND": 404,
    "RUN_NOT_FOUND": 404,
    "VALIDATION_FAILED": 400,
    "MISSING_ERROR_MESSAGE": 400,
    "INVALID_TRANSITION": 409,
    "CONTENTION": 423,
    "INTERNAL": 500,
}


def status_for_error_code(code: str) -> int:
    """Resolve an ops error code to HTTP status, defaulting to 500."""
    return ERROR_CODE_TO_STATUS.get(code, 500)


def problem_response(
    *,
    status: int,
    title: str,
    detail: str = "",
    instance: str = "",
    errors: list[dict[str, Any]] | None = None,
    extensions: dict[str, Any] | None = None,
) -> JSONResponse:
    """Build a RFC 7807 JSON error response."""
    body = ProblemDetail(
        title=title,
        status=status,
        detail=detail,
        instance=instance,
        errors=[ErrorDetail(**e) for e in errors or []],
        context=extensions or {},
    )
    return JSONResponse(status_code=status, content=body.model_dump(mode="json"))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies and parameters become 400 ``VALIDATION_FAILED``."""
    errors = [
        {
            "code": "VALIDATION_FAILED",
            "message": err.get("msg", "Invalid value"),
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body") or None,
        }
        for err in exc.errors()
    ]
    logger.info("request_rejected", path=request.url.path, errors=len(errors))
    return problem_response(
        status=400,
        title="Request validation failed",
        instance=str(request.url.path),
        errors=errors,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions — returns 500 with ProblemDetail."""
    logger.exception("unhandled_exception", path=request.url.path, error=str(exc))
    return problem_response(
        status=500,
        title="Internal Server Error",
        detail=str(exc) if request.app.state.settings.debug else "An unexpected error occurred.",
        instance=str(request.url),
        errors=[{"code": "INTERNAL", "message": "Internal Server Error"}],
    )
