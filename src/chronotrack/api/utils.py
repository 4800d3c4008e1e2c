"""
Shared API router utilities.

- ``_handle_error()`` — convert a failed OperationResult to a ``problem_response``
"""

from __future__ import annotations

from fastapi import Request

from chronotrack.api.middleware.errors import problem_response, status_for_error_code


def _handle_error(result, request: Request | None = None):
    """Convert a failed ``OperationResult`` into a Problem Details response.

    The error code picks the HTTP status and is echoed in ``errors[0].code``
    so clients can tell ``INVALID_TRANSITION`` from ``MISSING_ERROR_MESSAGE``.
    """
    error = result.error
    code = error.code if error else "INTERNAL"
    return problem_response(
        status=status_for_error_code(code),
        title=error.message if error else "Operation failed",
        instance=str(request.url.path) if request is not None else "",
        errors=[{"code": code, "message": error.message if error else ""}],
        extensions=error.details if error and error.details else None,
    )
