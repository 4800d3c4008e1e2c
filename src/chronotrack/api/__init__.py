"""
REST API layer for chronotrack.

Provides a FastAPI application factory whose endpoints delegate to the
operations layer (``chronotrack.ops``).  All business logic lives in ops;
this package handles only HTTP transport concerns: serialisation, error
mapping, and request context.

Quick start::

    from chronotrack.api import create_app

    app = create_app()  # ready for uvicorn
"""

from chronotrack.api.app import create_app

__all__ = ["create_app"]
