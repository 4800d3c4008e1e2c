"""chronotrack command-line interface (``chronotrack``)."""

from chronotrack.cli.app import app

__all__ = ["app"]
