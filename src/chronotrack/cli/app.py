"""
Root Typer application for the chronotrack CLI.

The store is in-memory and lives inside the API process, so the CLI only
starts the server and documents the run state machine.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from chronotrack.domain.models import RUN_VALID_TRANSITIONS, RunStatus

app = typer.Typer(
    name="chronotrack",
    help="chronotrack — job and job-run lifecycle tracking.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        from chronotrack import __version__

        typer.echo(f"chronotrack {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """chronotrack CLI — serve the API, inspect the run state machine."""


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", "-h", help="Bind address (default from CHRONO_HOST)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port (default from CHRONO_PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on changes"),
    log_level: str = typer.Option("info", "--log-level"),
) -> None:
    """Start the chronotrack REST API server.

    Runs a single worker: the in-memory store is per process.
    """
    import uvicorn

    from chronotrack.core.settings import get_settings

    settings = get_settings()
    bind_host = host or settings.host
    bind_port = port or settings.port
    console.print(f"[bold green]Starting chronotrack API[/bold green] on {bind_host}:{bind_port}")
    uvicorn.run(
        "chronotrack.api:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        reload=reload,
        workers=1,
        log_level=log_level,
    )


@app.command()
def transitions() -> None:
    """Print the run status transition table."""
    table = Table(title="Run status transitions")
    table.add_column("From", style="cyan")
    table.add_column("Allowed targets")
    for status in RunStatus:
        targets = sorted(t.value for t in RUN_VALID_TRANSITIONS[status])
        table.add_row(status.value, ", ".join(targets) if targets else "[dim](terminal)[/dim]")
    console.print(table)
