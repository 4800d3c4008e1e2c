"""
chronotrack - job and job-run lifecycle tracking.

- chronotrack.core: errors, logging, settings, storage, locks
- chronotrack.domain: Job / JobRun records and the run state machine
- chronotrack.jobs: Job Registry
- chronotrack.runs: Run Lifecycle Engine
- chronotrack.ops: operation functions (the service facade)
- chronotrack.api: FastAPI transport
- chronotrack.cli: Typer CLI
"""

__version__ = "0.1.0"
