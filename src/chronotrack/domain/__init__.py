from chronotrack.domain.models import (
    RUN_VALID_TRANSITIONS,
    Job,
    JobRun,
    RunStatus,
    validate_run_transition,
)

__all__ = [
    "RUN_VALID_TRANSITIONS",
    "Job",
    "JobRun",
    "RunStatus",
    "validate_run_transition",
]
