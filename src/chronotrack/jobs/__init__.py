from chronotrack.jobs.registry import JobRegistry

__all__ = ["JobRegistry"]
