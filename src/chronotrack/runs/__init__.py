from chronotrack.runs.engine import RunLifecycleEngine

__all__ = ["RunLifecycleEngine"]
