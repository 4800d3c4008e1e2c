"""Run Lifecycle Engine — the job-run state machine.

Manifesto:
Every run moves through a small, strict state machine.  The engine is the
only component allowed to change a run's status, and it does so under the
run's own lock so two racing callers can never both leave the same source
state.

ARCHITECTURE
────────────
::

    RunLifecycleEngine(store, jobs)
      ├── .create_run(job_id, initial_status, metadata)   ─ JobNotFoundError
      ├── .transition(run_id, target, ..., expected)      ─ RunNotFoundError,
      │                                                     InvalidTransitionError,
      │                                                     MissingErrorMessageError
      ├── .get_run(run_id)                                ─ copy or None
      ├── .list_runs_for_job(job_id)                      ─ creation order
      └── .annotate(run_id, patch)                        ─ metadata merge, any status

    Transition side effects:
      PENDING → RUNNING    started_at
      PENDING → CANCELLED  cancelled_at
      RUNNING → SUCCESS    finished_at
      RUNNING → FAILED     finished_at + error_message
      RUNNING → CANCELLED  cancelled_at

BEST PRACTICES
──────────────
- Do not write ``status`` on a stored run anywhere else; ``create_run``
  with an explicit ``initial_status`` is the single exception and is a
  starting point, not a transition.
- Timestamp fields are write-once; ``_apply_side_effects`` refuses to
  overwrite one that is already set.

Related modules:
    domain/models.py   — RunStatus, RUN_VALID_TRANSITIONS, JobRun
    jobs/registry.py   — parent-job existence check
    core/store.py      — storage and per-entity locks
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from chronotrack.core.errors import (
    InvalidTransitionError,
    JobNotFoundError,
    MissingErrorMessageError,
    RunNotFoundError,
    ValidationError,
)
from chronotrack.core.logging import get_logger
from chronotrack.core.store import EntityKind, EntityStore
from chronotrack.core.timestamps import ensure_utc, utc_now
from chronotrack.domain.models import JobRun, RunStatus, validate_run_transition
from chronotrack.jobs.registry import JobRegistry

logger = get_logger(__name__)

# Which write-once timestamp each target status stamps.
_TIMESTAMP_FIELD: dict[RunStatus, str] = {
    RunStatus.RUNNING: "started_at",
    RunStatus.SUCCESS: "finished_at",
    RunStatus.FAILED: "finished_at",
    RunStatus.CANCELLED: "cancelled_at",
}


def _check_metadata(metadata: Any, field: str = "metadata") -> dict[str, Any]:
    if not isinstance(metadata, Mapping):
        raise ValidationError(f"{field} must be a mapping of string keys", field=field)
    if not all(isinstance(key, str) for key in metadata):
        raise ValidationError(f"{field} keys must be strings", field=field)
    return dict(metadata)


class RunLifecycleEngine:
    """Creates runs and drives them through the status state machine."""

    def __init__(self, store: EntityStore, jobs: JobRegistry):
        self._store = store
        self._jobs = jobs

    # ------------------------------------------------------------------ #
    # Creation
    # ------------------------------------------------------------------ #

    def create_run(
        self,
        job_id: int,
        initial_status: RunStatus | str | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> JobRun:
        """Create a run for an existing job.

        An archived job still resolves, so runs can be recorded against it.

        Raises:
            JobNotFoundError: If *job_id* does not resolve.
            ValidationError: On an unknown status name or malformed metadata.
        """
        status = RunStatus.PENDING if initial_status is None else RunStatus.parse(initial_status)
        meta = _check_metadata(metadata) if metadata is not None else None

        if not self._jobs.exists(job_id):
            raise JobNotFoundError(job_id)

        run = JobRun(
            id=self._store.allocate(EntityKind.RUN),
            job_id=job_id,
            status=status,
            created_at=utc_now(),
            metadata=meta,
        )
        self._store.put(EntityKind.RUN, run.id, run)
        logger.info("run_created", run_id=run.id, job_id=job_id, status=status.value)
        return run

    # ------------------------------------------------------------------ #
    # State machine
    # ------------------------------------------------------------------ #

    def transition(
        self,
        run_id: int,
        target: RunStatus | str,
        *,
        timestamp: datetime | None = None,
        error_message: str | None = None,
        expected_status: RunStatus | str | None = None,
    ) -> JobRun:
        """Move a run to *target*, stamping the matching timestamp.

        Args:
            run_id: Run to transition.
            target: Requested status.
            timestamp: When the change happened; defaults to now (UTC).
            error_message: Required and non-empty when *target* is FAILED;
                ignored for every other target.
            expected_status: Source status the caller believes the run is in.
                When given and the run has already moved on, the request is
                rejected as an invalid transition from the actual status.

        Raises:
            RunNotFoundError: If *run_id* is unknown.
            InvalidTransitionError: If *current → target* is not legal, or
                the run is no longer in *expected_status*.
            MissingErrorMessageError: If *target* is FAILED without a message.
            ContentionError: If the run stays locked past the timeout.
        """
        target = RunStatus.parse(target)
        expected = RunStatus.parse(expected_status) if expected_status is not None else None
        at = ensure_utc(timestamp) if timestamp is not None else utc_now()

        with self._store.lock(EntityKind.RUN, run_id):
            run = self._store.get(EntityKind.RUN, run_id)
            if run is None:
                raise RunNotFoundError(run_id)

            if expected is not None and run.status is not expected:
                raise InvalidTransitionError(run.status.value, target.value)
            validate_run_transition(run.status, target)
            if target is RunStatus.FAILED and not (error_message and error_message.strip()):
                raise MissingErrorMessageError(run_id)

            previous = run.status
            run.status = target
            self._apply_side_effects(run, target, at, error_message)
            self._store.put(EntityKind.RUN, run_id, run)

        logger.info(
            "run_transitioned",
            run_id=run_id,
            job_id=run.job_id,
            from_status=previous.value,
            to_status=target.value,
        )
        return run

    @staticmethod
    def _apply_side_effects(
        run: JobRun,
        target: RunStatus,
        at: datetime,
        error_message: str | None,
    ) -> None:
        field = _TIMESTAMP_FIELD[target]
        if getattr(run, field) is None:
            setattr(run, field, at)
        if target is RunStatus.FAILED:
            run.error_message = error_message

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def get_run(self, run_id: int) -> JobRun | None:
        return self._store.get(EntityKind.RUN, run_id)

    def list_runs_for_job(self, job_id: int) -> list[JobRun]:
        """Runs of *job_id* in creation order; empty if there are none."""
        return [run for run in self._store.list(EntityKind.RUN) if run.job_id == job_id]

    # ------------------------------------------------------------------ #
    # Annotation
    # ------------------------------------------------------------------ #

    def annotate(self, run_id: int, patch: Mapping[str, Any]) -> JobRun:
        """Merge *patch* into the run's metadata.

        Keys in *patch* are added or overwritten; other keys are kept.
        Allowed in every status, terminal ones included.

        Raises:
            RunNotFoundError: If *run_id* is unknown.
            ValidationError: If *patch* is not a string-keyed mapping.
        """
        patch = _check_metadata(patch, field="patch")

        with self._store.lock(EntityKind.RUN, run_id):
            run = self._store.get(EntityKind.RUN, run_id)
            if run is None:
                raise RunNotFoundError(run_id)
            merged = dict(run.metadata or {})
            merged.update(patch)
            run.metadata = merged
            self._store.put(EntityKind.RUN, run_id, run)

        logger.debug("run_annotated", run_id=run_id, keys=sorted(patch))
        return run
