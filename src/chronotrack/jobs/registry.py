"""Job Registry — CRUD over Job records.

Lookups that miss (``get_by_id``, ``update``, ``archive`` on an unknown id)
return ``None``; only bad input raises.  Jobs are never deleted, archiving
just flips the ``archived`` flag.

ARCHITECTURE
────────────
::

    JobRegistry(store)
      ├── .create(name, description, type)  ─ allocate id, stamp timestamps
      ├── .list(include_archived)           ─ creation order
      ├── .get_by_id(job_id)                ─ copy or None
      ├── .update(job_id, **fields)         ─ locked read-modify-write
      └── .archive(job_id)                  ─ update(archived=True)
"""

from __future__ import annotations

from typing import Any

from chronotrack.core.errors import ValidationError
from chronotrack.core.logging import get_logger
from chronotrack.core.store import EntityKind, EntityStore
from chronotrack.core.timestamps import utc_now
from chronotrack.domain.models import Job

logger = get_logger(__name__)

UPDATABLE_FIELDS: frozenset[str] = frozenset({"name", "description", "type", "archived"})


def _require_name(name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Job name must be a non-empty string", field="name")
    return name


class JobRegistry:
    """Create, read, update and archive jobs."""

    def __init__(self, store: EntityStore):
        self._store = store

    def create(
        self,
        name: str,
        description: str | None = None,
        type: str | None = None,
    ) -> Job:
        """Create a job.

        Raises:
            ValidationError: If *name* is empty or blank.
        """
        _require_name(name)
        now = utc_now()
        job = Job(
            id=self._store.allocate(EntityKind.JOB),
            name=name,
            description=description,
            type=type,
            archived=False,
            created_at=now,
            updated_at=now,
        )
        self._store.put(EntityKind.JOB, job.id, job)
        logger.info("job_created", job_id=job.id, name=job.name)
        return job

    def list(self, include_archived: bool = False) -> list[Job]:
        jobs = self._store.list(EntityKind.JOB)
        if include_archived:
            return jobs
        return [job for job in jobs if not job.archived]

    def get_by_id(self, job_id: int) -> Job | None:
        return self._store.get(EntityKind.JOB, job_id)

    def exists(self, job_id: int) -> bool:
        return self._store.get(EntityKind.JOB, job_id) is not None

    def update(self, job_id: int, **updates: Any) -> Job | None:
        """Apply a partial update and refresh ``updated_at``.

        Fields set to ``None`` clear optional fields (``description``,
        ``type``); ``name`` and ``archived`` cannot be cleared.

        Returns:
            The updated job, or ``None`` if *job_id* is unknown.

        Raises:
            ValidationError: On unknown fields, an empty name or a
                non-boolean ``archived``.
            ContentionError: If the job stays locked past the timeout.
        """
        unknown = set(updates) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(
                f"Cannot update job field(s): {', '.join(sorted(unknown))}",
                details={"fields": sorted(unknown)},
            )
        if "name" in updates:
            _require_name(updates["name"])
        if "archived" in updates and not isinstance(updates["archived"], bool):
            raise ValidationError("archived must be a boolean", field="archived")

        with self._store.lock(EntityKind.JOB, job_id):
            job = self._store.get(EntityKind.JOB, job_id)
            if job is None:
                return None
            for key, value in updates.items():
                setattr(job, key, value)
            job.updated_at = utc_now()
            self._store.put(EntityKind.JOB, job_id, job)

        logger.info("job_updated", job_id=job_id, fields=sorted(updates))
        return job

    def archive(self, job_id: int) -> Job | None:
        """Soft-delete a job.  Returns ``None`` if *job_id* is unknown."""
        return self.update(job_id, archived=True)
