"""
Request-scoped context for operations.

Every operation function receives an :class:`OperationContext` as its first
argument.  The context carries the shared :class:`Services` (registry and
engine over one store), the request id, and the caller name.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from chronotrack.core.store import EntityStore, InMemoryEntityStore
from chronotrack.jobs.registry import JobRegistry
from chronotrack.runs.engine import RunLifecycleEngine


@dataclass(frozen=True)
class Services:
    """The process-wide engine components, wired over a single store."""

    store: EntityStore
    jobs: JobRegistry
    runs: RunLifecycleEngine

    @classmethod
    def from_store(cls, store: EntityStore) -> Services:
        jobs = JobRegistry(store)
        return cls(store=store, jobs=jobs, runs=RunLifecycleEngine(store, jobs))

    @classmethod
    def in_memory(cls, lock_timeout: float = 5.0) -> Services:
        return cls.from_store(InMemoryEntityStore(lock_timeout=lock_timeout))


@dataclass
class OperationContext:
    """Context passed to every operation function.

    Attributes:
        services: Shared registry and engine.
        request_id: Unique ID for this operation invocation (auto-generated).
        caller: Origin of the request — ``"api"``, ``"cli"``, ``"sdk"``, ``"test"``.
        metadata: Arbitrary key/value pairs forwarded to logging.
    """

    services: Services
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    caller: str = "sdk"
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def jobs(self) -> JobRegistry:
        return self.services.jobs

    @property
    def runs(self) -> RunLifecycleEngine:
        return self.services.runs
