"""
Entity store — keyed record storage with monotonic ID allocation.

The store is the only shared mutable resource in chronotrack.  It holds
Job and JobRun records keyed by integer id and knows nothing about either
record's rules; validation lives in the registry and the engine.

Manifesto:
    - **Pure storage:** allocate, put, get, list.  No business logic.
    - **No shared references:** records are copied on write and on every
      read, so callers cannot mutate stored state by side channel.
    - **Per-entity locking:** ``lock(kind, id)`` serializes
      read-modify-write on one entity without blocking the others.
    - **Pluggable:** anything satisfying :class:`EntityStore` can replace
      :class:`InMemoryEntityStore` (a networked backend may block inside
      ``get``/``put``; the lock contract still holds).

Architecture:
    ::

        EntityStore (Protocol)
          ├── allocate(kind)          ─ next id, strictly increasing, gap-free
          ├── put(kind, id, record)   ─ insert or replace (copied)
          ├── get(kind, id)           ─ copy of the record or None
          ├── list(kind)              ─ copies, insertion order
          └── lock(kind, id, timeout) ─ exclusive per-entity guard

        InMemoryEntityStore
          ├── dict per kind            (insertion-ordered)
          ├── counter per kind         (guarded by _alloc_lock)
          └── KeyedLockTable           (per-entity locks)

Tags:
    storage, in-memory, locking, chronotrack
"""

from __future__ import annotations

import copy
import threading
from contextlib import AbstractContextManager
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from chronotrack.core.locks import KeyedLockTable


class EntityKind(str, Enum):
    """Kinds of record the store holds; each has its own id counter."""

    JOB = "job"
    RUN = "run"


@runtime_checkable
class EntityStore(Protocol):
    """Storage contract used by the registry and the lifecycle engine."""

    def allocate(self, kind: EntityKind) -> int: ...

    def put(self, kind: EntityKind, entity_id: int, record: Any) -> None: ...

    def get(self, kind: EntityKind, entity_id: int) -> Any | None: ...

    def list(self, kind: EntityKind) -> list[Any]: ...

    def lock(
        self, kind: EntityKind, entity_id: int, timeout: float | None = None
    ) -> AbstractContextManager[None]: ...


class InMemoryEntityStore:
    """Process-local :class:`EntityStore`.

    Example:
        >>> store = InMemoryEntityStore()
        >>> store.allocate(EntityKind.JOB)
        1
        >>> store.allocate(EntityKind.RUN)
        1
    """

    def __init__(self, lock_timeout: float = 5.0):
        self._records: dict[EntityKind, dict[int, Any]] = {kind: {} for kind in EntityKind}
        self._counters: dict[EntityKind, int] = {kind: 0 for kind in EntityKind}
        self._alloc_lock = threading.Lock()
        self._data_lock = threading.Lock()
        self._locks = KeyedLockTable(default_timeout=lock_timeout)

    def allocate(self, kind: EntityKind) -> int:
        """Return the next unused id for *kind*."""
        with self._alloc_lock:
            self._counters[kind] += 1
            return self._counters[kind]

    def put(self, kind: EntityKind, entity_id: int, record: Any) -> None:
        snapshot = copy.deepcopy(record)
        with self._data_lock:
            self._records[kind][entity_id] = snapshot

    def get(self, kind: EntityKind, entity_id: int) -> Any | None:
        with self._data_lock:
            record = self._records[kind].get(entity_id)
        return copy.deepcopy(record) if record is not None else None

    def list(self, kind: EntityKind) -> list[Any]:
        with self._data_lock:
            records = list(self._records[kind].values())
        return [copy.deepcopy(r) for r in records]

    def lock(
        self, kind: EntityKind, entity_id: int, timeout: float | None = None
    ) -> AbstractContextManager[None]:
        """Exclusive guard over one entity; raises ``ContentionError`` on timeout."""
        return self._locks.hold((kind, entity_id), timeout=timeout)

    def count(self, kind: EntityKind) -> int:
        with self._data_lock:
            return len(self._records[kind])
