"""Keyed lock table — one mutual-exclusion guard per entity.

WHY
───
Two request handlers transitioning the same run must serialize, but a
handler touching run 7 must never wait on one touching run 8.  A single
global lock would make every mutation contend; ``KeyedLockTable`` hands
out one ``threading.Lock`` per key and drops it again once nobody holds or
waits on it, so memory stays proportional to in-flight work.

ARCHITECTURE
────────────
::

    KeyedLockTable(default_timeout)
      ├── .hold(key, timeout)   ─ context manager, raises ContentionError
      ├── .is_locked(key)       ─ check without acquiring
      └── .active_keys()        ─ keys currently held or awaited

    Key convention: (EntityKind, id), e.g. (EntityKind.RUN, 42)

Example::

    locks = KeyedLockTable(default_timeout=5.0)
    with locks.hold((EntityKind.RUN, 1)):
        run = store.get(EntityKind.RUN, 1)
        ...
        store.put(EntityKind.RUN, 1, run)
"""

from __future__ import annotations

import threading
from collections.abc import Hashable, Iterator
from contextlib import contextmanager

from chronotrack.core.errors import ContentionError


class _Entry:
    __slots__ = ("lock", "refs")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.refs = 0


class KeyedLockTable:
    """Per-key exclusive locks with acquisition timeout.

    Not reentrant: a thread that already holds a key and asks for it again
    waits out the timeout and gets :class:`ContentionError`.
    """

    def __init__(self, default_timeout: float = 5.0):
        self.default_timeout = default_timeout
        self._guard = threading.Lock()
        self._entries: dict[Hashable, _Entry] = {}

    @contextmanager
    def hold(self, key: Hashable, timeout: float | None = None) -> Iterator[None]:
        """Hold the lock for *key* for the duration of the ``with`` block.

        Args:
            key: Any hashable identifying the guarded entity.
            timeout: Seconds to wait; ``None`` uses ``default_timeout``.

        Raises:
            ContentionError: If the lock was not acquired in time.
        """
        wait = self.default_timeout if timeout is None else timeout
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _Entry()
            entry.refs += 1

        acquired = entry.lock.acquire(timeout=wait)
        try:
            if not acquired:
                raise ContentionError(_describe(key), wait)
            yield
        finally:
            if acquired:
                entry.lock.release()
            with self._guard:
                entry.refs -= 1
                if entry.refs == 0:
                    del self._entries[key]

    def is_locked(self, key: Hashable) -> bool:
        """Check whether *key* is currently held."""
        with self._guard:
            entry = self._entries.get(key)
            return entry is not None and entry.lock.locked()

    def active_keys(self) -> list[Hashable]:
        """Keys that are held or have waiters."""
        with self._guard:
            return list(self._entries)


def _describe(key: Hashable) -> str:
    if isinstance(key, tuple):
        return ":".join(str(getattr(part, "value", part)) for part in key)
    return str(key)
