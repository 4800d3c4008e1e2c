"""Tests for chronotrack.core.locks.KeyedLockTable."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from chronotrack.core.errors import ContentionError
from chronotrack.core.locks import KeyedLockTable
from chronotrack.core.store import EntityKind


class TestKeyedLockTable:
    def test_hold_and_release(self):
        locks = KeyedLockTable()
        with locks.hold("a"):
            assert locks.is_locked("a")
        assert not locks.is_locked("a")

    def test_entries_are_dropped_when_idle(self):
        locks = KeyedLockTable()
        with locks.hold("a"):
            assert locks.active_keys() == ["a"]
        assert locks.active_keys() == []

    def test_timeout_raises_contention(self):
        locks = KeyedLockTable(default_timeout=0.05)
        holding = threading.Event()
        release = threading.Event()

        def holder():
            with locks.hold((EntityKind.RUN, 7)):
                holding.set()
                release.wait(5)

        t = threading.Thread(target=holder)
        t.start()
        holding.wait(5)
        try:
            with pytest.raises(ContentionError) as exc_info:
                with locks.hold((EntityKind.RUN, 7)):
                    pass
            assert exc_info.value.key == "run:7"
            assert exc_info.value.retryable is True
        finally:
            release.set()
            t.join(5)
        assert locks.active_keys() == []

    def test_explicit_timeout_overrides_default(self):
        locks = KeyedLockTable(default_timeout=60)
        with locks.hold("k"):
            with ThreadPoolExecutor(max_workers=1) as pool:
                future = pool.submit(lambda: locks.hold("k", timeout=0.01).__enter__())
                with pytest.raises(ContentionError):
                    future.result(timeout=5)

    def test_not_reentrant(self):
        locks = KeyedLockTable(default_timeout=0.01)
        with locks.hold("k"):
            with pytest.raises(ContentionError):
                with locks.hold("k"):
                    pass

    def test_serializes_critical_sections(self):
        locks = KeyedLockTable(default_timeout=5)
        counter = {"value": 0}

        def bump(_):
            with locks.hold("counter"):
                current = counter["value"]
                time.sleep(0.0005)
                counter["value"] = current + 1

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(bump, range(100)))
        assert counter["value"] == 100
        assert locks.active_keys() == []
