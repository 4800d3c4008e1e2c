"""
Shared pytest fixtures for chronotrack tests.

Every fixture builds a fresh in-memory store, so no test can observe
another's jobs, runs or id counters.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure chronotrack package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from chronotrack.core.store import InMemoryEntityStore
from chronotrack.domain.models import Job
from chronotrack.jobs.registry import JobRegistry
from chronotrack.ops.context import OperationContext, Services
from chronotrack.runs.engine import RunLifecycleEngine


@pytest.fixture
def store() -> InMemoryEntityStore:
    """Empty store with a short lock timeout so contention tests stay fast."""
    return InMemoryEntityStore(lock_timeout=0.5)


@pytest.fixture
def registry(store: InMemoryEntityStore) -> JobRegistry:
    return JobRegistry(store)


@pytest.fixture
def engine(store: InMemoryEntityStore, registry: JobRegistry) -> RunLifecycleEngine:
    return RunLifecycleEngine(store, registry)


@pytest.fixture
def job(registry: JobRegistry) -> Job:
    """A single job named ``nightly-export`` (id 1)."""
    return registry.create("nightly-export", description="Export the day's orders", type="batch")


@pytest.fixture
def services(store: InMemoryEntityStore) -> Services:
    return Services.from_store(store)


@pytest.fixture
def ctx(services: Services) -> OperationContext:
    """OperationContext over a fresh in-memory engine."""
    return OperationContext(services=services, caller="test")
