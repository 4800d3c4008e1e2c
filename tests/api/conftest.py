"""Fixtures for API tests: a fresh app and TestClient per test."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from chronotrack.api.app import create_app
from chronotrack.core.settings import ChronoSettings

PREFIX = "/api/v1"


@pytest.fixture
def settings() -> ChronoSettings:
    return ChronoSettings(_env_file=None, lock_timeout_s=0.5, json_logs=True, log_level="WARNING")


@pytest.fixture
def app(settings):
    return create_app(settings=settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def created_job(client) -> dict:
    resp = client.post(f"{PREFIX}/jobs", json={"name": "nightly-export", "type": "batch"})
    assert resp.status_code == 201
    return resp.json()["data"]
