"""Tests for chronotrack.core.settings."""

import pytest
from pydantic import ValidationError

from chronotrack.core.settings import ChronoSettings


class TestChronoSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CHRONO_LOCK_TIMEOUT_S", raising=False)
        settings = ChronoSettings(_env_file=None)
        assert settings.api_prefix == "/api/v1"
        assert settings.lock_timeout_s == 5.0
        assert settings.log_level == "INFO"
        assert settings.json_logs is None

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("CHRONO_LOCK_TIMEOUT_S", "2.5")
        monkeypatch.setenv("CHRONO_LOG_LEVEL", "debug")
        settings = ChronoSettings(_env_file=None)
        assert settings.lock_timeout_s == 2.5
        assert settings.log_level == "DEBUG"

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValidationError):
            ChronoSettings(_env_file=None, lock_timeout_s=0)
