"""Tests for chronotrack.core.logging."""

import structlog

from chronotrack.core import logging as chrono_logging
from chronotrack.core.logging import LogContext, bind_context, clear_context


class TestProcessors:
    def test_service_name_is_stamped(self):
        chrono_logging.configure_logging(level="INFO", json_format=True, service="chronotrack-test")
        try:
            event = chrono_logging._add_service_metadata(None, "info", {"event": "x"})
            assert event["service.name"] == "chronotrack-test"
        finally:
            structlog.reset_defaults()

    def test_ecs_field_names(self):
        event = chrono_logging._elasticsearch_compatible(
            None, "info", {"event": "x", "timestamp": "2026-01-01T00:00:00Z", "level": "info"}
        )
        assert event == {"event": "x", "@timestamp": "2026-01-01T00:00:00Z", "log.level": "info"}


class TestLogContext:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_binds_and_unbinds(self):
        with LogContext(request_id="req-1"):
            assert structlog.contextvars.get_contextvars()["request_id"] == "req-1"
        assert "request_id" not in structlog.contextvars.get_contextvars()

    def test_leaves_other_keys_alone(self):
        bind_context(caller="test")
        with LogContext(request_id="req-2"):
            pass
        assert structlog.contextvars.get_contextvars() == {"caller": "test"}

