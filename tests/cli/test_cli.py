"""Tests for the chronotrack CLI."""

from typer.testing import CliRunner

from chronotrack import __version__
from chronotrack.cli.app import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"chronotrack {__version__}" in result.output


def test_transitions_table():
    result = runner.invoke(app, ["transitions"])
    assert result.exit_code == 0
    for status in ("PENDING", "RUNNING", "SUCCESS", "FAILED", "CANCELLED"):
        assert status in result.output
    assert "terminal" in result.output


def test_serve_uses_settings(monkeypatch):
    calls = {}

    def fake_run(target, **kwargs):
        calls["target"] = target
        calls.update(kwargs)

    monkeypatch.setattr("uvicorn.run", fake_run)
    monkeypatch.setenv("CHRONO_PORT", "4123")
    from chronotrack.core.settings import get_settings

    get_settings.cache_clear()
    try:
        result = runner.invoke(app, ["serve", "--host", "127.0.0.1"])
    finally:
        get_settings.cache_clear()
    assert result.exit_code == 0, result.output
    assert calls["target"] == "chronotrack.api:create_app"
    assert calls["factory"] is True
    assert calls["host"] == "127.0.0.1"
    assert calls["port"] == 4123
    assert calls["workers"] == 1
