"""Tests for log level selection."""

import pytest
import structlog
from ordering.utils.logging import _renderer, add_context, clear_context, get_log_level


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("ENV", "ENVIRONMENT", "PROTEAN_ENV", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.mark.parametrize(
    "environment, level",
    [("production", "INFO"), ("staging", "INFO"), ("development", "DEBUG"), ("test", "WARNING"), ("other", "INFO")],
)
def test_level_follows_environment(monkeypatch, environment, level):
    monkeypatch.setenv("ENV", environment)
    assert get_log_level() == level


def test_protean_env_is_honoured(monkeypatch):
    monkeypatch.setenv("PROTEAN_ENV", "test")
    assert get_log_level() == "WARNING"


def test_explicit_level_wins(monkeypatch):
    monkeypatch.setenv("ENV", "production")
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    assert get_log_level() == "ERROR"


def test_defaults_to_development(monkeypatch):
    assert get_log_level() == "DEBUG"


@pytest.mark.parametrize("environment", ["production", "staging"])
def test_json_lines_outside_development(monkeypatch, environment):
    monkeypatch.setenv("ENV", environment)
    assert isinstance(_renderer(), structlog.processors.JSONRenderer)


def test_console_lines_in_development():
    assert isinstance(_renderer(), structlog.dev.ConsoleRenderer)


def test_context_is_bound_until_cleared():
    clear_context()
    add_context(method="GET", path="/orders")
    assert structlog.contextvars.get_contextvars() == {"method": "GET", "path": "/orders"}

    clear_context()
    assert structlog.contextvars.get_contextvars() == {}
