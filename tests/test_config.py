import logging

import pytest

from repurchase.config import DEFAULT_API_URL, load_config
from repurchase.logging import configure_logging, get_logger


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in [
        "REPURCHASE_SOURCE",
        "REPURCHASE_DEFAULT_DAYS",
        "REPURCHASE_API_URL",
        "HTTP_TIMEOUT_SECONDS",
        "TIMEZONE",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ]:
        monkeypatch.delenv(key, raising=False)


def test_defaults():
    config = load_config()

    assert config.source == "json"
    assert config.default_days_back == 30
    assert config.api_url == DEFAULT_API_URL
    assert config.http_timeout == 15.0
    assert config.timezone_name == "Europe/Stockholm"
    assert config.log_level == "INFO"
    assert config.log_format == "json"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("REPURCHASE_SOURCE", "HTML")
    monkeypatch.setenv("REPURCHASE_DEFAULT_DAYS", "7")
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "3.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("REPURCHASE_API_URL", "  ")

    config = load_config()

    assert config.source == "html"
    assert config.default_days_back == 7
    assert config.http_timeout == 3.5
    assert config.log_level == "DEBUG"
    assert config.api_url == DEFAULT_API_URL


@pytest.mark.parametrize(
    "key, value",
    [
        ("REPURCHASE_SOURCE", "csv"),
        ("REPURCHASE_DEFAULT_DAYS", "soon"),
        ("REPURCHASE_DEFAULT_DAYS", "-1"),
        ("HTTP_TIMEOUT_SECONDS", "fast"),
        ("TIMEZONE", "Mars/Olympus"),
        ("LOG_FORMAT", "xml"),
    ],
)
def test_invalid_values_raise(monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    with pytest.raises(ValueError):
        load_config()


def test_configure_logging_routes_events_through_stdlib(caplog):
    configure_logging("DEBUG", "console")
    with caplog.at_level(logging.WARNING, logger="repurchase.tests"):
        get_logger("repurchase.tests").warning("row_skipped", index=3)

    assert any("row_skipped" in record.getMessage() for record in caplog.records)
