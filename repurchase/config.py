"""Configuration loader for the repurchase client."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .logging import LOG_FORMATS

SOURCES = ("html", "json")


def _get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key)
    if value is not None:
        value = value.strip()
        if value == "":
            return default
        return value
    return default


def _get_int(key: str, default: int) -> int:
    value = _get_env(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {key} must be an integer") from exc


def _get_float(key: str, default: float) -> float:
    value = _get_env(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {key} must be a number") from exc


@dataclass(slots=True)
class AppConfig:
    html_url: str
    api_url: str
    cookie_url: str
    session_cookie: Optional[str]
    source: str
    default_days_back: int
    http_timeout: float
    http_user_agent: str
    timezone: ZoneInfo
    log_level: str
    log_format: str = "json"

    @property
    def timezone_name(self) -> str:
        return self.timezone.key


DEFAULT_HTML_URL = "https://www.nasdaqomxnordic.com/news/corporate-actions/repurchase-of-own-shares"
DEFAULT_API_URL = "https://api.nasdaq.com/api/nordic/corporate-actions/repurchase-of-own-shares"
DEFAULT_COOKIE_URL = "https://www.nasdaqomxnordic.com"
DEFAULT_SESSION_COOKIE = "53616c7465645f5f9d467d3ae831ec1b1e7289ef45d256224786e1ed13"
DEFAULT_USER_AGENT = "repurchase-client/1.0 (+https://www.nasdaqomxnordic.com/)"


def load_config() -> AppConfig:
    source = (_get_env("REPURCHASE_SOURCE", "json") or "json").lower()
    if source not in SOURCES:
        raise ValueError(f"REPURCHASE_SOURCE must be one of {', '.join(SOURCES)}")

    tz_name = _get_env("TIMEZONE", "Europe/Stockholm")
    try:
        timezone = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unable to load timezone '{tz_name}'") from exc

    log_format = (_get_env("LOG_FORMAT", "json") or "json").lower()
    if log_format not in LOG_FORMATS:
        raise ValueError(f"LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}")

    default_days_back = _get_int("REPURCHASE_DEFAULT_DAYS", 30)
    if default_days_back < 0:
        raise ValueError("REPURCHASE_DEFAULT_DAYS must not be negative")

    return AppConfig(
        html_url=_get_env("REPURCHASE_HTML_URL", DEFAULT_HTML_URL),
        api_url=_get_env("REPURCHASE_API_URL", DEFAULT_API_URL),
        cookie_url=_get_env("REPURCHASE_COOKIE_URL", DEFAULT_COOKIE_URL),
        session_cookie=_get_env("REPURCHASE_SESSION_COOKIE", DEFAULT_SESSION_COOKIE),
        source=source,
        default_days_back=default_days_back,
        http_timeout=max(1.0, _get_float("HTTP_TIMEOUT_SECONDS", 15.0)),
        http_user_agent=_get_env("HTTP_USER_AGENT", DEFAULT_USER_AGENT),
        timezone=timezone,
        log_level=_get_env("LOG_LEVEL", "INFO").upper(),
        log_format=log_format,
    )
