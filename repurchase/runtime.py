"""Runtime wiring for CLI and library entrypoints."""

from __future__ import annotations

from dataclasses import dataclass

from .client import Repurchase
from .config import AppConfig, load_config
from .logging import configure_logging, get_logger
from .scraper import RepurchaseFetcher

logger = get_logger(__name__)


@dataclass(slots=True)
class Runtime:
    config: AppConfig
    fetcher: RepurchaseFetcher
    client: Repurchase

    def close(self) -> None:
        self.fetcher.close()

    def __enter__(self) -> "Runtime":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def build_runtime(config: AppConfig | None = None, source: str | None = None) -> Runtime:
    cfg = config or load_config()
    configure_logging(cfg.log_level, cfg.log_format)

    fetcher = RepurchaseFetcher(
        html_url=cfg.html_url,
        api_url=cfg.api_url,
        timeout=cfg.http_timeout,
        user_agent=cfg.http_user_agent,
        cookie_url=cfg.cookie_url,
        session_cookie=cfg.session_cookie,
    )
    client = Repurchase(fetcher, source=source or cfg.source, config=cfg)
    logger.debug(
        "runtime_ready",
        source=client.source.name,
        timezone=cfg.timezone_name,
        default_days_back=cfg.default_days_back,
    )

    return Runtime(config=cfg, fetcher=fetcher, client=client)
