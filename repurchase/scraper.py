"""HTTP access to the Nasdaq Nordic repurchase endpoints."""

from __future__ import annotations

import threading
from datetime import date, timedelta
from typing import Mapping, Optional
from urllib.parse import urlparse

import httpx

from .errors import FetchError
from .logging import get_logger

logger = get_logger(__name__)


class RepurchaseFetcher:
    """Fetches raw repurchase documents; parsing is left to the extractors.

    Content decoding (gzip, deflate) is handled by httpx. Failures are not
    retried here: any transport error or error status becomes a FetchError.
    """

    def __init__(
        self,
        html_url: str,
        api_url: str,
        timeout: float,
        user_agent: str,
        cookie_url: Optional[str] = None,
        session_cookie: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.html_url = html_url
        self.api_url = api_url
        self.timeout = timeout

        cookies = httpx.Cookies()
        if session_cookie:
            domain = urlparse(cookie_url or html_url).hostname or ""
            cookies.set("session", session_cookie, domain=domain, path="/")

        self._client = httpx.Client(
            timeout=timeout,
            headers={
                "User-Agent": user_agent,
                "Accept-Encoding": "gzip, deflate",
            },
            cookies=cookies,
            follow_redirects=True,
            transport=transport,
        )
        self._lock = threading.Lock()

    def __enter__(self) -> "RepurchaseFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        with self._lock:
            self._client.close()

    def fetch_table(self, start: date, end: date) -> str:
        """Return the HTML page listing repurchases between ``start`` and ``end`` inclusive."""
        # the site treats endDate as exclusive
        link_params = (
            "?subsystem=Repurchase&action=getByDate"
            f"&startDate={start.isoformat()}&endDate={(end + timedelta(days=1)).isoformat()}"
        )
        form = {
            "linkparams": link_params,
            "sort": "date",
            "selected": "",
            "languageId": "",
        }
        logger.info("fetch_table", url=self.html_url, start=str(start), end=str(end))
        return self._send("POST", self.html_url, data=form)

    def fetch_year(self, year: int) -> str:
        """Return the JSON document holding every repurchase disclosed during ``year``."""
        logger.info("fetch_year", url=self.api_url, year=year)
        return self._send("GET", self.api_url, params={"year": str(year)})

    def _send(
        self,
        method: str,
        url: str,
        data: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, str]] = None,
    ) -> str:
        try:
            with self._lock:
                response = self._client.request(method, url, data=data, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.error("fetch_failed", url=url, status=status)
            raise FetchError(f"Response http status code: {status}", url=url, status_code=status) from exc
        except httpx.HTTPError as exc:
            logger.error("fetch_failed", url=url, error=str(exc))
            raise FetchError(f"Request to {url} failed: {exc}", url=url) from exc
        return response.text
