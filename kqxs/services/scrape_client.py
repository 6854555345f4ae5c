"""HTTP transport for the scheduled result crawl.

Fetches the configured results page and reads the special, 7th and 8th prize
cells (``.giai-db``, ``.giai-7``, ``.giai-8``), digits only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import requests
from bs4 import BeautifulSoup
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from kqxs.errors import ScrapeError
from kqxs.utils.clock import Clock, to_iso, utc_now
from kqxs.utils.text import clean_digits

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScrapeResult:
    timestamp: str
    source_url: str
    top_number: str
    tier7: tuple[str, ...] = ()
    tier8: tuple[str, ...] = ()


class ScrapeTransport(Protocol):
    def fetch(self) -> ScrapeResult: ...


def build_http_session(retries: int, backoff_factor: float) -> requests.Session:
    """Create a requests session with retry/backoff for transient network errors."""

    retry = Retry(
        total=retries,
        connect=retries,
        read=retries,
        status=retries,
        backoff_factor=backoff_factor,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET",),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)

    session = requests.Session()
    session.headers.update({"User-Agent": "Mozilla/5.0"})
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def extract_prize_fields(html: str) -> tuple[str, tuple[str, ...], tuple[str, ...]]:
    soup = BeautifulSoup(html, "html.parser")
    top = soup.select_one(".giai-db")
    top_number = clean_digits(top.get_text()) if top else ""
    tier7 = tuple(clean_digits(el.get_text()) for el in soup.select(".giai-7"))
    tier8 = tuple(clean_digits(el.get_text()) for el in soup.select(".giai-8"))
    return top_number, tier7, tier8


class HttpScrapeClient:
    """One time-bounded GET per crawl."""

    def __init__(
        self,
        url: str,
        *,
        timeout_seconds: float = 60,
        retries: int = 2,
        backoff_factor: float = 0.5,
        session: requests.Session | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout_seconds
        self._http = session or build_http_session(retries, backoff_factor)
        self._clock = clock or utc_now

    @property
    def url(self) -> str:
        return self._url

    def fetch(self) -> ScrapeResult:
        logger.info("Fetching %s", self._url)
        try:
            resp = self._http.get(self._url, timeout=self._timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise ScrapeError(message=f"Cannot fetch {self._url}", details=str(exc)) from exc

        top_number, tier7, tier8 = extract_prize_fields(resp.text)
        return ScrapeResult(
            timestamp=to_iso(self._clock()),
            source_url=self._url,
            top_number=top_number,
            tier7=tier7,
            tier8=tier8,
        )
