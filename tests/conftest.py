from __future__ import annotations

from datetime import datetime, timezone

import pytest

from kqxs import create_app
from kqxs.repositories.history_repository import HistoryRepository
from kqxs.repositories.history_store import JsonFileHistoryStore
from kqxs.services.ingestion_service import IngestionService
from kqxs.services.scrape_client import ScrapeResult
from kqxs.services.statistics_service import StatisticsService

FIXED_NOW = datetime(2026, 10, 18, 3, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return FIXED_NOW


class FakeTransport:
    """Scrape transport returning a canned result (or raising)."""

    def __init__(self, result: ScrapeResult | None = None, error: Exception | None = None, on_fetch=None) -> None:
        self.result = result
        self.error = error
        self.on_fetch = on_fetch
        self.calls = 0

    def fetch(self) -> ScrapeResult:
        self.calls += 1
        if self.on_fetch is not None:
            self.on_fetch()
        if self.error is not None:
            raise self.error
        assert self.result is not None
        return self.result


class FakeScheduler:
    def __init__(self) -> None:
        self.job = None
        self.started = 0
        self.stopped = 0

    def start(self, job) -> None:
        self.started += 1
        self.job = job

    def stop(self) -> None:
        self.stopped += 1

    def tick(self):
        assert self.job is not None
        return self.job()


def scrape_result(top: str = "123456", tier7=("789",), tier8=("12",), url: str = "https://xsmn.me/") -> ScrapeResult:
    return ScrapeResult(
        timestamp="2026-10-18T03:00:00.000Z",
        source_url=url,
        top_number=top,
        tier7=tuple(tier7),
        tier8=tuple(tier8),
    )


@pytest.fixture()
def store(tmp_path):
    return JsonFileHistoryStore(tmp_path / "history.json")


@pytest.fixture()
def repository(store):
    return HistoryRepository(store)


@pytest.fixture()
def transport():
    return FakeTransport(result=scrape_result())


@pytest.fixture()
def ingestion(repository, transport):
    return IngestionService(repository, transport, clock=fixed_clock)


@pytest.fixture()
def statistics(repository):
    return StatisticsService(repository)


@pytest.fixture()
def app(tmp_path, monkeypatch):
    fake = FakeTransport(result=scrape_result())
    monkeypatch.setattr("kqxs.extensions.HttpScrapeClient", lambda *args, **kwargs: fake)
    app = create_app(
        {
            "TESTING": True,
            "AUTO_CRAWL": False,
            "HISTORY_BACKEND": "json",
            "HISTORY_PATH": str(tmp_path / "history.json"),
        }
    )
    app.extensions["test.transport"] = fake
    return app


@pytest.fixture()
def client(app):
    return app.test_client()


__all__ = ["FakeScheduler", "FakeTransport", "fixed_clock", "scrape_result"]
