"""Engine services bound to the Flask app.

One history store, repository and ingestion coordinator per app, kept in
``app.extensions``.
"""

from __future__ import annotations

import logging

from flask import Flask, current_app

from kqxs.db import create_history_store, get_history_backend
from kqxs.repositories.history_repository import HistoryRepository
from kqxs.services.context_service import ContextService
from kqxs.services.ingestion_service import IngestionService
from kqxs.services.scheduler import IntervalScheduler
from kqxs.services.scrape_client import HttpScrapeClient
from kqxs.services.statistics_service import StatisticsService

logger = logging.getLogger(__name__)

_INGESTION = "kqxs.ingestion"
_STATISTICS = "kqxs.statistics"
_CONTEXT = "kqxs.context"


def init_ingestion(app: Flask) -> None:
    """Create the history store and the services that use it."""

    store = create_history_store(app.config)
    repository = HistoryRepository(store)
    transport = HttpScrapeClient(
        str(app.config["KQXS_URL"]),
        timeout_seconds=float(app.config.get("SCRAPE_TIMEOUT_SECONDS", 60)),
        retries=int(app.config.get("SCRAPE_RETRIES", 2)),
    )
    ingestion = IngestionService(
        repository,
        transport,
        text_limit=int(app.config.get("MANUAL_TEXT_LIMIT", 6000)),
    )
    statistics = StatisticsService(repository)

    app.extensions[_INGESTION] = ingestion
    app.extensions[_STATISTICS] = statistics
    app.extensions[_CONTEXT] = ContextService(ingestion, statistics)
    logger.info("History backend: %s", get_history_backend(app.config))

    if app.config.get("AUTO_CRAWL"):
        ingestion.start_auto(IntervalScheduler(float(app.config.get("CRAWL_INTERVAL_SECONDS", 300))))


def get_ingestion_service() -> IngestionService:
    return current_app.extensions[_INGESTION]


def get_statistics_service() -> StatisticsService:
    return current_app.extensions[_STATISTICS]


def get_context_service() -> ContextService:
    return current_app.extensions[_CONTEXT]
