"""History store construction.

The JSON-file store is the default; ``HISTORY_BACKEND=sql`` keeps the log in
a SQL table through SQLAlchemy instead.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url

from kqxs.repositories.history_store import HistoryStore, JsonFileHistoryStore, SqlHistoryStore


def create_app_engine(database_url: str) -> Engine:
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        # The scheduler thread and request threads share the engine.
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            future=True,
        )
    return create_engine(database_url, pool_pre_ping=True, future=True)


def get_history_backend(config: Mapping[str, Any]) -> str:
    return str(config.get("HISTORY_BACKEND") or "json").lower().strip()


def create_history_store(config: Mapping[str, Any]) -> HistoryStore:
    """Build the configured history store."""

    backend = get_history_backend(config)
    if backend == "sql":
        return SqlHistoryStore(create_app_engine(str(config["DATABASE_URL"])))
    if backend == "json":
        return JsonFileHistoryStore(str(config.get("HISTORY_PATH") or "./history.json"))
    raise ValueError(f"Unsupported HISTORY_BACKEND: {backend!r} (expected 'json' or 'sql')")
