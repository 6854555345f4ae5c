"""Read-only JSON projection of history and statistics for chat assistants."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from kqxs.catalog import UNKNOWN_STATION
from kqxs.models.history_record import HistoryRecord
from kqxs.schemas.history import StationStatisticsSchema
from kqxs.services.ingestion_service import IngestionService
from kqxs.services.statistics_service import StatisticsService
from kqxs.utils.text import clean_digits

MAX_COMPACT_NUMBERS = 40


def _digits(values: Any) -> list[str]:
    return [d for d in (clean_digits(v) for v in values) if d]


def compact_record(record: HistoryRecord) -> dict[str, Any]:
    """Small summary of one record: station, date and the drawn numbers."""

    ticket = record.ticket
    station = ((ticket.station if ticket else "") or record.station).strip() or UNKNOWN_STATION
    return {
        "station": station,
        "drawDate": (ticket.draw_date if ticket else None) or "",
        "db": clean_digits((ticket.top_number if ticket else "") or record.top_number),
        "g7": _digits(ticket.tier7 if ticket else record.tier7),
        "g8": _digits(ticket.tier8 if ticket else record.tier8),
        "numbers": _digits(record.numbers)[:MAX_COMPACT_NUMBERS],
    }


@dataclass(frozen=True)
class ContextWindow:
    history_limit: int = 18
    latest_draws: int = 10
    top_limit: int = 3


class ContextService:
    def __init__(
        self,
        ingestion: IngestionService,
        statistics: StatisticsService,
        window: ContextWindow | None = None,
    ) -> None:
        self._ingestion = ingestion
        self._statistics = statistics
        self._window = window or ContextWindow()
        self._stats_schema = StationStatisticsSchema(many=True)

    def build_chat_context(self) -> dict[str, Any]:
        history = self._ingestion.get_history(self._window.history_limit)
        top_by_station = self._statistics.top_by_station(self._window.top_limit)
        return {
            "latestDraws": [compact_record(r) for r in history[: self._window.latest_draws]],
            "topByStation": self._stats_schema.dump(top_by_station),
        }
