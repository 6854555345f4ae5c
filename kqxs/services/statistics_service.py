"""Loto (last-two-digit) frequency statistics over the history log."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from kqxs.models.history_record import HistoryRecord
from kqxs.repositories.history_repository import HistoryRepository
from kqxs.services.station_matcher import resolve_record_station
from kqxs.utils.text import last_two_digits, vietnamese_sort_key


@dataclass(frozen=True)
class StatisticsEntry:
    number: str
    count: int
    station: str | None = None


@dataclass(frozen=True)
class StationStatistics:
    station: str
    top: list[StatisticsEntry]


class StatisticsService:
    """Compute top loto counts, overall and per station.

    Nothing is cached: every call re-reads the log.
    """

    def __init__(self, repository: HistoryRepository) -> None:
        self._repo = repository

    @staticmethod
    def _loto_keys(record: HistoryRecord) -> list[str]:
        return [last_two_digits(n) for n in record.counted_numbers()]

    @staticmethod
    def count_overall(records: Sequence[HistoryRecord]) -> Counter[str]:
        counter: Counter[str] = Counter()
        for record in records:
            counter.update(StatisticsService._loto_keys(record))
        return counter

    @staticmethod
    def count_by_station(records: Sequence[HistoryRecord]) -> dict[str, Counter[str]]:
        counters: dict[str, Counter[str]] = {}
        for record in records:
            keys = StatisticsService._loto_keys(record)
            if not keys:
                continue
            station = resolve_record_station(record)
            counters.setdefault(station, Counter()).update(keys)
        return counters

    def top_overall(self, limit: int = 10) -> list[StatisticsEntry]:
        """Most frequent loto keys across all stations.

        Ties keep the order in which keys were first seen.
        """

        counter = self.count_overall(self._repo.list_records())
        return [StatisticsEntry(number=k, count=c) for k, c in counter.most_common(max(0, int(limit)))]

    def top_by_station(self, limit: int = 10) -> list[StationStatistics]:
        """Top loto keys for every station, stations in Vietnamese name order."""

        limit = max(1, int(limit))
        counters = self.count_by_station(self._repo.list_records())

        out = [
            StationStatistics(
                station=station,
                top=[
                    StatisticsEntry(number=k, count=c, station=station)
                    for k, c in counter.most_common(limit)
                ],
            )
            for station, counter in counters.items()
            if counter
        ]
        out.sort(key=lambda s: vietnamese_sort_key(s.station))
        return out
