"""Ingestion entry points: crawl, manual paste, history read and clear.

Writes to the history log go through a single-flight guard. A request that
arrives while another ingestion is running is skipped, not queued.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlparse

from kqxs.catalog import UNKNOWN_STATION
from kqxs.errors import AppError, ConflictError, ValidationError
from kqxs.models.history_record import (
    SOURCE_AUTO_CRAWL,
    SOURCE_MANUAL_COPY,
    SOURCE_MANUAL_SCAN,
    HistoryRecord,
)
from kqxs.models.ticket import ParsedTicket, PrizeRow, StationHint
from kqxs.repositories.history_repository import HistoryRepository
from kqxs.services import prize_parser, station_splitter
from kqxs.services.scheduler import Scheduler
from kqxs.services.scrape_client import ScrapeResult, ScrapeTransport
from kqxs.services.station_matcher import (
    detect_stations,
    infer_from_hint,
    parse_station,
    resolve_station_label,
)
from kqxs.utils.clock import Clock, to_iso, utc_now
from kqxs.utils.text import extract_digit_runs

logger = logging.getLogger(__name__)

DEFAULT_TEXT_LIMIT = 6000


class IngestionStatus(str, Enum):
    SAVED = "saved"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class IngestionOutcome:
    status: IngestionStatus
    records: tuple[HistoryRecord, ...] = ()
    message: str = ""

    @property
    def saved(self) -> bool:
        return self.status is IngestionStatus.SAVED


def _hint_from_url(url: str) -> StationHint:
    return StationHint(url=url, hostname=urlparse(url).hostname or "")


class IngestionService:
    """The only writer of the history log."""

    def __init__(
        self,
        repository: HistoryRepository,
        transport: ScrapeTransport | None = None,
        *,
        clock: Clock | None = None,
        text_limit: int = DEFAULT_TEXT_LIMIT,
    ) -> None:
        self._repo = repository
        self._transport = transport
        self._clock = clock or utc_now
        self._text_limit = int(text_limit)
        self._guard = threading.Lock()
        self._scheduler: Scheduler | None = None

    @property
    def repository(self) -> HistoryRepository:
        return self._repo

    @property
    def busy(self) -> bool:
        return self._guard.locked()

    @contextmanager
    def _single_flight(self) -> Iterator[bool]:
        acquired = self._guard.acquire(blocking=False)
        try:
            yield acquired
        finally:
            if acquired:
                self._guard.release()

    # -- crawl ---------------------------------------------------------------

    def _record_from_scrape(self, result: ScrapeResult) -> HistoryRecord:
        hint = _hint_from_url(result.source_url)
        station = resolve_station_label(infer_from_hint(hint))
        rows = [
            PrizeRow.for_tier(key, numbers)
            for key, numbers in (
                ("gdb", [result.top_number]),
                ("g7", [n for n in result.tier7 if n]),
                ("g8", [n for n in result.tier8 if n]),
            )
            if numbers
        ]
        ticket = ParsedTicket(station=station, prizes=tuple(rows))
        return HistoryRecord(
            timestamp=result.timestamp,
            source=SOURCE_AUTO_CRAWL,
            station=station,
            station_hint=hint,
            ticket=ticket,
            numbers=ticket.numbers,
            top_number=ticket.top_number,
            tier7=ticket.tier7,
            tier8=ticket.tier8,
        )

    def crawl_and_save(self) -> IngestionOutcome:
        """Scrape the results page once and append what it shows."""

        with self._single_flight() as acquired:
            if not acquired:
                logger.info("Skipping crawl: another ingestion is still running")
                return IngestionOutcome(IngestionStatus.SKIPPED, message="Ingestion already in progress")

            if self._transport is None:
                return IngestionOutcome(IngestionStatus.FAILED, message="No scrape transport configured")

            try:
                result = self._transport.fetch()
                if not result.top_number:
                    logger.warning("Crawl returned no special prize number")
                    return IngestionOutcome(IngestionStatus.FAILED, message="No data on the results page")
                record = self._record_from_scrape(result)
                self._repo.append_records([record])
            except AppError as exc:
                logger.error("Crawl failed: %s (%s)", exc.message, exc.details)
                return IngestionOutcome(IngestionStatus.FAILED, message=exc.message)

        logger.info("Saved crawl result for %s: %s", record.station, record.top_number)
        return IngestionOutcome(IngestionStatus.SAVED, records=(record,))

    # -- manual paste ----------------------------------------------------------

    def build_manual_records(
        self, raw_text: str, station_hint: StationHint | None = None
    ) -> list[HistoryRecord]:
        """Turn pasted text into the records a manual save would append.

        Raises ValidationError when the text holds no digits at all.
        """

        safe_text = str(raw_text or "")[: self._text_limit]
        ticket = prize_parser.parse(safe_text, station_hint)
        numbers = list(ticket.numbers) if ticket else extract_digit_runs(safe_text)
        if not numbers:
            raise ValidationError("No numbers found in the pasted text")

        hint = station_hint if station_hint is not None and not station_hint.is_empty() else None
        now = to_iso(self._clock())

        tickets = station_splitter.split(ticket, detect_stations(safe_text, station_hint)) if ticket else []
        if tickets:
            return [
                HistoryRecord(
                    timestamp=now,
                    source=SOURCE_MANUAL_SCAN,
                    raw_text=safe_text,
                    station=resolve_station_label(t.station),
                    station_hint=hint,
                    ticket=t,
                    numbers=t.numbers,
                    top_number=t.top_number or t.numbers[0],
                    tier7=t.tier7,
                    tier8=t.tier8,
                )
                for t in tickets
            ]

        station = ticket.station if ticket else parse_station(safe_text, station_hint)
        return [
            HistoryRecord(
                timestamp=now,
                source=SOURCE_MANUAL_SCAN if ticket else SOURCE_MANUAL_COPY,
                raw_text=safe_text,
                station=resolve_station_label(station),
                station_hint=hint,
                ticket=ticket,
                numbers=tuple(numbers),
                top_number=(ticket.top_number if ticket else "") or numbers[0],
                tier7=ticket.tier7 if ticket else (),
                tier8=ticket.tier8 if ticket else (),
            )
        ]

    def save_manual_copy(self, raw_text: str, station_hint: StationHint | None = None) -> IngestionOutcome:
        """Parse pasted results and append one record per detected station."""

        records = self.build_manual_records(raw_text, station_hint)

        with self._single_flight() as acquired:
            if not acquired:
                logger.info("Skipping manual save: another ingestion is still running")
                return IngestionOutcome(IngestionStatus.SKIPPED, message="Ingestion already in progress")
            try:
                self._repo.append_records(records)
            except AppError as exc:
                logger.error("Manual save failed: %s (%s)", exc.message, exc.details)
                return IngestionOutcome(IngestionStatus.FAILED, message=exc.message)

        logger.info(
            "Saved %d manual record(s): %s",
            len(records),
            ", ".join(r.station or UNKNOWN_STATION for r in records),
        )
        return IngestionOutcome(IngestionStatus.SAVED, records=tuple(records))

    # -- history -------------------------------------------------------------

    def get_history(self, limit: int = 50) -> list[HistoryRecord]:
        """Most recent records first."""

        records = self._repo.list_records()
        n = max(1, int(limit))
        return list(reversed(records[-n:]))

    def clear_history(self) -> None:
        with self._single_flight() as acquired:
            if not acquired:
                raise ConflictError("Cannot clear history while an ingestion is running")
            self._repo.clear()
        logger.info("History cleared")

    # -- scheduling ----------------------------------------------------------

    def start_auto(self, scheduler: Scheduler) -> bool:
        """Attach the crawl to ``scheduler``; a second call is a no-op."""

        if self._scheduler is not None:
            logger.info("Auto crawl already running")
            return False
        self._scheduler = scheduler
        scheduler.start(self.crawl_and_save)
        logger.info("Auto crawl started")
        return True

    def stop_auto(self) -> None:
        scheduler, self._scheduler = self._scheduler, None
        if scheduler is not None:
            scheduler.stop()

