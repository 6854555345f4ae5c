"""History log record type."""

from __future__ import annotations

from dataclasses import dataclass

from kqxs.models.ticket import ParsedTicket, StationHint
from kqxs.utils.text import clean_digits

SOURCE_MANUAL_SCAN = "manual-scan"
SOURCE_MANUAL_COPY = "manual-copy"
SOURCE_AUTO_CRAWL = "auto-crawl"


@dataclass(frozen=True)
class HistoryRecord:
    """One immutable entry of the append-only history log.

    Records written by older versions may carry no ``numbers`` and no
    ``ticket``; only ``top_number``/``tier7``/``tier8`` are guaranteed.
    """

    timestamp: str
    source: str
    raw_text: str = ""
    station: str = ""
    station_hint: StationHint | None = None
    ticket: ParsedTicket | None = None
    numbers: tuple[str, ...] = ()
    top_number: str = ""
    tier7: tuple[str, ...] = ()
    tier8: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "numbers", tuple(self.numbers))
        object.__setattr__(self, "tier7", tuple(self.tier7))
        object.__setattr__(self, "tier8", tuple(self.tier8))

    def counted_numbers(self) -> list[str]:
        """Drawn numbers for statistics: ``numbers`` or the legacy prize fields."""

        if self.numbers:
            source = list(self.numbers)
        else:
            source = [self.top_number, *self.tier7, *self.tier8]
        cleaned = (clean_digits(n) for n in source)
        return [n for n in cleaned if n]
