"""Parsed ticket record types."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from kqxs.catalog import SPECIAL_TIER_KEY, TIER_BY_KEY, TIER_ORDER


@dataclass(frozen=True)
class StationHint:
    """Where a pasted or scraped text came from (browser page metadata)."""

    title: str = ""
    url: str = ""
    hostname: str = ""

    def is_empty(self) -> bool:
        return not (self.title or self.url or self.hostname)


@dataclass(frozen=True)
class PrizeRow:
    key: str
    label: str
    numbers: tuple[str, ...]

    def __post_init__(self) -> None:
        if self.key not in TIER_BY_KEY:
            raise ValueError(f"Unknown prize tier: {self.key!r}")
        object.__setattr__(self, "numbers", tuple(self.numbers))
        if not self.numbers:
            raise ValueError(f"Prize row {self.key} has no numbers")
        for n in self.numbers:
            if not (isinstance(n, str) and n.isascii() and n.isdigit()):
                raise ValueError(f"Prize row {self.key} holds a non-digit value: {n!r}")

    @classmethod
    def for_tier(cls, key: str, numbers: Iterable[str]) -> PrizeRow:
        return cls(key=key, label=TIER_BY_KEY[key].label, numbers=tuple(numbers))


@dataclass(frozen=True)
class ParsedTicket:
    """One station's prize table.

    ``prizes`` holds only non-empty tiers, in catalog order (special first).
    ``numbers`` and the convenience fields are derived from ``prizes``.
    """

    station: str
    prizes: tuple[PrizeRow, ...]
    draw_date: str | None = None
    _numbers: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "prizes", tuple(self.prizes))
        if not self.prizes:
            raise ValueError("A ticket needs at least one prize row")
        order = [TIER_ORDER[row.key] for row in self.prizes]
        if any(b <= a for a, b in zip(order, order[1:])):
            raise ValueError("Prize rows must be unique and in tier order")
        object.__setattr__(
            self, "_numbers", tuple(n for row in self.prizes for n in row.numbers)
        )

    @property
    def numbers(self) -> tuple[str, ...]:
        return self._numbers

    def row(self, key: str) -> PrizeRow | None:
        for r in self.prizes:
            if r.key == key:
                return r
        return None

    @property
    def top_number(self) -> str:
        special = self.row(SPECIAL_TIER_KEY)
        return special.numbers[0] if special else ""

    @property
    def tier7(self) -> tuple[str, ...]:
        r = self.row("g7")
        return r.numbers if r else ()

    @property
    def tier8(self) -> tuple[str, ...]:
        r = self.row("g8")
        return r.numbers if r else ()
