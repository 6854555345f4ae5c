"""Line-oriented parser for pasted KQXS result tables."""

from __future__ import annotations

import re
import unicodedata

from kqxs.catalog import PRIZE_TIERS, PrizeTier
from kqxs.models.ticket import ParsedTicket, PrizeRow, StationHint
from kqxs.services.station_matcher import parse_station
from kqxs.utils.text import extract_digit_runs, fold

_NOISE_PHRASES = ("ket qua", "xo so", "kqxs", "thu ")
_DATE_RE = re.compile(r"(?<![0-9])[0-9]{1,2}[/\-][0-9]{1,2}[/\-][0-9]{2,4}(?![0-9])")

_TIER_MATCHERS: tuple[tuple[PrizeTier, tuple[re.Pattern[str], ...]], ...] = tuple(
    (tier, tuple(re.compile(rf"\b{re.escape(alias)}\b") for alias in tier.aliases))
    for tier in PRIZE_TIERS
)


def detect_tier(folded_line: str) -> PrizeTier | None:
    """First catalog tier with an alias on the line (special tier first)."""

    for tier, patterns in _TIER_MATCHERS:
        if any(p.search(folded_line) for p in patterns):
            return tier
    return None


def sanitize_tier_numbers(numbers: list[str], tier: PrizeTier) -> list[str]:
    """Drop the tier's own numeral when it was captured from the header.

    ``G7 12 34`` yields ``["7", "12", "34"]``; the leading ``7`` is removed.
    A real one- or two-digit draw equal to the tier numeral is lost too.
    """

    if tier.numeral is not None and numbers and numbers[0] == tier.numeral and len(numbers[0]) <= 2:
        return numbers[1:]
    return numbers


def parse_draw_date(raw_text: str) -> str | None:
    match = _DATE_RE.search(str(raw_text or ""))
    return match.group(0) if match else None


def _is_noise(folded_line: str) -> bool:
    return any(phrase in folded_line for phrase in _NOISE_PHRASES)


def parse(raw_text: str, station_hint: StationHint | None = None) -> ParsedTicket | None:
    """Parse pasted result text into a ticket.

    Returns None when no prize tier yields any number.
    """

    text = unicodedata.normalize("NFC", str(raw_text or ""))
    lines = [line.strip() for line in text.splitlines()]

    by_tier: dict[str, list[str]] = {tier.key: [] for tier in PRIZE_TIERS}
    current: PrizeTier | None = None

    for line in lines:
        if not line:
            continue
        folded = fold(line)

        tier = detect_tier(folded)
        if tier is not None:
            current = tier
            by_tier[tier.key].extend(sanitize_tier_numbers(extract_digit_runs(line), tier))
            continue

        if current is None or _is_noise(folded):
            continue

        by_tier[current.key].extend(extract_digit_runs(line))

    prizes = tuple(
        PrizeRow(key=tier.key, label=tier.label, numbers=tuple(by_tier[tier.key]))
        for tier in PRIZE_TIERS
        if by_tier[tier.key]
    )
    if not prizes:
        return None

    return ParsedTicket(
        station=parse_station(text, station_hint),
        prizes=prizes,
        draw_date=parse_draw_date(text),
    )
