"""Station detection and resolution over free text.

Station names are matched as whole tokens of normalized text. When several
stations appear, their order follows where each first occurs in the text,
which on combined result pages is the left-to-right column order.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Callable, Iterable, Sequence

from kqxs.catalog import (
    REGION_CENTRAL,
    REGION_NORTH,
    REGION_SOUTH,
    STATION_CATALOG,
    UNKNOWN_STATION,
)
from kqxs.models.history_record import HistoryRecord
from kqxs.models.ticket import StationHint
from kqxs.utils.text import clean_whitespace, normalize, pad_for_match

COMPOSITE_SEPARATOR = " | "

_FIXED_LABELS: dict[str, str] = {
    "mien bac": REGION_NORTH,
    "mien trung": REGION_CENTRAL,
    "mien nam": REGION_SOUTH,
    "thu cong": UNKNOWN_STATION,
    "khong ro dai": UNKNOWN_STATION,
}

_DAI_RE = re.compile(r"(?<!\w)(?:Đài|Dài|Dai)\s*[:\-]?\s*([^\n\r|,;]+)", re.IGNORECASE)
_MIEN_RE = re.compile(r"(?:Miền|Mien)\s*(Bắc|Bac|Trung|Nam)", re.IGNORECASE)
_XO_SO_RE = re.compile(r"xổ\s*số(?:\s*kiến\s*thiết)?\s*([^\n\r|,;]+)", re.IGNORECASE)
_TITLE_XO_SO_RE = re.compile(r"xổ\s*số(?:\s*kiến\s*thiết)?\s*([^\-|]+)", re.IGNORECASE)
_TITLE_NOISE_RE = re.compile(r"\b(?:hôm nay|trực tiếp|kết quả|ngày)\b", re.IGNORECASE)
_MAX_LABEL_LEN = 80

# (canonical name, padded aliases) computed once
_PADDED_CATALOG: tuple[tuple[str, tuple[str, ...]], ...] = tuple(
    (
        station.name,
        tuple(f" {a} " for a in (normalize(alias) for alias in station.aliases) if a),
    )
    for station in STATION_CATALOG
)


def find_stations(text: str) -> list[str]:
    """Catalog stations named in ``text``, ordered by first occurrence."""

    padded = pad_for_match(text)
    if not padded.strip():
        return []

    found: list[tuple[int, int, str]] = []
    for catalog_pos, (name, aliases) in enumerate(_PADDED_CATALOG):
        hits = [idx for idx in (padded.find(alias) for alias in aliases) if idx != -1]
        if hits:
            found.append((min(hits), catalog_pos, name))

    found.sort()
    return [name for _, _, name in found]


def _hint_or_empty(hint: StationHint | None) -> StationHint:
    return hint if hint is not None else StationHint()


def detect_stations(raw_text: str, hint: StationHint | None = None) -> list[str]:
    """Stations named in the text or in the page metadata it came from."""

    h = _hint_or_empty(hint)
    parts = (clean_whitespace(p) for p in (raw_text, h.title, h.url, h.hostname))
    return find_stations(" ".join(p for p in parts if p))


def resolve_station_label(raw_name: str) -> str:
    """Map a free-form station name to a canonical label.

    Unknown names come back cleaned but otherwise verbatim; several catalog
    stations in one name become a composite ``"A | B"`` label.
    """

    value = clean_whitespace(raw_name)
    if not value:
        return UNKNOWN_STATION

    fixed = _FIXED_LABELS.get(normalize(value))
    if fixed:
        return fixed

    stations = find_stations(value)
    if len(stations) == 1:
        return stations[0]
    if stations:
        return COMPOSITE_SEPARATOR.join(stations)
    return value


def infer_from_hint(hint: StationHint | None) -> str:
    """Best-effort station label from page title, hostname or URL."""

    h = _hint_or_empty(hint)
    title = clean_whitespace(h.title)
    hostname = clean_whitespace(h.hostname)
    full_url = clean_whitespace(h.url)

    if title:
        match = _TITLE_XO_SO_RE.search(unicodedata.normalize("NFC", title))
        if match:
            from_title = clean_whitespace(
                re.sub(r"[:|]", " ", _TITLE_NOISE_RE.sub("", match.group(1)))
            )
            if from_title:
                return resolve_station_label(from_title)

    source = f"{hostname} {full_url}".lower()
    if "xsmn" in source:
        return REGION_SOUTH
    if "xsmt" in source:
        return REGION_CENTRAL
    if "xsmb" in source:
        return REGION_NORTH

    if hostname:
        host_label = re.sub(r"^www\.", "", hostname, flags=re.IGNORECASE).split(".")[0]
        if host_label:
            return resolve_station_label(f"Nguồn {host_label.upper()}")

    return ""


StationResolver = Callable[[str, StationHint], str | None]


def _from_dai_label(raw: str, hint: StationHint) -> str | None:
    match = _DAI_RE.search(raw)
    return match.group(1)[:_MAX_LABEL_LEN] if match else None


def _from_region_phrase(raw: str, hint: StationHint) -> str | None:
    match = _MIEN_RE.search(raw)
    return f"Miền {match.group(1).strip()}" if match else None


def _from_xo_so_phrase(raw: str, hint: StationHint) -> str | None:
    match = _XO_SO_RE.search(raw)
    return match.group(1)[:_MAX_LABEL_LEN] if match else None


def _from_catalog(raw: str, hint: StationHint) -> str | None:
    stations = detect_stations(raw, hint)
    return COMPOSITE_SEPARATOR.join(stations) if stations else None


def _from_hint(raw: str, hint: StationHint) -> str | None:
    return infer_from_hint(hint) or None


STATION_RESOLVERS: tuple[StationResolver, ...] = (
    _from_dai_label,
    _from_region_phrase,
    _from_xo_so_phrase,
    _from_catalog,
    _from_hint,
)


def first_non_empty(
    resolvers: Iterable[StationResolver], raw: str, hint: StationHint
) -> str | None:
    for resolver in resolvers:
        label = resolver(raw, hint)
        if label and label.strip():
            return label
    return None


def parse_station(raw_text: str, hint: StationHint | None = None) -> str:
    """Resolve the station of a pasted or scraped text.

    Tries, in order: an explicit ``Đài:`` label, a ``Miền <X>`` phrase, a
    ``xổ số <name>`` phrase, catalog names anywhere in text or hint, then the
    page hint alone. Falls back to the unknown-station label.
    """

    raw = unicodedata.normalize("NFC", str(raw_text or ""))
    label = first_non_empty(STATION_RESOLVERS, raw, _hint_or_empty(hint))
    if label is None:
        return UNKNOWN_STATION
    return resolve_station_label(label)


def normalize_station_list(stations: Sequence[str]) -> list[str]:
    """Canonical labels, de-duplicated, first occurrence kept."""

    out: list[str] = []
    for name in stations:
        label = resolve_station_label(name)
        if label and label not in out:
            out.append(label)
    return out


def resolve_record_station(record: HistoryRecord) -> str:
    """Station of a stored record, repairing records saved without one."""

    stored = record.ticket.station if record.ticket and record.ticket.station else record.station
    direct = resolve_station_label(stored)
    if direct != UNKNOWN_STATION:
        return direct
    return parse_station(record.raw_text, record.station_hint)
