"""Split a combined multi-station ticket into one ticket per station."""

from __future__ import annotations

from collections.abc import Sequence

from kqxs.models.ticket import ParsedTicket, PrizeRow
from kqxs.services.station_matcher import normalize_station_list


def split(ticket: ParsedTicket | None, detected_stations: Sequence[str]) -> list[ParsedTicket]:
    """Divide every prize row evenly across ``detected_stations``.

    Each row is assumed to hold one equal-size contiguous block per station,
    blocks in station order. Returns an empty list (meaning "keep the ticket
    whole") when there are fewer than two stations or any row does not divide
    evenly.
    """

    if ticket is None or not ticket.prizes:
        return []

    stations = normalize_station_list(detected_stations)
    if len(stations) < 2:
        return []

    count = len(stations)
    rows_by_station: list[list[PrizeRow]] = [[] for _ in stations]
    for row in ticket.prizes:
        if len(row.numbers) % count != 0:
            return []
        size = len(row.numbers) // count
        for i in range(count):
            part = row.numbers[i * size:(i + 1) * size]
            if part:
                rows_by_station[i].append(PrizeRow(key=row.key, label=row.label, numbers=part))

    return [
        ParsedTicket(station=station, prizes=tuple(rows), draw_date=ticket.draw_date)
        for station, rows in zip(stations, rows_by_station)
        if rows
    ]
