"""Statistics routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint

from kqxs.extensions import get_statistics_service
from kqxs.schemas.history import StationStatisticsSchema, StatisticsEntrySchema
from kqxs.utils.params import positive_int_arg
from kqxs.utils.responses import ok

stats_bp = Blueprint("stats", __name__, url_prefix="/stats")

_entries_schema = StatisticsEntrySchema(many=True)
_stations_schema = StationStatisticsSchema(many=True)


@stats_bp.get("/top")
def top_overall():
    """Most frequent last-two-digit numbers across all stations.

    Query params:
    - limit: number of entries (default 10)
    """

    limit = positive_int_arg("limit", 10, maximum=100)
    return ok(_entries_schema.dump(get_statistics_service().top_overall(limit)))


@stats_bp.get("/by-station")
def top_by_station():
    limit = positive_int_arg("limit", 3, maximum=100)
    return ok(_stations_schema.dump(get_statistics_service().top_by_station(limit)))
