"""History and ingestion routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from kqxs.extensions import get_ingestion_service, get_statistics_service
from kqxs.schemas.history import (
    HistoryRecordSchema,
    ManualCopyRequestSchema,
    StationStatisticsSchema,
    StatisticsEntrySchema,
)
from kqxs.services.ingestion_service import IngestionStatus
from kqxs.utils.params import positive_int_arg
from kqxs.utils.responses import fail, ok

history_bp = Blueprint("history", __name__)

_records_schema = HistoryRecordSchema(many=True)
_manual_schema = ManualCopyRequestSchema()
_entries_schema = StatisticsEntrySchema(many=True)
_stations_schema = StationStatisticsSchema(many=True)

HISTORY_PAGE = 50


def _history_payload() -> list[dict]:
    return _records_schema.dump(get_ingestion_service().get_history(HISTORY_PAGE))


@history_bp.get("/history")
def list_history():
    """Most recent records first.

    Query params:
    - limit: number of records (default 50)
    """

    limit = positive_int_arg("limit", HISTORY_PAGE)
    return ok(_records_schema.dump(get_ingestion_service().get_history(limit)))


@history_bp.delete("/history")
def clear_history():
    get_ingestion_service().clear_history()
    return ok({"history": [], "top": [], "topByStation": []})


@history_bp.post("/history/manual")
def save_manual_copy():
    """Save pasted result text; combined multi-station pastes become one record per station."""

    payload = request.get_json(silent=True) or {}
    data = _manual_schema.load(payload)

    outcome = get_ingestion_service().save_manual_copy(str(data["text"]), data.get("station_hint"))
    if outcome.status is IngestionStatus.FAILED:
        return fail("ingestion_failed", outcome.message, 503)
    if outcome.status is IngestionStatus.SKIPPED:
        return ok({"status": outcome.status.value, "message": outcome.message, "saved": []}, status_code=202)

    stats = get_statistics_service()
    return ok(
        {
            "status": outcome.status.value,
            "saved": _records_schema.dump(outcome.records),
            "history": _history_payload(),
            "top": _entries_schema.dump(stats.top_overall(10)),
            "topByStation": _stations_schema.dump(stats.top_by_station(3)),
        },
        status_code=201,
    )


@history_bp.post("/crawl")
def crawl():
    """Run one crawl now (same entry point as the scheduler)."""

    outcome = get_ingestion_service().crawl_and_save()
    return ok(
        {
            "status": outcome.status.value,
            "message": outcome.message,
            "data": _records_schema.dump(outcome.records)[0] if outcome.records else None,
            "history": _history_payload(),
        }
    )
