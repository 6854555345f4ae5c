"""Marshmallow schemas for tickets and history records (stored JSON format)."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, ValidationError, fields, post_load, pre_load, validate

from kqxs.catalog import PRIZE_TIERS, TIER_BY_KEY
from kqxs.models.history_record import HistoryRecord
from kqxs.models.ticket import ParsedTicket, PrizeRow, StationHint


class StationHintSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    title = fields.String(load_default="", allow_none=True)
    url = fields.String(load_default="", allow_none=True)
    hostname = fields.String(load_default="", allow_none=True)

    @post_load
    def _make_hint(self, data, **kwargs):  # type: ignore[no-untyped-def]
        return StationHint(
            title=str(data.get("title") or ""),
            url=str(data.get("url") or ""),
            hostname=str(data.get("hostname") or ""),
        )


class PrizeRowSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    key = fields.String(required=True, validate=validate.OneOf([t.key for t in PRIZE_TIERS]))
    label = fields.String(load_default=None)
    numbers = fields.List(fields.String(), required=True)

    @post_load
    def _make_row(self, data, **kwargs):  # type: ignore[no-untyped-def]
        key = data["key"]
        try:
            return PrizeRow(key=key, label=data.get("label") or TIER_BY_KEY[key].label, numbers=tuple(data["numbers"]))
        except ValueError as exc:
            raise ValidationError({"numbers": [str(exc)]}) from exc


class TicketSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    station = fields.String(required=True)
    drawDate = fields.String(attribute="draw_date", allow_none=True, load_default=None)
    prizes = fields.List(fields.Nested(PrizeRowSchema), required=True)
    numbers = fields.List(fields.String(), dump_only=True)
    giaiDB = fields.String(attribute="top_number", dump_only=True)
    giai7 = fields.List(fields.String(), attribute="tier7", dump_only=True)
    giai8 = fields.List(fields.String(), attribute="tier8", dump_only=True)

    @post_load
    def _make_ticket(self, data, **kwargs):  # type: ignore[no-untyped-def]
        try:
            return ParsedTicket(
                station=data["station"],
                prizes=tuple(data["prizes"]),
                draw_date=data.get("draw_date") or None,
            )
        except ValueError as exc:
            raise ValidationError({"prizes": [str(exc)]}) from exc


class HistoryRecordSchema(Schema):
    """One entry of the persisted log.

    Older logs used ``date`` for the timestamp and may lack ``source``,
    ``numbers`` or ``ticket``.
    """

    class Meta:
        unknown = EXCLUDE

    timestamp = fields.String(required=True)
    source = fields.String(load_default="auto-crawl")
    rawText = fields.String(attribute="raw_text", load_default="")
    numbers = fields.List(fields.String(), load_default=list)
    station = fields.String(load_default="")
    stationHint = fields.Nested(StationHintSchema, attribute="station_hint", allow_none=True, load_default=None)
    giaiDB = fields.String(attribute="top_number", load_default="")
    giai7 = fields.List(fields.String(), attribute="tier7", load_default=list)
    giai8 = fields.List(fields.String(), attribute="tier8", load_default=list)
    ticket = fields.Nested(TicketSchema, allow_none=True, load_default=None)

    @pre_load
    def _upgrade_legacy(self, data, **kwargs):  # type: ignore[no-untyped-def]
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "timestamp" not in data and "date" in data:
            data["timestamp"] = data.pop("date")
        if not isinstance(data.get("stationHint"), dict):
            data["stationHint"] = None
        if not isinstance(data.get("ticket"), dict):
            data["ticket"] = None
        for key in ("rawText", "station", "giaiDB"):
            if data.get(key) is None:
                data.pop(key, None)
        for key in ("numbers", "giai7", "giai8"):
            if not isinstance(data.get(key), list):
                data.pop(key, None)
            else:
                data[key] = [str(n) for n in data[key] if n is not None]
        return data

    @post_load
    def _make_record(self, data, **kwargs):  # type: ignore[no-untyped-def]
        return HistoryRecord(**data)


class ManualCopyRequestSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    text = fields.String(required=True, validate=validate.Length(min=1))
    stationHint = fields.Nested(StationHintSchema, attribute="station_hint", allow_none=True, load_default=None)


class StatisticsEntrySchema(Schema):
    number = fields.String()
    count = fields.Integer()


class StationStatisticsSchema(Schema):
    station = fields.String()
    top = fields.List(fields.Nested(StatisticsEntrySchema))
