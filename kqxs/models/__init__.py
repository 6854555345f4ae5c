"""Record types and ORM models."""

from kqxs.models.history_entry import HistoryEntry
from kqxs.models.history_record import HistoryRecord
from kqxs.models.ticket import ParsedTicket, PrizeRow, StationHint

__all__ = ["HistoryEntry", "HistoryRecord", "ParsedTicket", "PrizeRow", "StationHint"]
