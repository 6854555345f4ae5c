"""Repository layer for history records."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from marshmallow import ValidationError as MarshmallowValidationError

from kqxs.models.history_record import HistoryRecord
from kqxs.repositories.history_store import HistoryStore
from kqxs.schemas.history import HistoryRecordSchema

logger = logging.getLogger(__name__)


class HistoryRepository:
    """Typed access to the history log.

    Documents that no longer load are skipped on read but stay in the store,
    so a later append never drops them.
    """

    def __init__(self, store: HistoryStore) -> None:
        self._store = store
        self._schema = HistoryRecordSchema()

    @property
    def store(self) -> HistoryStore:
        return self._store

    def list_records(self) -> list[HistoryRecord]:
        out: list[HistoryRecord] = []
        for position, doc in enumerate(self._store.read_all()):
            try:
                out.append(self._schema.load(doc))
            except MarshmallowValidationError as exc:
                logger.warning("Skipping unreadable history entry #%d: %s", position, exc.messages)
        return out

    def append_records(self, records: Sequence[HistoryRecord]) -> None:
        if not records:
            return
        self._store.append([self._schema.dump(r) for r in records])

    def clear(self) -> None:
        self._store.clear()

    def dump(self, record: HistoryRecord) -> dict:
        return self._schema.dump(record)
