"""History log row for the SQL store.

One row per history record; ``id`` order is the log order and the payload is
the record's JSON document exactly as the JSON-file store would hold it.
"""

from __future__ import annotations

from sqlalchemy import JSON, Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class HistoryEntry(Base):
    __tablename__ = "history_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    payload: Mapped[dict] = mapped_column(JSON, nullable=False)
