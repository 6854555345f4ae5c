"""Append-only history log storage.

A store holds the log as an ordered list of JSON documents. Every mutation
is all-or-nothing: readers see the log either before or after a write.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Protocol

from sqlalchemy import delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from kqxs.errors import StoreError
from kqxs.models.history_entry import Base, HistoryEntry

logger = logging.getLogger(__name__)

Document = dict[str, Any]


class HistoryStore(Protocol):
    def read_all(self) -> list[Document]: ...

    def append(self, documents: Sequence[Document]) -> None: ...

    def clear(self) -> None: ...


class JsonFileHistoryStore:
    """Whole log as one JSON array, rewritten via temp file + atomic rename."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)
        self._write_lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def read_all(self) -> list[Document]:
        if not self._path.exists():
            return []
        try:
            data = json.loads(self._path.read_text(encoding="utf-8") or "[]")
        except (OSError, ValueError) as exc:
            raise StoreError(message=f"Cannot read history file {self._path}", details=str(exc)) from exc
        if not isinstance(data, list):
            logger.warning("History file %s does not hold a JSON array; treating as empty", self._path)
            return []
        return data

    def _write(self, documents: list[Document]) -> None:
        directory = self._path.parent
        tmp_name: str | None = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=directory, prefix=f".{self._path.name}.", suffix=".tmp", delete=False
            ) as fh:
                tmp_name = fh.name
                json.dump(documents, fh, ensure_ascii=False, indent=2)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self._path)
            tmp_name = None
        except (OSError, TypeError, ValueError) as exc:
            raise StoreError(message=f"Cannot write history file {self._path}", details=str(exc)) from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.warning("Could not remove temp file %s", tmp_name)

    def append(self, documents: Sequence[Document]) -> None:
        with self._write_lock:
            current = self.read_all()
            current.extend(documents)
            self._write(current)

    def clear(self) -> None:
        with self._write_lock:
            self._write([])


class SqlHistoryStore:
    """One row per document in ``history_entries``, one transaction per write."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
        Base.metadata.create_all(bind=engine)

    def read_all(self) -> list[Document]:
        try:
            with self._session_factory() as session:
                rows = session.scalars(select(HistoryEntry).order_by(HistoryEntry.id.asc())).all()
                return [dict(row.payload) for row in rows]
        except SQLAlchemyError as exc:
            raise StoreError(message="Cannot read history table", details=str(exc)) from exc

    def append(self, documents: Sequence[Document]) -> None:
        try:
            with self._session_factory.begin() as session:
                session.add_all([HistoryEntry(payload=dict(doc)) for doc in documents])
        except SQLAlchemyError as exc:
            raise StoreError(message="Cannot write history table", details=str(exc)) from exc

    def clear(self) -> None:
        try:
            with self._session_factory.begin() as session:
                session.execute(delete(HistoryEntry))
        except SQLAlchemyError as exc:
            raise StoreError(message="Cannot clear history table", details=str(exc)) from exc


def copy_documents(source: HistoryStore, target: HistoryStore, *, skip_existing: bool = False) -> int:
    """Append every document of ``source`` to ``target`` in one write.

    With ``skip_existing``, documents already present in the target
    (compared as whole documents) are not copied again. Returns the number
    of documents written.
    """

    documents = source.read_all()
    if skip_existing:
        present = {json.dumps(doc, sort_keys=True, ensure_ascii=False) for doc in target.read_all()}
        documents = [d for d in documents if json.dumps(d, sort_keys=True, ensure_ascii=False) not in present]
    if documents:
        target.append(documents)
    return len(documents)
