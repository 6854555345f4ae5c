import json
import os

import pytest

from kqxs.db import create_app_engine, create_history_store
from kqxs.errors import StoreError
from kqxs.models.history_record import HistoryRecord
from kqxs.models.ticket import ParsedTicket, PrizeRow, StationHint
from kqxs.repositories.history_repository import HistoryRepository
from kqxs.repositories.history_store import JsonFileHistoryStore, SqlHistoryStore, copy_documents


def _record(station="An Giang", numbers=("123456", "12")):
    ticket = ParsedTicket(
        station=station,
        prizes=(PrizeRow.for_tier("gdb", numbers[:1]), PrizeRow.for_tier("g8", numbers[1:])),
        draw_date="18/10/2026",
    )
    return HistoryRecord(
        timestamp="2026-10-18T03:00:00.000Z",
        source="manual-scan",
        raw_text="Đài: An Giang",
        station=station,
        station_hint=StationHint(title="Xổ số An Giang", url="https://xs.vn/ag", hostname="xs.vn"),
        ticket=ticket,
        numbers=ticket.numbers,
        top_number=ticket.top_number,
        tier7=ticket.tier7,
        tier8=ticket.tier8,
    )


def test_json_store_roundtrip_and_format(store, repository):
    record = _record()
    repository.append_records([record])

    assert repository.list_records() == [record]

    doc = json.loads(store.path.read_text(encoding="utf-8"))[0]
    assert doc["timestamp"] == "2026-10-18T03:00:00.000Z"
    assert doc["rawText"] == "Đài: An Giang"
    assert doc["giaiDB"] == "123456"
    assert doc["giai8"] == ["12"]
    assert doc["stationHint"] == {"title": "Xổ số An Giang", "url": "https://xs.vn/ag", "hostname": "xs.vn"}
    assert doc["ticket"]["prizes"][0] == {"key": "gdb", "label": "ĐB", "numbers": ["123456"]}
    assert doc["ticket"]["drawDate"] == "18/10/2026"
    assert doc["ticket"]["numbers"] == ["123456", "12"]


def test_append_keeps_order(repository):
    first, second = _record("An Giang"), _record("Bến Tre")
    repository.append_records([first])
    repository.append_records([second])
    assert [r.station for r in repository.list_records()] == ["An Giang", "Bến Tre"]


def test_clear_writes_empty_array(store, repository):
    repository.append_records([_record()])
    repository.clear()
    assert store.path.exists()
    assert json.loads(store.path.read_text(encoding="utf-8")) == []
    assert repository.list_records() == []


def test_missing_file_is_empty(tmp_path):
    assert JsonFileHistoryStore(tmp_path / "nope" / "history.json").read_all() == []


def test_non_array_file_is_empty(store):
    store.path.write_text('{"not": "a list"}', encoding="utf-8")
    assert store.read_all() == []


def test_corrupt_file_raises_store_error(store):
    store.path.write_text("[{", encoding="utf-8")
    with pytest.raises(StoreError):
        store.read_all()


def test_legacy_documents_load(store, repository):
    legacy = {
        "date": "2025-03-01T10:00:00.000Z",
        "giaiDB": "123456",
        "giai7": ["789"],
        "giai8": ["12"],
    }
    store.path.write_text(json.dumps([legacy]), encoding="utf-8")

    [record] = repository.list_records()
    assert record.timestamp == "2025-03-01T10:00:00.000Z"
    assert record.source == "auto-crawl"
    assert record.numbers == ()
    assert record.ticket is None
    assert record.counted_numbers() == ["123456", "789", "12"]


def test_unreadable_document_is_skipped_but_kept(store, repository):
    store.path.write_text(json.dumps([{"no": "timestamp"}]), encoding="utf-8")
    assert repository.list_records() == []

    repository.append_records([_record()])
    docs = json.loads(store.path.read_text(encoding="utf-8"))
    assert docs[0] == {"no": "timestamp"}
    assert len(repository.list_records()) == 1


def test_failed_write_leaves_file_intact(store, repository, monkeypatch):
    repository.append_records([_record()])
    before = store.path.read_text(encoding="utf-8")

    def boom(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", boom)
    with pytest.raises(StoreError):
        repository.append_records([_record("Bến Tre")])

    assert store.path.read_text(encoding="utf-8") == before
    assert [p.name for p in store.path.parent.iterdir()] == [store.path.name]


def test_sql_store_roundtrip(tmp_path):
    store = SqlHistoryStore(create_app_engine(f"sqlite:///{tmp_path / 'kqxs.db'}"))
    repository = HistoryRepository(store)

    repository.append_records([_record("An Giang"), _record("Bến Tre")])
    assert [r.station for r in repository.list_records()] == ["An Giang", "Bến Tre"]

    repository.clear()
    assert repository.list_records() == []


def test_create_history_store_by_backend(tmp_path):
    json_store = create_history_store({"HISTORY_BACKEND": "json", "HISTORY_PATH": str(tmp_path / "h.json")})
    assert isinstance(json_store, JsonFileHistoryStore)

    sql_store = create_history_store(
        {"HISTORY_BACKEND": "sql", "DATABASE_URL": f"sqlite:///{tmp_path / 'h.db'}"}
    )
    assert isinstance(sql_store, SqlHistoryStore)

    with pytest.raises(ValueError):
        create_history_store({"HISTORY_BACKEND": "redis"})


def test_copy_documents_between_stores(tmp_path):
    source = JsonFileHistoryStore(tmp_path / "history.json")
    source.append([{"timestamp": "a", "giaiDB": "1"}, {"timestamp": "b", "giaiDB": "2"}])
    target = SqlHistoryStore(create_app_engine(f"sqlite:///{tmp_path / 'copy.db'}"))
    target.append([{"timestamp": "a", "giaiDB": "1"}])

    assert copy_documents(source, target, skip_existing=True) == 1
    assert target.read_all() == [{"timestamp": "a", "giaiDB": "1"}, {"timestamp": "b", "giaiDB": "2"}]
    assert copy_documents(source, target, skip_existing=True) == 0
