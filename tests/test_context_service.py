from kqxs.catalog import UNKNOWN_STATION
from kqxs.models.history_record import HistoryRecord
from kqxs.services.context_service import ContextService, ContextWindow, compact_record


def test_compact_record_prefers_ticket_fields(ingestion):
    [record] = ingestion.save_manual_copy("Đài: An Giang 18/10/2026\nG8 45\nG7 12 34\nĐB 987654").records

    assert compact_record(record) == {
        "station": "An Giang",
        "drawDate": "18/10/2026",
        "db": "987654",
        "g7": ["12", "34"],
        "g8": ["45"],
        "numbers": ["987654", "12", "34", "45"],
    }


def test_compact_record_of_legacy_entry():
    record = HistoryRecord(timestamp="2024-01-01", source="auto-crawl", top_number="12-34", tier7=("5a6",))
    assert compact_record(record) == {
        "station": UNKNOWN_STATION,
        "drawDate": "",
        "db": "1234",
        "g7": ["56"],
        "g8": [],
        "numbers": [],
    }


def test_compact_record_caps_numbers():
    record = HistoryRecord(timestamp="t", source="manual-copy", station="Cà Mau", numbers=[str(n) for n in range(60)])
    assert len(compact_record(record)["numbers"]) == 40


def test_chat_context(ingestion, statistics):
    for station in ("Bến Tre", "An Giang", "Cà Mau"):
        ingestion.save_manual_copy(f"Đài: {station}\nG8 21\nG7 345")

    context = ContextService(ingestion, statistics, ContextWindow(latest_draws=2, top_limit=1)).build_chat_context()

    assert [d["station"] for d in context["latestDraws"]] == ["Cà Mau", "An Giang"]
    assert context["topByStation"] == [
        {"station": "An Giang", "top": [{"number": "45", "count": 1}]},
        {"station": "Bến Tre", "top": [{"number": "45", "count": 1}]},
        {"station": "Cà Mau", "top": [{"number": "45", "count": 1}]},
    ]


def test_chat_context_when_empty(ingestion, statistics):
    assert ContextService(ingestion, statistics).build_chat_context() == {"latestDraws": [], "topByStation": []}
