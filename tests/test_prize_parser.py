from kqxs.catalog import TIER_BY_KEY, UNKNOWN_STATION
from kqxs.models.ticket import StationHint
from kqxs.services.prize_parser import detect_tier, parse, parse_draw_date, sanitize_tier_numbers

SOUTH_TICKET = """KẾT QUẢ XỔ SỐ 12/05/2025
Đài: An Giang
G8 45
G7 123
G6 1234 5678 9012
G5 3456
G4
12345 67890 11111
22222 33333 44444 55555
Xổ số Miền Nam 2025
G3 66666 77777
G2 88888
G1 99999
ĐB 123456
"""


def _row(ticket, key):
    row = ticket.row(key)
    return list(row.numbers) if row else []


def test_station_label_and_tier7():
    ticket = parse("Đài: An Giang\nG7  12 34")
    assert ticket is not None
    assert ticket.station == "An Giang"
    assert list(ticket.tier7) == ["12", "34"]


def test_full_ticket_rows_in_tier_order():
    ticket = parse(SOUTH_TICKET)
    assert ticket is not None
    assert [r.key for r in ticket.prizes] == ["gdb", "g1", "g2", "g3", "g4", "g5", "g6", "g7", "g8"]
    assert ticket.top_number == "123456"
    assert _row(ticket, "g8") == ["45"]
    assert _row(ticket, "g6") == ["1234", "5678", "9012"]
    assert _row(ticket, "g4") == ["12345", "67890", "11111", "22222", "33333", "44444", "55555"]
    assert ticket.draw_date == "12/05/2025"
    assert ticket.station == "An Giang"
    assert ticket.numbers[0] == "123456"
    assert len(ticket.numbers) == 18


def test_noise_line_after_tier_is_skipped():
    ticket = parse(SOUTH_TICKET)
    assert "2025" not in _row(ticket, "g4")


def test_preamble_before_any_tier_is_skipped():
    ticket = parse("Thứ bảy 99\n123 456\nG8 12")
    assert ticket is not None
    assert list(ticket.numbers) == ["12"]


def test_continuation_lines_append_to_current_tier():
    ticket = parse("Giải tư\n11111 22222\n33333\nGiải năm 4444")
    assert _row(ticket, "g4") == ["11111", "22222", "33333"]
    assert _row(ticket, "g5") == ["4444"]


def test_vietnamese_tier_names():
    ticket = parse("Giải đặc biệt: 654321\nGiải nhất 11111\nGiải tám 07")
    assert ticket.top_number == "654321"
    assert _row(ticket, "g1") == ["11111"]
    assert list(ticket.tier8) == ["07"]


def test_encounter_order_does_not_change_tier_order():
    ticket = parse("G8 12\nG7 345\nĐB 999999")
    assert [r.key for r in ticket.prizes] == ["gdb", "g7", "g8"]
    assert list(ticket.numbers) == ["999999", "345", "12"]


def test_header_numeral_is_dropped_but_not_for_special():
    assert sanitize_tier_numbers(["7", "12"], TIER_BY_KEY["g7"]) == ["12"]
    assert sanitize_tier_numbers(["07", "12"], TIER_BY_KEY["g7"]) == ["07", "12"]
    assert sanitize_tier_numbers(["8", "12"], TIER_BY_KEY["g7"]) == ["8", "12"]
    assert sanitize_tier_numbers([], TIER_BY_KEY["g7"]) == []
    assert sanitize_tier_numbers(["0", "1"], TIER_BY_KEY["gdb"]) == ["0", "1"]


def test_short_number_equal_to_tier_index_is_lost():
    # a real draw equal to the tier numeral cannot be told apart from the header
    assert parse("Giải nhất 1") is None
    assert list(parse("Giải bảy 7 12").tier7) == ["12"]


def test_detect_tier_is_boundary_anchored():
    assert detect_tier("g7 12") is TIER_BY_KEY["g7"]
    assert detect_tier("giai bay: 12") is TIER_BY_KEY["g7"]
    assert detect_tier("dbx 12") is None
    assert detect_tier("g77 12") is None


def test_no_numbers_returns_none():
    assert parse("") is None
    assert parse("Đài: An Giang\nkhông có số") is None
    assert parse("12 34 56") is None


def test_parse_is_deterministic():
    assert parse(SOUTH_TICKET) == parse(SOUTH_TICKET)


def test_station_falls_back_to_hint_and_unknown():
    assert parse("G8 12", StationHint(hostname="xsmn.me")).station == "Miền Nam"
    assert parse("G8 12").station == UNKNOWN_STATION


def test_multi_station_text_gives_composite_station():
    ticket = parse("Vĩnh Long    Bình Dương\nG8 11 22")
    assert ticket.station == "Vĩnh Long | Bình Dương"


def test_parse_draw_date():
    assert parse_draw_date("ngày 1-2-25") == "1-2-25"
    assert parse_draw_date("ngày 123/05/2025") is None
    assert parse_draw_date("không có ngày") is None
