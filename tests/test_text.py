from kqxs.utils.text import (
    clean_digits,
    extract_digit_runs,
    fold,
    last_two_digits,
    normalize,
    pad_for_match,
    vietnamese_sort_key,
)


def test_normalize_strips_diacritics_and_punctuation():
    assert normalize("  Xổ số Kiến Thiết ĐỒNG THÁP!! ") == "xo so kien thiet dong thap"
    assert normalize("Bà Rịa - Vũng Tàu") == "ba ria vung tau"
    assert normalize("") == ""
    assert normalize(None) == ""


def test_fold_keeps_punctuation():
    assert fold("Giải ĐB: 123") == "giai db: 123"
    assert fold("đ Đ") == "d d"


def test_normalize_handles_decomposed_input():
    decomposed = "Tie\u0302\u0300n Giang"
    assert normalize(decomposed) == "tien giang"


def test_pad_for_match_adds_boundaries():
    assert pad_for_match("TP.HCM") == " tp hcm "


def test_extract_digit_runs():
    assert extract_digit_runs("G7: 12 - 034,5678") == ["7", "12", "034", "5678"]
    assert extract_digit_runs("không có số") == []


def test_clean_digits_and_last_two():
    assert clean_digits("12-34 a") == "1234"
    assert last_two_digits("123456") == "56"
    assert last_two_digits("7") == "7"
    assert last_two_digits("05") == "05"


def test_vietnamese_sort_order():
    names = ["Đồng Nai", "Đà Lạt", "Bến Tre", "Dương Đông", "An Giang", "Ấp Bắc", "Ăn Khế"]
    assert sorted(names, key=vietnamese_sort_key) == [
        "An Giang",
        "Ăn Khế",
        "Ấp Bắc",
        "Bến Tre",
        "Dương Đông",
        "Đà Lạt",
        "Đồng Nai",
    ]


def test_vietnamese_sort_is_case_insensitive_and_prefix_first():
    names = ["an giang | Bến Tre", "An Giang", "bạc liêu"]
    assert sorted(names, key=vietnamese_sort_key) == ["An Giang", "an giang | Bến Tre", "bạc liêu"]
