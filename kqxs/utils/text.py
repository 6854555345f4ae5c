"""Vietnamese text normalization helpers.

All matching in the engine runs on *folded* text: diacritics stripped
(``đ`` becomes ``d``) and lowercased. Token matching additionally collapses
every non-alphanumeric run to a single space so aliases can be found with a
plain substring search on `` alias `` inside `` text ``.
"""

from __future__ import annotations

import re
import unicodedata

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
_WHITESPACE_RE = re.compile(r"\s+")
_DIGIT_RUN_RE = re.compile(r"[0-9]+")
_NON_DIGIT_RE = re.compile(r"[^0-9]")

# Latin letters in Vietnamese dictionary order; f/j/w/z kept at their Latin slot.
_VI_ALPHABET = "aăâbcdđeêfghijklmnoôơpqrstuưvwxyz"
# ngang < huyền < hỏi < ngã < sắc < nặng
_TONE_ORDER = {
    "\u0300": 1,
    "\u0309": 2,
    "\u0303": 3,
    "\u0301": 4,
    "\u0323": 5,
}


def fold(text: object) -> str:
    """Strip diacritics and lowercase, keeping punctuation and spacing."""

    value = unicodedata.normalize("NFD", str(text or ""))
    value = "".join(ch for ch in value if unicodedata.category(ch) != "Mn")
    return value.replace("đ", "d").replace("Đ", "d").lower()


def normalize(text: object) -> str:
    """Fold, then collapse non-alphanumeric runs to single spaces and trim."""

    return _NON_ALNUM_RE.sub(" ", fold(text)).strip()


def pad_for_match(text: object) -> str:
    """Normalize and surround with spaces for whole-token substring tests."""

    return f" {normalize(text)} "


def clean_whitespace(text: object) -> str:
    return _WHITESPACE_RE.sub(" ", str(text or "")).strip()


def clean_digits(text: object) -> str:
    return _NON_DIGIT_RE.sub("", str(text or ""))


def extract_digit_runs(text: object) -> list[str]:
    """Maximal runs of ASCII digits, in order of appearance."""

    return _DIGIT_RUN_RE.findall(str(text or ""))


def last_two_digits(number: object) -> str:
    """Loto key of a drawn number; numbers shorter than two digits are kept whole."""

    digits = clean_digits(number)
    return digits[-2:] if len(digits) >= 2 else digits


def vietnamese_sort_key(text: object) -> tuple[tuple[tuple[int, int], ...], tuple[int, ...]]:
    """Collation key approximating Vietnamese dictionary order.

    Primary key compares base letters (with their vowel marks: ă, â, ê, ô, ơ,
    ư, đ) case-insensitively; tone marks only break ties.
    """

    primary: list[tuple[int, int]] = []
    secondary: list[int] = []
    for ch in unicodedata.normalize("NFC", str(text or "").lower()):
        tone = 0
        kept: list[str] = []
        for part in unicodedata.normalize("NFD", ch):
            if part in _TONE_ORDER:
                tone = _TONE_ORDER[part]
            else:
                kept.append(part)
        letter = unicodedata.normalize("NFC", "".join(kept))
        pos = _VI_ALPHABET.find(letter) if len(letter) == 1 else -1
        if pos >= 0:
            primary.append((1, pos))
        elif letter.isalpha():
            primary.append((2, ord(letter[0])))
        else:
            primary.append((0, ord(letter[0]) if letter else 0))
        secondary.append(tone)
    return tuple(primary), tuple(secondary)
