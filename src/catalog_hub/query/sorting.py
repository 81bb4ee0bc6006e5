"""Sort comparators for canonical records."""

from __future__ import annotations

import unicodedata
from collections.abc import Callable, Iterable, Sequence
from typing import Any

# Vietnamese letters with breve, circumflex or horn (and đ) are letters of
# their own, ordered right after their base letter.
VIETNAMESE_ALPHABET = [
    "a", "ă", "â", "b", "c", "d", "đ", "e", "ê", "f", "g", "h", "i", "j", "k", "l", "m",
    "n", "o", "ô", "ơ", "p", "q", "r", "s", "t", "u", "ư", "v", "w", "x", "y", "z",
]
_LETTER_WEIGHTS = {letter: index for index, letter in enumerate(VIETNAMESE_ALPHABET)}

_LETTER_MODIFIERS = {"\u0306", "\u0302", "\u031b"}  # breve, circumflex, horn
# ngang < huyền < hỏi < ngã < sắc < nặng
_TONE_WEIGHTS = {"\u0300": 1, "\u0309": 2, "\u0303": 3, "\u0301": 4, "\u0323": 5}

_GROUP_SPACE_PUNCT = 0
_GROUP_DIGIT = 1
_GROUP_LETTER = 2
_GROUP_OTHER = 3

SortKey = tuple[tuple[tuple[int, int], ...], tuple[int, ...], tuple[int, ...]]


def _clusters(text: str) -> Iterable[tuple[str, list[str]]]:
    base: str | None = None
    marks: list[str] = []
    for ch in unicodedata.normalize("NFD", text):
        if unicodedata.combining(ch) and base is not None:
            marks.append(ch)
            continue
        if base is not None:
            yield base, marks
        base, marks = ch, []
    if base is not None:
        yield base, marks


def vietnamese_sort_key(text: str) -> SortKey:
    """Collation key: letters first, then tone marks, then case."""
    primary: list[tuple[int, int]] = []
    secondary: list[int] = []
    tertiary: list[int] = []

    for base, marks in _clusters(text):
        lower = base.lower()
        modifiers = "".join(mark for mark in marks if mark in _LETTER_MODIFIERS)
        letter = unicodedata.normalize("NFC", lower + modifiers)

        if letter in _LETTER_WEIGHTS:
            primary.append((_GROUP_LETTER, _LETTER_WEIGHTS[letter]))
            extra = 0
        elif lower in _LETTER_WEIGHTS:
            primary.append((_GROUP_LETTER, _LETTER_WEIGHTS[lower]))
            extra = 10 * len(modifiers)
        elif base.isdigit():
            primary.append((_GROUP_DIGIT, int(unicodedata.digit(base, 0))))
            extra = 0
        elif base.isalpha():
            primary.append((_GROUP_OTHER, ord(lower)))
            extra = 0
        else:
            primary.append((_GROUP_SPACE_PUNCT, ord(base)))
            extra = 0

        tone = sum(_TONE_WEIGHTS.get(mark, 0) for mark in marks)
        others = sum(ord(mark) for mark in marks if mark not in _TONE_WEIGHTS and mark not in _LETTER_MODIFIERS)
        secondary.append(tone + extra + (100 if others else 0))
        tertiary.append(1 if base != lower else 0)

    return tuple(primary), tuple(secondary), tuple(tertiary)


def _rating(record: Any) -> float:
    return float(getattr(record, "rating", 0) or 0)


def _name_key(record: Any) -> SortKey:
    return vietnamese_sort_key(getattr(record, "name", "") or "")


# sort key -> (key function, descending)
SORTERS: dict[str, tuple[Callable[[Any], Any], bool]] = {
    "price-asc": (lambda record: getattr(record, "sale_price", 0), False),
    "price-desc": (lambda record: getattr(record, "sale_price", 0), True),
    "discount-desc": (lambda record: getattr(record, "discount", 0), True),
    "sold-desc": (lambda record: getattr(record, "sold_count", 0), True),
    "rating-desc": (_rating, True),
    "rating-asc": (_rating, False),
    "name-asc": (_name_key, False),
    "name-desc": (_name_key, True),
}

PRODUCT_SORT_KEYS = ("discount-desc", "price-asc", "price-desc", "sold-desc", "name-asc")
SHOP_SORT_KEYS = ("rating-desc", "rating-asc", "name-asc", "name-desc")


def sort_records(records: Sequence[Any], key: str | None) -> list[Any]:
    """Return a new, stably sorted list; unknown keys keep input order."""
    sorter = SORTERS.get(key or "")
    if sorter is None:
        return list(records)
    key_func, descending = sorter
    return sorted(records, key=key_func, reverse=descending)


def sort_products(records: Sequence[Any], key: str = "sold-desc") -> list[Any]:
    return sort_records(records, key)


def sort_shops(records: Sequence[Any], key: str = "rating-desc") -> list[Any]:
    return sort_records(records, key)
