"""Field-level conversions from loose text into canonical values.

Every function here is total: unparsable input degrades to the documented
default instead of raising.
"""

from __future__ import annotations

import math
import random
import re
import string
import unicodedata

ID_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)")
_NON_DIGIT = re.compile(r"[^0-9]")


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _is_number(raw: object) -> bool:
    return isinstance(raw, (int, float)) and not isinstance(raw, bool)


def _is_blank(raw: object) -> bool:
    if raw is None or raw is False:
        return True
    if isinstance(raw, str):
        return not raw.strip()
    return False


def parse_price(raw: object) -> float:
    """Parse a price such as ``"1.500.000đ"`` into a non-negative number.

    Every character except the digits is stripped, so grouping separators of
    either kind and the currency sign all drop out: ``"1,500,000₫"`` is
    ``1500000``.
    """
    if _is_number(raw):
        value = float(raw)
        return value if math.isfinite(value) and value > 0 else 0.0
    if _is_blank(raw):
        return 0.0

    digits = _NON_DIGIT.sub("", str(raw))
    if not digits:
        return 0.0
    try:
        return float(int(digits))
    except (OverflowError, ValueError):
        return 0.0


def _leading_float(text: str) -> float | None:
    match = _LEADING_NUMBER.match(text)
    if not match:
        return None
    return float(match.group(0))


def parse_count(raw: object) -> int:
    """Parse sold counts, rating counts and followers (``"2.5k"``, ``"3m"``, ``"1,024"``).

    With a ``k`` or ``m`` suffix only the leading number is read, and ``.`` is
    its only decimal point; otherwise every digit is kept.
    """
    if _is_number(raw):
        value = float(raw)
        return max(0, round_half_up(value)) if math.isfinite(value) else 0
    if _is_blank(raw):
        return 0

    text = str(raw).lower()
    for suffix, multiplier in (("k", 1_000), ("m", 1_000_000)):
        if suffix in text:
            number = _leading_float(text)
            if number is None:
                return 0
            return max(0, round_half_up(number * multiplier))

    digits = _NON_DIGIT.sub("", text)
    return int(digits) if digits else 0


def parse_rating(raw: object, default: float = 5.0) -> float:
    """Parse a shop rating, clamped to [0, 5]."""
    if _is_blank(raw):
        return default
    if _is_number(raw):
        number: float | None = float(raw)
    else:
        number = _leading_float(str(raw))
    if number is None or not math.isfinite(number):
        return default
    return min(max(number, 0.0), 5.0)


def parse_bool(raw: object) -> bool:
    if isinstance(raw, bool):
        return raw
    return isinstance(raw, str) and raw.strip().lower() == "true"


def calculate_discount(original: float, sale: float) -> int:
    """Discount percent of ``sale`` against ``original``; may be negative."""
    if not original or not sale or original <= 0:
        return 0
    return round_half_up((original - sale) / original * 100)


def normalize_key(raw: object, default: str = "") -> str:
    if _is_blank(raw):
        return default
    return str(raw).strip().lower()


def normalize_search_text(text: object) -> str:
    """Strip diacritics and case for accent-insensitive matching."""
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", str(text).lower())
    return _COMBINING_MARKS.sub("", decomposed).strip()


def generate_id(rng: random.Random | None = None, length: int = 8) -> str:
    chooser = rng or random
    return "".join(chooser.choice(ID_ALPHABET) for _ in range(length))


def generate_random_rating(rng: random.Random | None = None) -> float:
    """Demo rating in [4.0, 5.0] with one decimal."""
    chooser = rng or random
    return round(4 + chooser.random(), 1)
