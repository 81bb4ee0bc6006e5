"""vi-VN display formatting used by the CLI listing."""

from __future__ import annotations

import math

THOUSANDS_SEPARATOR = "."
DECIMAL_SEPARATOR = ","
CURRENCY_SUFFIX = "đ"


def _is_missing(number: float | None) -> bool:
    return number is None or (isinstance(number, float) and math.isnan(number))


def format_number(number: float | None) -> str:
    """Group thousands with ``.`` and keep at most three decimals after ``,``."""
    if _is_missing(number):
        return "0"
    rounded = round(float(number), 3)
    whole, _, fraction = f"{abs(rounded):.3f}".partition(".")
    fraction = fraction.rstrip("0")
    text = f"{int(whole):,}".replace(",", THOUSANDS_SEPARATOR)
    if fraction:
        text = f"{text}{DECIMAL_SEPARATOR}{fraction}"
    return f"-{text}" if rounded < 0 else text


def format_currency(number: float | None) -> str:
    if _is_missing(number):
        return f"0{CURRENCY_SUFFIX}"
    return f"{format_number(number)}{CURRENCY_SUFFIX}"


def format_sold_count(sold: int | None) -> str:
    """Abbreviate counts from one thousand up, e.g. ``1500`` -> ``1.5k``."""
    if not sold or _is_missing(sold):
        return "0"
    if sold >= 1000:
        return f"{sold / 1000:.1f}".replace(".0", "", 1) + "k"
    return str(sold)


def truncate_text(text: str | None, max_length: int = 50) -> str:
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[:max_length].strip() + "..."
