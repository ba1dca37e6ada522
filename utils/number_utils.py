"""
Number utilities for Brazilian-locale spreadsheet values.

Spreadsheets filled by the commercial team mix three encodings in the
same column: real numeric cells, text like "R$ 1.234,56" and text like
"50.00" exported by other tools.
"""

import math
import re
from numbers import Real
from typing import Any

CURRENCY_SYMBOL = "R$"

_NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_WHITESPACE = re.compile(r"\s+")


def normalize_numeric(raw: Any) -> float:
    """
    Parse a locale-formatted monetary or quantity value.

    - None, "" and whitespace-only text → NaN (missing)
    - int/float → returned unchanged
    - text: currency symbol and whitespace removed, decimal comma
      converted to a decimal point, then parsed

    Examples:
        "1.234,56" → 1234.56
        "R$ 10,00" → 10.0
        "3.0"      → 3.0
        42         → 42
        "abc"      → NaN

    Never raises; anything unparsable becomes NaN.
    """
    if raw is None:
        return math.nan

    # bool is an int subclass but never a quantity
    if isinstance(raw, bool):
        return math.nan

    if isinstance(raw, Real):
        return raw

    if not isinstance(raw, str):
        return math.nan

    text = _WHITESPACE.sub("", raw.replace(CURRENCY_SYMBOL, ""))
    if not text:
        return math.nan

    text = _to_decimal_point(text)

    if not _NUMBER_PATTERN.fullmatch(text):
        return math.nan
    return float(text)


def _to_decimal_point(text: str) -> str:
    """
    Rewrite grouping/decimal separators so float() can read the text.

    "1.234,56" → "1234.56"   (Brazilian)
    "1,234.56" → "1234.56"   (separator that comes last is the decimal)
    "50,00"    → "50.00"
    "1.234.567" → "1234567"  (repeated separator is grouping)
    """
    has_comma = "," in text
    has_dot = "." in text

    if has_comma and has_dot:
        if text.rfind(",") > text.rfind("."):
            return text.replace(".", "").replace(",", ".")
        return text.replace(",", "")

    if has_comma:
        if text.count(",") > 1:
            return text.replace(",", "")
        return text.replace(",", ".")

    if has_dot and text.count(".") > 1:
        return text.replace(".", "")

    return text


def is_positive_number(value: float) -> bool:
    """Finite and strictly greater than zero."""
    return math.isfinite(value) and value > 0


def round_money(value: float) -> float:
    """Round to cents."""
    return round(value, 2)
