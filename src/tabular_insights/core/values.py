"""Scalar helpers for loosely-typed record values.

A cell in a record is one of three shapes: null (None, NaN or the empty
string), a number, or text. These helpers are the single place where raw cell
values are inspected; the profiling modules only call them.
"""

from __future__ import annotations

import math
import warnings
from datetime import date
from decimal import Decimal
from typing import Any, Optional

import numpy as np
import pandas as pd


def is_missing(value: Any) -> bool:
    """Return True for None, NaN and pandas missing markers (not for "")."""
    if value is None:
        return True
    if isinstance(value, (float, np.floating)):
        return math.isnan(value)
    return value is pd.NaT or value is pd.NA


def is_null(value: Any) -> bool:
    """Return True when a cell counts as null: missing or the empty string."""
    if isinstance(value, str):
        return value == ""
    return is_missing(value)


def is_number(value: Any) -> bool:
    """Return True for finite real numbers. Booleans are not numbers."""
    if isinstance(value, (bool, np.bool_)):
        return False
    if isinstance(value, (int, np.integer)):
        # Ints beyond the float range cannot take part in float arithmetic
        try:
            float(value)
        except OverflowError:
            return False
        return True
    if isinstance(value, (float, np.floating)):
        return math.isfinite(value)
    return False


def format_number(value: float) -> str:
    """Render a number the way it is shown in digests and group keys.

    Integral values drop the trailing ``.0`` ("300", not "300.0").

    Examples:
        >>> format_number(300.0)
        '300'
        >>> format_number(1.5)
        '1.5'
        >>> format_number(0.00001)
        '0.00001'
        >>> format_number(1e-07)
        '1e-7'
    """
    if isinstance(value, (int, np.integer)) and not isinstance(value, bool):
        return str(int(value))
    number = float(value)
    if number.is_integer() and abs(number) < 1e21:
        return str(int(number))
    text = repr(number)
    if "e" not in text:
        return text
    mantissa, exponent = text.split("e")
    power = int(exponent)
    # Positional notation for exponents in [-6, 20], as in the published summaries
    if -7 < power < 21:
        return format(Decimal(text), "f")
    return f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"


def value_text(value: Any) -> str:
    """Return the string form of a cell value."""
    if isinstance(value, (bool, np.bool_)):
        return "true" if value else "false"
    if is_number(value):
        return format_number(value)
    return str(value)


def parse_numeric_literal(value: Any) -> Optional[float]:
    """Parse a value that is a number or a lossless numeric literal.

    A string qualifies only when its parsed number renders back to the same
    (trimmed) text, so ``"007"``, ``"1,000"``, ``"5.0"`` and ``"1e5"`` are
    rejected.

    Returns:
        The parsed float, or None when the value is not a numeric literal.

    Examples:
        >>> parse_numeric_literal("42")
        42.0
        >>> parse_numeric_literal("007") is None
        True
    """
    if is_number(value):
        return float(value)
    if not isinstance(value, str):
        return None
    text = value.strip()
    try:
        parsed = float(text)
    except ValueError:
        return None
    if not math.isfinite(parsed):
        return None
    return parsed if format_number(parsed) == text else None


def parse_number(value: Any) -> Optional[float]:
    """Parse a value into a finite float, accepting any plain numeric text.

    Unlike `parse_numeric_literal` this keeps padded or reformatted numbers
    (``"007"``, ``"10.50"``, ``"1e5"``). Thousands separators, underscores and
    non-finite values are rejected.

    Examples:
        >>> parse_number("10.50")
        10.5
        >>> parse_number("1_000") is None
        True
    """
    if is_number(value):
        return float(value)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text or "_" in text:
        return None
    try:
        parsed = float(text)
    except ValueError:
        return None
    return parsed if math.isfinite(parsed) else None


def parses_as_date(value: Any) -> bool:
    """Return True when a value is, or parses to, a calendar date/time.

    Strings must contain at least one digit; bare words such as weekday or
    month names are rejected even though a lenient parser accepts them.
    """
    if isinstance(value, (date, pd.Timestamp, np.datetime64)):
        return True
    if is_number(value):
        return True
    if not isinstance(value, str):
        return False
    text = value.strip()
    if not any(ch.isdigit() for ch in text):
        return False
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            parsed = pd.to_datetime(text, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return False
    return not pd.isna(parsed)


def round_half_up(value: float, digits: int) -> float:
    """Round to ``digits`` decimals with halves going toward +infinity.

    This matches the rounding of the published summaries (``2.5 -> 3``,
    ``-2.5 -> -2``) rather than Python's round-half-to-even. Infinite and NaN
    values are returned unchanged.

    Examples:
        >>> round_half_up(2.5, 0)
        3.0
        >>> round_half_up(-2.5, 0)
        -2.0
        >>> round_half_up(1.41421, 2)
        1.41
    """
    factor = 10 ** digits
    scaled = value * factor + 0.5
    # Non-finite input, or a magnitude with no fractional digits left to round
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled) / factor


__all__ = [
    "is_missing",
    "is_null",
    "is_number",
    "format_number",
    "value_text",
    "parse_numeric_literal",
    "parse_number",
    "parses_as_date",
    "round_half_up",
]
