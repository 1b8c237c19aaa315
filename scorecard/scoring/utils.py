"""
Utility functions for numeric and month handling in scoring calculations.
"""

import math
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

from scorecard.core.errors import ErrorCode, ScoringInputError

MONTH_PATTERN = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero.

    Python's round() uses banker's rounding (12.5 -> 12); section scores
    must round 12.5 -> 13.

    Args:
        value: Value to round

    Returns:
        Rounded integer
    """
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def ensure_finite(value: Any, name: str) -> float:
    """
    Reject NaN, infinities and non-numeric values.

    Args:
        value: Value to check
        name: Field name used in the error message

    Returns:
        Value as float

    Raises:
        ScoringInputError: If value is not a finite number
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ScoringInputError(
            f"{name} must be a number, got {type(value).__name__}",
            ErrorCode.NON_FINITE_VALUE,
        )

    number = float(value)
    if not math.isfinite(number):
        raise ScoringInputError(f"{name} must be finite, got {value}", ErrorCode.NON_FINITE_VALUE)
    return number


def parse_month(month: str) -> tuple[int, int]:
    """
    Parse a YYYY-MM month string.

    Args:
        month: Month string (e.g. "2026-01")

    Returns:
        Tuple of (year, month)

    Raises:
        ScoringInputError: If the string is not a valid YYYY-MM month
    """
    match = MONTH_PATTERN.match(month) if isinstance(month, str) else None
    if match is None:
        raise ScoringInputError(f"Invalid month {month!r}, expected YYYY-MM", ErrorCode.INVALID_MONTH)
    return int(match.group(1)), int(match.group(2))


def previous_month(month: str) -> str:
    """
    Get the calendar month immediately before the given month.

    Args:
        month: Month string (YYYY-MM)

    Returns:
        Previous month string (YYYY-MM), rolling back the year after January
    """
    year, month_number = parse_month(month)
    if month_number == 1:
        return f"{year - 1:04d}-12"
    return f"{year:04d}-{month_number - 1:02d}"
