"""Numeric normalization and unit conversion.

Every function here is total: malformed input yields ``None`` instead of
raising, and callers treat ``None`` as "field absent".
"""

import math
import re
from typing import Any, Optional, Union

Number = Union[int, float]

SQFT_PER_ACRE = 43560

_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?|\.\d+")


def _as_finite(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return float(value)


def parse_number(text: Any) -> Optional[float]:
    """Parse the first number out of free-form text.

    Thousands separators are stripped first, so "1,850 sq ft" gives 1850.0.
    Numbers pass through unchanged; booleans, containers and text without
    digits give None.
    """
    if text is None or isinstance(text, bool):
        return None
    if isinstance(text, (int, float)):
        return _as_finite(text)
    if not isinstance(text, str):
        return None

    match = _NUMBER_RE.search(text.replace(",", ""))
    if not match:
        return None
    return float(match.group())


def parse_bounded_number(
    text: Any,
    minimum: Optional[Number] = None,
    maximum: Optional[Number] = None,
) -> Optional[float]:
    """Parse a number and reject it when outside the inclusive bounds."""
    value = parse_number(text)
    if value is None:
        return None
    if minimum is not None and value < minimum:
        return None
    if maximum is not None and value > maximum:
        return None
    return value


def parse_digits(text: Any) -> Optional[int]:
    """Keep only the digits of a snippet, e.g. "$650,000" -> 650000."""
    if isinstance(text, bool):
        return None
    if isinstance(text, (int, float)):
        value = _as_finite(text)
        return round_half_up(value) if value is not None else None
    if not isinstance(text, str):
        return None

    digits = "".join(filter(str.isdigit, text))
    return int(digits) if digits else None


def round_half_up(value: Any) -> Optional[int]:
    """Round to the nearest integer, halves away from zero."""
    number = _as_finite(value)
    if number is None:
        return None
    rounded = math.floor(abs(number) + 0.5)
    return int(rounded if number >= 0 else -rounded)


def acres_to_sqft(acres: Any) -> Optional[int]:
    """Convert acres to square feet: acres_to_sqft(0.25) == 10890."""
    value = parse_number(acres)
    if value is None:
        return None
    return round_half_up(value * SQFT_PER_ACRE)


def combine_baths(full: Any, half: Any = 0) -> Optional[float]:
    """Total bathrooms from full and half counts: combine_baths(2, 1) == 2.5.

    A missing component counts as zero; None is returned only when neither
    component is numeric.
    """
    full_value = parse_number(full)
    half_value = parse_number(half)
    if full_value is None and half_value is None:
        return None
    return (full_value or 0) + (half_value or 0) * 0.5


def lot_size_to_sqft(value: Any) -> Optional[int]:
    """Lot size in square feet, converting values tagged as acres.

    "0.25 acres" gives 10890; "7,500 sq ft" and 7500.4 give 7500.
    """
    if isinstance(value, str) and "acre" in value.lower():
        return acres_to_sqft(value)
    return round_half_up(parse_number(value))
