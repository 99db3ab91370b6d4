"""Unit normalization and display formatting.

IFC exporters disagree on units and rarely tag them, so every raw magnitude
is run through a magnitude heuristic: small values are assumed to be SI and
converted, larger ones are assumed to already be imperial.

Every function here is total.  Non-positive, NaN, ``None`` and non-numeric
input normalizes to ``0`` (or a clearly-zero display string) instead of
raising.
"""

from __future__ import annotations

import math
from typing import Any

from aecmetrics.config import (
    AREA_SQ_METERS_THRESHOLD,
    COMMON_ROOF_SLOPES,
    CU_FEET_PER_CU_YARD,
    CU_METERS_TO_CU_FEET,
    LENGTH_METERS_THRESHOLD,
    METERS_TO_FEET,
    SLOPE_SNAP_TOLERANCE_DEG,
    SQ_INCHES_PER_SQ_FOOT,
    SQ_METERS_TO_SQ_FEET,
    VOLUME_CU_METERS_THRESHOLD,
)

ZERO_FEET_INCHES = "0' 0\""
ZERO_INCHES = '0"'


def positive_number(value: Any) -> float | None:
    """Return *value* as a float if it is a finite positive number, else None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = float(value)
    if math.isnan(number) or math.isinf(number) or number <= 0:
        return None
    return number


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ---------------------------------------------------------------------------
# Heuristic conversions
# ---------------------------------------------------------------------------


def length_to_feet(value: Any, assume_meters: bool = False) -> float:
    """Convert a length to feet.  Values below 0.5 are assumed to be metres."""
    number = positive_number(value)
    if number is None:
        return 0.0
    if assume_meters or number < LENGTH_METERS_THRESHOLD:
        return number * METERS_TO_FEET
    return number


def area_to_square_feet(value: Any, assume_square_meters: bool = False) -> float:
    """Convert an area to square feet.  Values below 50 are assumed to be m²."""
    number = positive_number(value)
    if number is None:
        return 0.0
    if assume_square_meters or number < AREA_SQ_METERS_THRESHOLD:
        return number * SQ_METERS_TO_SQ_FEET
    return number


def volume_to_cubic_feet(value: Any, assume_cubic_meters: bool = False) -> float:
    """Convert a volume to cubic feet.  Values below 10 are assumed to be m³."""
    number = positive_number(value)
    if number is None:
        return 0.0
    if assume_cubic_meters or number < VOLUME_CU_METERS_THRESHOLD:
        return number * CU_METERS_TO_CU_FEET
    return number


def cubic_feet_to_cubic_yards(cubic_feet: Any) -> float:
    number = positive_number(cubic_feet)
    if number is None:
        return 0.0
    return number / CU_FEET_PER_CU_YARD


def square_meters_to_square_inches(square_meters: Any) -> float:
    """Cross-section areas arrive in m² and are reported in in²."""
    number = positive_number(square_meters)
    if number is None:
        return 0.0
    return number * SQ_METERS_TO_SQ_FEET * SQ_INCHES_PER_SQ_FOOT


# ---------------------------------------------------------------------------
# Display formatting
# ---------------------------------------------------------------------------


def _split_feet_inches(feet: float) -> tuple[int, int]:
    whole = math.floor(feet)
    inches = round_half_up((feet - whole) * 12)
    if inches == 12:
        whole += 1
        inches = 0
    return whole, inches


def format_feet_inches(feet: Any) -> str:
    """Format a value already in feet as ``F' I"`` (``12' 6"``, ``9'``)."""
    number = positive_number(feet)
    if number is None:
        return ZERO_FEET_INCHES
    whole, inches = _split_feet_inches(number)
    if inches > 0:
        return f"{whole}' {inches}\""
    return f"{whole}'"


def length_to_feet_inches(value: Any, assume_meters: bool = False) -> str:
    """Apply the length heuristic, then format as feet and inches."""
    number = positive_number(value)
    if number is None:
        return ZERO_FEET_INCHES
    return format_feet_inches(length_to_feet(number, assume_meters))


def format_length_feet(feet: Any, use_feet_inches: bool = False) -> str:
    number = positive_number(feet)
    if number is None:
        return "0 ft"
    if use_feet_inches:
        return format_feet_inches(number)
    return f"{number:.2f} ft"


def format_inches_fraction(feet: Any, max_denominator: int = 16) -> str:
    """Format a length in feet as fractional inches, e.g. ``3-1/2"``.

    The fraction is rounded to *max_denominator* and reduced.  A
    denominator of 256 (Revit's internal precision) is shown to the
    nearest quarter inch.
    """
    number = positive_number(feet)
    limit = positive_number(max_denominator)
    if number is None or limit is None or int(limit) <= 0:
        return ZERO_INCHES
    max_denominator = int(limit)

    total_inches = number * 12
    whole = math.floor(total_inches)
    numerator = round_half_up((total_inches - whole) * max_denominator)
    denominator = max_denominator

    if numerator == denominator:
        whole += 1
        numerator = 0

    if denominator == 256 and numerator != 0:
        quarters = round_half_up(numerator / 256 * 4)
        if quarters == 4:
            whole += 1
            numerator = 0
        elif quarters == 0:
            numerator = 0
        else:
            numerator, denominator = quarters, 4

    if numerator != 0:
        divisor = math.gcd(numerator, denominator) or 1
        numerator //= divisor
        denominator //= divisor

    if whole == 0 and numerator == 0:
        return ZERO_INCHES
    if numerator == 0:
        return f'{whole}"'
    if whole == 0:
        return f'{numerator}/{denominator}"'
    return f'{whole}-{numerator}/{denominator}"'


def _format_dashed_feet_inches(feet: float) -> str:
    whole, inches = _split_feet_inches(feet)
    return f"{whole}'-{inches}\""


def format_size_display(width_ft: Any, height_ft: Any) -> str:
    """Format a width x height pair as ``3'-0" x 7'-0" (36" x 84")``.

    Returns an empty string unless both sides are positive.
    """
    width = positive_number(width_ft)
    height = positive_number(height_ft)
    if width is None or height is None:
        return ""
    width_in = round_half_up(width * 12)
    height_in = round_half_up(height * 12)
    return (
        f"{_format_dashed_feet_inches(width)} x {_format_dashed_feet_inches(height)} "
        f'({width_in}" x {height_in}")'
    )


def format_square_feet(square_feet: Any) -> str:
    number = positive_number(square_feet)
    return f"{number or 0.0:.2f}"


def format_area_display(square_feet: Any) -> str:
    """``123.40 SF``"""
    return f"{format_square_feet(square_feet)} SF"


def format_square_inches(square_inches: Any) -> str:
    number = positive_number(square_inches)
    return f"{number or 0.0:.2f} sq in"


def format_cubic_feet(cubic_feet: Any) -> str:
    number = positive_number(cubic_feet)
    if number is None:
        return "0.00"
    return f"{number:.2f} cu ft"


def format_cubic_yards(cubic_yards: Any) -> str:
    number = positive_number(cubic_yards)
    if number is None:
        return "0.00"
    return f"{number:.2f} cu yd"


# ---------------------------------------------------------------------------
# Roof slope
# ---------------------------------------------------------------------------


def pitch_angle_degrees(value: Any) -> float | None:
    """Return a pitch in degrees from a ratio (0-1) or a degree value (1-90)."""
    number = positive_number(value)
    if number is None:
        return None
    if number < 1:
        return math.degrees(math.atan(number))
    if number < 90:
        return number
    return None


def pitch_to_slope(value: Any) -> str | None:
    """Render a slope that may be a ratio, degrees, or an exporter string.

    Ratios become ``N" / 12"``; degrees snap to the nearest common roofing
    ratio within half a degree, otherwise they are shown as ``18.0°``.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    number = positive_number(value)
    if number is None:
        return str(value)
    if number < 1:
        return f'{round_half_up(number * 12)}" / 12"'
    if number < 90:
        for degrees, ratio in COMMON_ROOF_SLOPES:
            if abs(number - degrees) < SLOPE_SNAP_TOLERANCE_DEG:
                return ratio
        return f"{number:.1f}°"
    return str(value)
