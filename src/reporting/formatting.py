"""
Number formatting for the report document and console summaries.

None and NaN render as "N/A"; infinities render as "Infinity" / "-Infinity".
The CSV and JSON exports do not use these helpers: they carry raw floats.
"""

from __future__ import annotations

import math

from .config import DECIMAL_PLACES, PERCENT_PLACES, SCIENTIFIC_DIGITS

MISSING = "N/A"


def _special(value: float | int | None) -> str | None:
    if value is None or math.isnan(value):
        return MISSING
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return None


def format_scientific(
    value: float | int | None,
    significant_digits: int = SCIENTIFIC_DIGITS,
) -> str:
    """
    Scientific notation with ``significant_digits`` digits, e.g. 8.68e-06.

    Exact zero and values at or above 0.001 are shown in fixed notation
    (0, 0.0432, 1) so that unremarkable p-values stay readable.
    """
    special = _special(value)
    if special is not None:
        return special
    if value == 0:
        return "0"
    if abs(value) >= 1e-3:
        return f"{value:.{significant_digits}g}"
    return f"{value:.{max(significant_digits - 1, 0)}e}"


def format_decimal(
    value: float | int | None,
    decimal_places: int = DECIMAL_PLACES,
) -> str:
    """Fixed-point with ``decimal_places`` places."""
    special = _special(value)
    if special is not None:
        return special
    return f"{value:.{decimal_places}f}"


def format_percent(
    value: float | int | None,
    decimal_places: int = PERCENT_PLACES,
) -> str:
    """Percentage for a value already on the 0-100 scale, e.g. 62.5%."""
    special = _special(value)
    if special is not None:
        return special
    return f"{value:.{decimal_places}f}%"
