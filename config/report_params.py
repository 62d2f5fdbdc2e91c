"""
Statistical and display parameters for the disparity calculator.

This is the AUTHORITATIVE source for numeric constants.
src/disparity/config.py and src/reporting/config.py import from here — do not
maintain parallel copies.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Significance level
# ---------------------------------------------------------------------------

DEFAULT_ALPHA: float = 0.05

# Open interval (0, 1) with guard bounds so alpha never reaches the endpoints.
ALPHA_LOWER_BOUND: float = 1e-10
ALPHA_UPPER_BOUND: float = 1 - 1e-10

# ---------------------------------------------------------------------------
# Contingency table
# ---------------------------------------------------------------------------

MIN_GROUPS: int = 2

# Continuity correction subtracted from each |O - E| (Yates)
YATES_CORRECTION: float = 0.5

# ---------------------------------------------------------------------------
# p-value sentinels
# ---------------------------------------------------------------------------

# Returned when the chi-square survival function yields NaN.
# 1.0 = no evidence of a difference.
NAN_P_VALUE_SENTINEL: float = 1.0

# Stored on the matrix diagonal (a group compared with itself).
SELF_COMPARISON_P_VALUE: float = 1.0

# ---------------------------------------------------------------------------
# Display precision (report document and console summaries)
# ---------------------------------------------------------------------------

SCIENTIFIC_DIGITS: int = 3
DECIMAL_PLACES: int = 3
PERCENT_PLACES: int = 1
