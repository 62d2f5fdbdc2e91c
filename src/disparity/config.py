"""
Engine-layer configuration: statistical constants, interpretation labels,
and test display names.

Numeric constants are imported from config/report_params.py (authoritative);
labels used across the overall and pairwise engines are centralized here so
that the wording is identical in every view.
"""

from config.report_params import (  # noqa: F401  (re-exported)
    ALPHA_LOWER_BOUND,
    ALPHA_UPPER_BOUND,
    DEFAULT_ALPHA,
    MIN_GROUPS,
    NAN_P_VALUE_SENTINEL,
    SELF_COMPARISON_P_VALUE,
    YATES_CORRECTION,
)

# ---------------------------------------------------------------------------
# Degrees of freedom
# ---------------------------------------------------------------------------

# Every pairwise comparison is a 2×2 table.
PAIRWISE_DEGREES_OF_FREEDOM: int = 1

# ---------------------------------------------------------------------------
# Interpretation labels
# ---------------------------------------------------------------------------

SIGNIFICANT_LABEL = "Statistically different"
NOT_SIGNIFICANT_LABEL = "Not statistically different"

# ---------------------------------------------------------------------------
# Overall test display names, keyed by the output-contract field name
# ---------------------------------------------------------------------------

TEST_NAMES: dict[str, str] = {
    "chiSquare":      "Chi-square",
    "chiSquareYates": "Chi-square (Yates)",
    "gTest":          "G-Test",
}
