"""
Reporting-layer configuration: project paths, output file names, and report
document styling.

Display precision is imported from config/report_params.py (authoritative).
"""

from pathlib import Path

from config.report_params import (  # noqa: F401  (re-exported)
    DECIMAL_PLACES,
    DEFAULT_ALPHA,
    PERCENT_PLACES,
    SCIENTIFIC_DIGITS,
)

# ---------------------------------------------------------------------------
# Project paths
# ---------------------------------------------------------------------------

# Resolve from this file: src/reporting/config.py → src/reporting → src → root
PROJECT_ROOT = Path(__file__).resolve().parents[2]

DATA_DIR    = PROJECT_ROOT / "data"
RESULTS_DIR = PROJECT_ROOT / "results"

# Default input: the request contract as JSON
REQUEST_PATH = DATA_DIR / "request.json"

# ---------------------------------------------------------------------------
# Output file names (written under RESULTS_DIR or a caller-supplied directory)
# ---------------------------------------------------------------------------

REPORT_STEM = "statistical-report"

CSV_FILENAME  = f"{REPORT_STEM}.csv"
JSON_FILENAME = f"{REPORT_STEM}.json"
DOCX_FILENAME = f"{REPORT_STEM}.docx"

# ---------------------------------------------------------------------------
# Report document styling
# ---------------------------------------------------------------------------

DOCX_FONT_NAME = "Times New Roman"
DOCX_BODY_SIZE = 11       # pt
DOCX_HEADING_SIZES: dict[int, int] = {1: 14, 2: 12}   # heading level → pt
DOCX_MARGINS_INCHES: dict[str, float] = {
    "top": 1, "bottom": 1, "left": 1, "right": 1,
}

# Landscape from this many categories upward (pairwise matrix width)
DOCX_LANDSCAPE_MIN_GROUPS = 6

DISCLAIMER = (
    "The interpretations (\"Statistically different\" or \"Not statistically "
    "different\") are based purely on the chosen significance level (α). "
    "Statistical significance does not imply practical significance or "
    "causality. Consider the context, potential confounding factors, and "
    "domain expertise when interpreting results."
)
