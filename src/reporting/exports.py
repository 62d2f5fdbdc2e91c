"""
Flat CSV and JSON exports of a MultiComparisonResult.

CSV layout: one row per record, with the kind of record in ``record_type``:

    parameter     — alpha, degrees of freedom, number of comparisons,
                    Bonferroni critical level
    group         — one per category (counts, percent, expected counts)
    overall_test  — Chi-square, Chi-square (Yates), G-Test
    pairwise      — one per unordered pair (raw and corrected p-values)
    error         — one per validation error, warning, or per-pair error

Floats are written unrounded so the file carries the same precision as the
engine.  Quoting is pandas' default (minimal, doubled embedded quotes).

The JSON export is the output contract from MultiComparisonResult.to_dict().
"""

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd

from src.disparity.config import TEST_NAMES
from src.disparity.pairwise import bonferroni_alpha
from src.disparity.report import MultiComparisonResult

from .config import CSV_FILENAME, JSON_FILENAME, RESULTS_DIR

CSV_COLUMNS = [
    "record_type", "name", "comparison", "value",
    "experienced", "not_experienced", "row_total", "percent_experienced",
    "expected_experienced", "expected_not_experienced",
    "statistic", "p_value", "corrected_p_value", "degrees_of_freedom",
    "significant", "interpretation", "message",
]


def _require_data(result: MultiComparisonResult) -> None:
    if result.is_rejected or not result.table.rows:
        raise ValueError("No report data available to export.")


# ---------------------------------------------------------------------------
# CSV
# ---------------------------------------------------------------------------

def results_to_frame(result: MultiComparisonResult) -> pd.DataFrame:
    """
    Flatten a completed report into the CSV record layout.

    Args:
        result: A completed (non-rejected) report.

    Returns:
        DataFrame with columns CSV_COLUMNS.

    Raises:
        ValueError: If the report holds no contingency data.
    """
    _require_data(result)
    stats = result.overall_stats
    records: list[dict] = []

    for name, value in (
        ("alpha", result.alpha),
        ("degrees_of_freedom", stats.degrees_of_freedom),
        ("num_comparisons", result.num_comparisons),
        ("bonferroni_alpha", bonferroni_alpha(result.alpha, result.num_comparisons)),
    ):
        records.append({"record_type": "parameter", "name": name, "value": value})

    for row in result.observed_data:
        records.append({
            "record_type": "group",
            "name": row.name,
            "experienced": row.experienced,
            "not_experienced": row.not_experienced,
            "row_total": row.row_total,
            "percent_experienced": row.percent_experienced,
            "expected_experienced": row.expected_experienced,
            "expected_not_experienced": row.expected_not_experienced,
            "statistic": stats.contributions[row.name],
        })

    for display_name, test in zip(
        TEST_NAMES.values(),
        (stats.chi_square, stats.chi_square_yates, stats.g_test),
    ):
        records.append({
            "record_type": "overall_test",
            "name": display_name,
            "statistic": test.statistic,
            "p_value": test.p_value,
            "degrees_of_freedom": test.degrees_of_freedom,
            "significant": test.is_significant,
            "interpretation": test.interpretation,
        })

    for entry in result.pairwise_comparisons:
        records.append({
            "record_type": "pairwise",
            "name": entry.group_a,
            "comparison": entry.group_b,
            "statistic": entry.statistic,
            "p_value": entry.raw_p_value,
            "corrected_p_value": entry.corrected_p_value,
            "degrees_of_freedom": None if entry.error else 1,
            "significant": entry.is_significant,
            "message": entry.error,
        })

    for message in result.errors:
        records.append({"record_type": "error", "message": message})

    return pd.DataFrame(records, columns=CSV_COLUMNS)


def export_results_csv(
    result: MultiComparisonResult,
    output_path: Path = RESULTS_DIR / CSV_FILENAME,
) -> Path:
    """Write the flat CSV export and return its path."""
    frame = results_to_frame(result)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(output_path, index=False, encoding="utf-8")
    print(f"CSV report exported to {output_path}")
    return output_path


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

def export_results_json(
    result: MultiComparisonResult,
    output_path: Path = RESULTS_DIR / JSON_FILENAME,
) -> Path:
    """
    Write the output contract as JSON and return its path.

    Rejected reports are written too (``overallStats`` null, ``errors``
    populated).  An infinite statistic is written as ``Infinity``.
    ``to_dict()`` holds only built-in types.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as fh:
        json.dump(result.to_dict(), fh, indent=2)
    print(f"JSON report exported to {output_path}")
    return output_path
