"""
Comparisons to selected reference categories.

A pure projection over the pairwise results already in a
MultiComparisonResult: for each reference category, one row against every
category that is not itself a reference.  No statistic is recomputed.

The reference selection is owned by the caller.  ``resolve_references``
applies the selection rules of the input form (default to the first
category; every name must exist).
"""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from .config import NOT_SIGNIFICANT_LABEL, SIGNIFICANT_LABEL
from .report import MultiComparisonResult

REFERENCE_COLUMNS = [
    "reference", "comparison", "statistic", "raw_p_value",
    "corrected_p_value", "is_significant", "interpretation", "error",
]


def resolve_references(
    result: MultiComparisonResult,
    references: Iterable[str] | None,
) -> list[str]:
    """
    Validate a reference selection against the categories in ``result``.

    Args:
        result: A completed (non-rejected) report.
        references: Selected category names; None or empty selects the first
            category.

    Returns:
        Selected names, de-duplicated, in selection order.

    Raises:
        ValueError: If the report was rejected or a name is not a category.
    """
    if result.is_rejected:
        raise ValueError("Reference comparisons require a completed report.")

    names = result.table.group_names
    selected = list(dict.fromkeys(references or []))
    if not selected:
        return names[:1]

    unknown = [ref for ref in selected if ref not in names]
    if unknown:
        raise ValueError(
            f"Reference categories not found in the report: {unknown}. "
            f"Available categories: {names}"
        )
    return selected


def reference_comparisons(
    result: MultiComparisonResult,
    references: Iterable[str] | None = None,
) -> pd.DataFrame:
    """
    Project the pairwise results onto the selected reference categories.

    References and comparison categories are both listed alphabetically.

    Args:
        result: A completed (non-rejected) report.
        references: Selected reference category names.

    Returns:
        DataFrame with one row per (reference, non-reference) pair and
        columns REFERENCE_COLUMNS.  Columns are object dtype; a skipped pair
        has None for its statistic, p-values and interpretation.
    """
    selected = resolve_references(result, references)
    others = sorted(name for name in result.table.group_names if name not in selected)

    records: list[dict] = []
    for reference in sorted(selected):
        for comparison in others:
            entry = result.pairwise.lookup(reference, comparison)
            if entry.error:
                interpretation = None
            else:
                interpretation = (
                    SIGNIFICANT_LABEL if entry.is_significant else NOT_SIGNIFICANT_LABEL
                )
            records.append({
                "reference": reference,
                "comparison": comparison,
                "statistic": entry.statistic,
                "raw_p_value": entry.raw_p_value,
                "corrected_p_value": entry.corrected_p_value,
                "is_significant": entry.is_significant,
                "interpretation": interpretation,
                "error": entry.error,
            })

    # object dtype keeps skipped-pair fields as None rather than NaN
    return pd.DataFrame(records, columns=REFERENCE_COLUMNS, dtype=object)
