"""
Pairwise 2×2 chi-square comparisons with Bonferroni correction.

Correction convention: the raw p-value is scaled,
``corrected_p = min(1, raw_p × num_comparisons)``, and a pair is significant
iff ``corrected_p < alpha``.  This is equivalent to comparing raw_p against
``alpha / num_comparisons``; the scaled-alpha form is only ever shown as a
display value (see ``bonferroni_alpha``) and never drives a verdict.

Only the upper triangle (i < j, in input order) is computed.  The matrix is
then filled symmetrically from those entries; the diagonal is the
SELF_COMPARISON_P_VALUE constant.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations

import numpy as np

from .config import PAIRWISE_DEGREES_OF_FREEDOM, SELF_COMPARISON_P_VALUE
from .contingency import ContingencyRow, ContingencyTable, expected_counts
from .overall_tests import chi_square_p_value, pearson_chi_square


@dataclass(frozen=True)
class PairwiseEntry:
    """
    One unordered pair.  ``error`` is set (and the numeric fields are None)
    when the pair could not be tested.
    """

    group_a: str
    group_b: str
    statistic: float | None
    raw_p_value: float | None
    corrected_p_value: float | None
    is_significant: bool
    error: str | None = None


@dataclass(frozen=True)
class PairwiseResults:
    entries: tuple[PairwiseEntry, ...]
    matrix: dict[str, dict[str, float | None]]
    num_comparisons: int
    errors: tuple[str, ...]

    def lookup(self, group_a: str, group_b: str) -> PairwiseEntry | None:
        """Entry for a pair in either order, or None for unknown / identical names."""
        for entry in self.entries:
            if {entry.group_a, entry.group_b} == {group_a, group_b} and group_a != group_b:
                return entry
        return None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def count_comparisons(n_groups: int) -> int:
    """Number of unordered pairs: k(k - 1) / 2."""
    return n_groups * (n_groups - 1) // 2


def bonferroni_adjust(raw_p_value: float, num_comparisons: int) -> float:
    """Bonferroni-scaled p-value, capped at 1."""
    return min(1.0, raw_p_value * max(num_comparisons, 1))


def bonferroni_alpha(alpha: float, num_comparisons: int) -> float:
    """Equivalent per-comparison critical level (display only)."""
    return alpha / max(num_comparisons, 1)


def two_by_two_chi_square(row_a: ContingencyRow, row_b: ContingencyRow) -> tuple[float, float]:
    """
    Pearson chi-square (df = 1) on the 2×2 table of two categories.

    Expected counts come from the sub-table's own marginals, not from the
    overall table.

    Returns:
        Tuple of (statistic, raw p-value).
    """
    observed = np.array(
        [
            [row_a.experienced, row_a.not_experienced],
            [row_b.experienced, row_b.not_experienced],
        ],
        dtype=float,
    )
    statistic = pearson_chi_square(observed, expected_counts(observed))
    return statistic, chi_square_p_value(statistic, PAIRWISE_DEGREES_OF_FREEDOM)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

def _skipped_entry(row_a: ContingencyRow, row_b: ContingencyRow) -> PairwiseEntry:
    empty = [row.name for row in (row_a, row_b) if row.is_degenerate]
    detail = " and ".join(f"'{name}'" for name in empty)
    return PairwiseEntry(
        group_a=row_a.name,
        group_b=row_b.name,
        statistic=None,
        raw_p_value=None,
        corrected_p_value=None,
        is_significant=False,
        error=(
            f"Comparison {row_a.name} vs {row_b.name} skipped: "
            f"{detail} {'has' if len(empty) == 1 else 'have'} a total count of 0."
        ),
    )


def run_pairwise_comparisons(table: ContingencyTable) -> PairwiseResults:
    """
    Test every unordered pair of categories and assemble the matrix.

    Args:
        table: Output of build_contingency_table with ``is_valid`` True.

    Returns:
        PairwiseResults with entries in input order (i < j), a symmetric
        name × name matrix of corrected p-values, the comparison count, and
        per-pair error messages.

    Raises:
        ValueError: If the table failed validation.
    """
    if not table.is_valid:
        raise ValueError("Pairwise comparisons require a validated contingency table.")

    num_comparisons = count_comparisons(table.n_groups)

    entries: list[PairwiseEntry] = []
    errors: list[str] = []
    for row_a, row_b in combinations(table.rows, 2):
        if row_a.is_degenerate or row_b.is_degenerate:
            entry = _skipped_entry(row_a, row_b)
            errors.append(entry.error)
            entries.append(entry)
            continue

        statistic, raw_p = two_by_two_chi_square(row_a, row_b)
        corrected_p = bonferroni_adjust(raw_p, num_comparisons)
        entries.append(PairwiseEntry(
            group_a=row_a.name,
            group_b=row_b.name,
            statistic=statistic,
            raw_p_value=raw_p,
            corrected_p_value=corrected_p,
            is_significant=corrected_p < table.alpha,
        ))

    matrix: dict[str, dict[str, float | None]] = {
        name: {other: None for other in table.group_names}
        for name in table.group_names
    }
    for name in table.group_names:
        matrix[name][name] = SELF_COMPARISON_P_VALUE
    for entry in entries:
        matrix[entry.group_a][entry.group_b] = entry.corrected_p_value
        matrix[entry.group_b][entry.group_a] = entry.corrected_p_value

    return PairwiseResults(
        entries=tuple(entries),
        matrix=matrix,
        num_comparisons=num_comparisons,
        errors=tuple(errors),
    )
