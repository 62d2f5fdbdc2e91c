"""
Unit tests for src/disparity/pairwise.py.

Covers:
- 2×2 sub-table statistic uses its own marginals (matches scipy, no Yates)
- Bonferroni scaling, cap at 1, and corrected-p verdicts
- Matrix symmetry, diagonal, and skipped pairs for empty categories
"""

from __future__ import annotations

import pytest
from scipy.stats import chi2_contingency

from src.disparity.config import SELF_COMPARISON_P_VALUE
from src.disparity.contingency import build_contingency_table
from src.disparity.pairwise import (
    bonferroni_adjust,
    bonferroni_alpha,
    count_comparisons,
    run_pairwise_comparisons,
)


def _pairwise(groups, alpha=0.05):
    return run_pairwise_comparisons(build_contingency_table(alpha, groups))


# ---------------------------------------------------------------------------
# Class: helpers
# ---------------------------------------------------------------------------

class TestHelpers:

    @pytest.mark.parametrize("k,expected", [(2, 1), (3, 3), (4, 6), (5, 10), (10, 45)])
    def test_count_comparisons(self, k, expected):
        assert count_comparisons(k) == expected

    def test_bonferroni_scales_raw_p(self):
        assert bonferroni_adjust(0.02, 3) == pytest.approx(0.06)

    def test_bonferroni_caps_at_one(self):
        assert bonferroni_adjust(0.5, 3) == 1.0
        assert bonferroni_adjust(1.0, 10) == 1.0

    @pytest.mark.parametrize("raw", [0.0, 1e-8, 0.01, 0.4, 1.0])
    def test_bonferroni_never_below_raw(self, raw):
        assert bonferroni_adjust(raw, 6) >= raw

    def test_bonferroni_alpha(self):
        assert bonferroni_alpha(0.05, 10) == pytest.approx(0.005)


# ---------------------------------------------------------------------------
# Class: comparisons
# ---------------------------------------------------------------------------

class TestComparisons:

    def test_two_groups_single_comparison(self, two_group_disparity):
        results = _pairwise(two_group_disparity)
        assert results.num_comparisons == 1
        assert len(results.entries) == 1

        entry = results.entries[0]
        chi2, p, _, _ = chi2_contingency([[50, 50], [80, 20]], correction=False)
        assert entry.statistic == pytest.approx(chi2)
        assert entry.raw_p_value == pytest.approx(p)
        assert entry.corrected_p_value == entry.raw_p_value
        assert entry.is_significant
        assert entry.error is None

    def test_sub_table_uses_own_marginals(self, four_groups):
        results = _pairwise(four_groups)
        entry = results.lookup("B", "D")
        chi2, p, _, _ = chi2_contingency([[80, 20], [20, 80]], correction=False)
        assert entry.statistic == pytest.approx(chi2)
        assert entry.raw_p_value == pytest.approx(p)
        assert entry.corrected_p_value == pytest.approx(min(1.0, p * 6))

    def test_entries_in_input_order(self, four_groups):
        results = _pairwise(four_groups)
        pairs = [(e.group_a, e.group_b) for e in results.entries]
        assert pairs == [
            ("A", "B"), ("A", "C"), ("A", "D"),
            ("B", "C"), ("B", "D"), ("C", "D"),
        ]

    def test_verdict_uses_corrected_p(self, borderline_three_groups):
        results = _pairwise(borderline_three_groups)
        entry = results.lookup("A", "B")
        assert entry.raw_p_value < 0.05
        assert entry.corrected_p_value == pytest.approx(entry.raw_p_value * 3)
        assert entry.corrected_p_value >= 0.05
        assert not entry.is_significant

    def test_identical_pair_not_significant(self, four_groups):
        entry = _pairwise(four_groups).lookup("A", "C")
        assert entry.statistic == pytest.approx(0.0)
        assert entry.corrected_p_value == pytest.approx(1.0)
        assert not entry.is_significant

    def test_invalid_table_raises(self):
        with pytest.raises(ValueError):
            run_pairwise_comparisons(build_contingency_table(2, []))


# ---------------------------------------------------------------------------
# Class: matrix
# ---------------------------------------------------------------------------

class TestMatrix:

    def test_symmetric_with_unit_diagonal(self, four_groups):
        matrix = _pairwise(four_groups).matrix
        names = ["A", "B", "C", "D"]
        assert list(matrix) == names
        for a in names:
            assert matrix[a][a] == SELF_COMPARISON_P_VALUE
            for b in names:
                assert matrix[a][b] == matrix[b][a]

    def test_matrix_holds_corrected_values(self, four_groups):
        results = _pairwise(four_groups)
        for entry in results.entries:
            assert results.matrix[entry.group_a][entry.group_b] == entry.corrected_p_value

    def test_lookup_either_order(self, four_groups):
        results = _pairwise(four_groups)
        assert results.lookup("A", "D") is results.lookup("D", "A")
        assert results.lookup("A", "A") is None
        assert results.lookup("A", "Z") is None


# ---------------------------------------------------------------------------
# Class: skipped pairs
# ---------------------------------------------------------------------------

class TestSkippedPairs:

    def test_empty_category_pairs_skipped(self, groups_with_empty):
        results = _pairwise(groups_with_empty)
        assert results.num_comparisons == 3
        assert len(results.errors) == 2

        skipped = results.lookup("A", "Empty")
        assert skipped.error == "Comparison A vs Empty skipped: 'Empty' has a total count of 0."
        assert skipped.corrected_p_value is None
        assert not skipped.is_significant
        assert results.matrix["A"]["Empty"] is None
        assert results.matrix["Empty"]["A"] is None

    def test_other_pairs_still_computed(self, groups_with_empty):
        results = _pairwise(groups_with_empty)
        entry = results.lookup("A", "B")
        assert entry.error is None
        assert entry.corrected_p_value == pytest.approx(min(1.0, entry.raw_p_value * 3))

    def test_both_empty_message(self):
        results = _pairwise([
            {"name": "X", "experienced": 0, "notExperienced": 0},
            {"name": "Y", "experienced": 0, "notExperienced": 0},
        ])
        assert results.errors == (
            "Comparison X vs Y skipped: 'X' and 'Y' have a total count of 0.",
        )
