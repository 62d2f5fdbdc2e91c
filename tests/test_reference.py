"""Unit tests for src/disparity/reference.py."""

from __future__ import annotations

import pytest

from src.disparity.config import NOT_SIGNIFICANT_LABEL, SIGNIFICANT_LABEL
from src.disparity.reference import (
    REFERENCE_COLUMNS,
    reference_comparisons,
    resolve_references,
)
from src.disparity.report import perform_multi_comparison_report


@pytest.fixture
def four_group_result(four_groups):
    return perform_multi_comparison_report(0.05, four_groups)


# ---------------------------------------------------------------------------
# Class: selection
# ---------------------------------------------------------------------------

class TestResolveReferences:

    @pytest.mark.parametrize("references", [None, []])
    def test_defaults_to_first_category(self, four_group_result, references):
        assert resolve_references(four_group_result, references) == ["A"]

    def test_deduplicates_in_order(self, four_group_result):
        assert resolve_references(four_group_result, ["C", "A", "C"]) == ["C", "A"]

    def test_unknown_name_raises(self, four_group_result):
        with pytest.raises(ValueError, match="not found"):
            resolve_references(four_group_result, ["A", "Nope"])

    def test_rejected_report_raises(self):
        rejected = perform_multi_comparison_report(0, [])
        with pytest.raises(ValueError):
            resolve_references(rejected, ["A"])


# ---------------------------------------------------------------------------
# Class: projection
# ---------------------------------------------------------------------------

class TestReferenceComparisons:

    def test_single_reference(self, four_group_result):
        frame = reference_comparisons(four_group_result, ["A"])
        assert list(frame.columns) == REFERENCE_COLUMNS
        assert list(frame["comparison"]) == ["B", "C", "D"]
        assert set(frame["reference"]) == {"A"}

    def test_values_come_from_matrix(self, four_group_result):
        frame = reference_comparisons(four_group_result, ["A"])
        matrix = four_group_result.pairwise_results_matrix
        for rec in frame.to_dict("records"):
            assert rec["corrected_p_value"] == matrix[rec["reference"]][rec["comparison"]]

    def test_interpretation_labels(self, four_group_result):
        frame = reference_comparisons(four_group_result, ["A"]).set_index("comparison")
        assert frame.loc["B", "interpretation"] == SIGNIFICANT_LABEL
        assert frame.loc["C", "interpretation"] == NOT_SIGNIFICANT_LABEL

    def test_multiple_references_sorted(self, four_group_result):
        frame = reference_comparisons(four_group_result, ["B", "A"])
        pairs = list(zip(frame["reference"], frame["comparison"]))
        assert pairs == [("A", "C"), ("A", "D"), ("B", "C"), ("B", "D")]

    def test_references_not_compared_to_each_other(self, four_group_result):
        frame = reference_comparisons(four_group_result, ["A", "B"])
        assert not ((frame["reference"] == "A") & (frame["comparison"] == "B")).any()

    def test_all_references_gives_empty_frame(self, four_group_result):
        frame = reference_comparisons(four_group_result, ["A", "B", "C", "D"])
        assert frame.empty
        assert list(frame.columns) == REFERENCE_COLUMNS

    def test_skipped_pair_has_error_not_interpretation(self, groups_with_empty):
        result = perform_multi_comparison_report(0.05, groups_with_empty)
        frame = reference_comparisons(result, ["Empty"])
        assert len(frame) == 2
        for rec in frame.to_dict("records"):
            assert rec["interpretation"] is None
            assert rec["statistic"] is None
            assert rec["corrected_p_value"] is None
            assert "skipped" in rec["error"]
            assert not rec["is_significant"]

    def test_mixed_rows_keep_none(self, groups_with_empty):
        """A completed pair next to a skipped one leaves the skipped fields None."""
        result = perform_multi_comparison_report(0.05, groups_with_empty)
        frame = reference_comparisons(result, ["A"]).set_index("comparison")

        assert frame.loc["B", "interpretation"] == SIGNIFICANT_LABEL
        assert frame.loc["B", "error"] is None
        assert frame.loc["Empty", "interpretation"] is None
        assert frame.loc["Empty", "corrected_p_value"] is None
        assert (frame.loc["Empty", "interpretation"] or frame.loc["Empty", "error"]).startswith(
            "Comparison A vs Empty skipped"
        )
