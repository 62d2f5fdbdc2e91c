"""
src/disparity — Outcome-rate disparity engine for k categorical groups.

Module layout
-------------
config.py         — Alpha bounds, sentinels, interpretation labels
contingency.py    — Input validation, contingency table, expected counts
overall_tests.py  — Pearson chi-square, Yates chi-square, G-test (df = k - 1)
pairwise.py       — 2×2 chi-square per pair, Bonferroni correction, matrix
report.py         — Assembles one immutable MultiComparisonResult
reference.py      — Projection of the matrix onto selected reference categories

Public interface
----------------
Run the full analysis:
    perform_multi_comparison_report(alpha, groups)
    report_from_request({"alpha": ..., "groups": [...]})

Individual stages:
    build_contingency_table(alpha, groups)
    run_overall_tests(table)
    run_pairwise_comparisons(table)

Presentation-facing projection:
    reference_comparisons(result, references)
"""

from .contingency import (
    ContingencyRow,
    ContingencyTable,
    GroupInput,
    build_contingency_table,
    validate_inputs,
)
from .overall_tests import (
    OverallTestResult,
    OverallTestStats,
    chi_square_p_value,
    g_statistic,
    interpret,
    pearson_chi_square,
    run_overall_tests,
    yates_chi_square,
)
from .pairwise import (
    PairwiseEntry,
    PairwiseResults,
    bonferroni_adjust,
    count_comparisons,
    run_pairwise_comparisons,
)
from .report import (
    MultiComparisonResult,
    PipelineStage,
    perform_multi_comparison_report,
    report_from_request,
)
from .reference import reference_comparisons, resolve_references

__all__ = [
    # Value objects
    "GroupInput",
    "ContingencyRow",
    "ContingencyTable",
    "OverallTestResult",
    "OverallTestStats",
    "PairwiseEntry",
    "PairwiseResults",
    "MultiComparisonResult",
    "PipelineStage",
    # Builder
    "build_contingency_table",
    "validate_inputs",
    # Overall tests
    "pearson_chi_square",
    "yates_chi_square",
    "g_statistic",
    "chi_square_p_value",
    "interpret",
    "run_overall_tests",
    # Pairwise
    "bonferroni_adjust",
    "count_comparisons",
    "run_pairwise_comparisons",
    # Assembly
    "perform_multi_comparison_report",
    "report_from_request",
    # Reference projection
    "reference_comparisons",
    "resolve_references",
]
