"""
Report assembly: runs the builder and both test engines on one input
snapshot and combines everything into a single immutable result.

Pipeline stages run once, in order:

    validating → building_table → computing_overall → computing_pairwise → assembled

``rejected`` is the only failure outcome and is reachable only from
validation.  Warnings and per-pair errors do not stop the pipeline; they are
appended to the result's error list.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping

import pandas as pd

from .config import TEST_NAMES
from .contingency import ContingencyRow, ContingencyTable, build_contingency_table
from .overall_tests import OverallTestStats, run_overall_tests
from .pairwise import PairwiseEntry, PairwiseResults, bonferroni_alpha, run_pairwise_comparisons


class PipelineStage(str, Enum):
    """Terminal stage of a run; intermediate stages are never observable."""

    ASSEMBLED = "assembled"
    REJECTED = "rejected"


@dataclass(frozen=True)
class MultiComparisonResult:
    """
    Everything the presentation layer needs from one run.

    ``overall_stats`` and ``pairwise`` are None when validation rejected the
    input; ``errors`` is then non-empty.  A populated result may still carry
    warnings in ``errors``.
    """

    alpha: float | None
    stage: PipelineStage
    table: ContingencyTable
    overall_stats: OverallTestStats | None
    pairwise: PairwiseResults | None
    errors: tuple[str, ...]

    @property
    def is_rejected(self) -> bool:
        return self.stage is PipelineStage.REJECTED

    @property
    def observed_data(self) -> tuple[ContingencyRow, ...]:
        return self.table.rows

    @property
    def num_comparisons(self) -> int:
        return self.pairwise.num_comparisons if self.pairwise else 0

    @property
    def pairwise_results_matrix(self) -> dict[str, dict[str, float | None]]:
        return self.pairwise.matrix if self.pairwise else {}

    @property
    def pairwise_comparisons(self) -> tuple[PairwiseEntry, ...]:
        return self.pairwise.entries if self.pairwise else ()

    def contingency_frame(self) -> pd.DataFrame:
        """Contingency summary with each category's Pearson contribution."""
        frame = self.table.to_frame()
        if self.overall_stats is not None:
            frame["chi_square_contribution"] = [
                self.overall_stats.contributions[name] for name in frame.index
            ]
        return frame

    def to_dict(self) -> dict:
        """
        Output contract for the presentation/export layer (camelCase keys).

        ``overallStats`` is None on rejection.  Statistics may be ``inf``;
        p-values are always finite and in [0, 1].
        """
        contributions = self.overall_stats.contributions if self.overall_stats else {}
        observed = [
            {
                "name": row.name,
                "experienced": row.experienced,
                "notExperienced": row.not_experienced,
                "rowTotal": row.row_total,
                "percentExperienced": row.percent_experienced,
                "expectedExperienced": row.expected_experienced,
                "expectedNotExperienced": row.expected_not_experienced,
                "chiSquareContribution": contributions.get(row.name),
            }
            for row in self.table.rows
        ]

        overall = None
        if self.overall_stats is not None:
            stats = self.overall_stats
            overall = {
                "limitAlpha": self.alpha,
                "degreesOfFreedom": stats.degrees_of_freedom,
                "numComparisons": self.num_comparisons,
                "bonferroniAlpha": bonferroni_alpha(self.alpha, self.num_comparisons),
            }
            for key, test in zip(
                TEST_NAMES,
                (stats.chi_square, stats.chi_square_yates, stats.g_test),
            ):
                overall[key] = {
                    "statistic": test.statistic,
                    "pValue": test.p_value,
                    "interpretation": test.interpretation,
                }

        return {
            "observedData": observed,
            "overallStats": overall,
            "pairwiseResultsMatrix": {
                name: dict(row) for name, row in self.pairwise_results_matrix.items()
            },
            "pairwiseComparisons": [
                {
                    "groupA": entry.group_a,
                    "groupB": entry.group_b,
                    "statistic": entry.statistic,
                    "rawPValue": entry.raw_p_value,
                    "correctedPValue": entry.corrected_p_value,
                    "isSignificant": entry.is_significant,
                    "error": entry.error,
                }
                for entry in self.pairwise_comparisons
            ],
            "errors": list(self.errors),
        }


# ---------------------------------------------------------------------------
# Assembler
# ---------------------------------------------------------------------------

def perform_multi_comparison_report(
    alpha: Any,
    groups: Iterable[Any],
) -> MultiComparisonResult:
    """
    Run the full analysis on one input snapshot.

    Args:
        alpha: Significance level, 0 < alpha < 1.
        groups: Two or more categories (GroupInput objects or request-style
            mappings with ``name``, ``experienced``, ``notExperienced``).

    Returns:
        MultiComparisonResult.  Never raises for bad input; validation
        problems come back in ``errors`` with ``overall_stats`` None.
    """
    table = build_contingency_table(alpha, groups)
    if not table.is_valid:
        return MultiComparisonResult(
            alpha=table.alpha,
            stage=PipelineStage.REJECTED,
            table=table,
            overall_stats=None,
            pairwise=None,
            errors=table.errors,
        )

    overall = run_overall_tests(table)
    pairwise = run_pairwise_comparisons(table)

    return MultiComparisonResult(
        alpha=table.alpha,
        stage=PipelineStage.ASSEMBLED,
        table=table,
        overall_stats=overall,
        pairwise=pairwise,
        errors=table.errors + pairwise.errors,
    )


def report_from_request(request: Mapping[str, Any]) -> MultiComparisonResult:
    """Run the analysis on a request-contract mapping ``{alpha, groups}``."""
    return perform_multi_comparison_report(request.get("alpha"), request.get("groups"))
