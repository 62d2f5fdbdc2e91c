"""
Report runner — loads one request, runs the disparity engine, prints a
summary, and exports CSV, JSON, and Word reports.

Request files:
    .json — {"alpha": 0.05, "groups": [{"name", "experienced", "notExperienced"}, ...],
             "referenceCategories": [...]}          (referenceCategories optional)
    .csv  — columns name, experienced, notExperienced; alpha = DEFAULT_ALPHA

Usage (from project root):
    python -m src.reporting.runner [path/to/request.json]

Or programmatically:
    from src.reporting.runner import run_disparity_report
    result, paths = run_disparity_report(Path("data/request.json"))
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Iterable

import pandas as pd

from src.disparity.config import TEST_NAMES
from src.disparity.reference import reference_comparisons, resolve_references
from src.disparity.report import MultiComparisonResult, report_from_request

from .config import (
    CSV_FILENAME,
    DEFAULT_ALPHA,
    DOCX_FILENAME,
    JSON_FILENAME,
    REQUEST_PATH,
    RESULTS_DIR,
)
from .document import build_report_document
from .exports import export_results_csv, export_results_json
from .formatting import format_decimal, format_scientific

REQUIRED_CSV_COLUMNS = ["name", "experienced", "notExperienced"]


# ---------------------------------------------------------------------------
# Request loading
# ---------------------------------------------------------------------------

def load_request(path: Path) -> dict:
    """
    Load a request document from JSON or CSV.

    Counts are passed through as read; coercion and validation happen in the
    engine so that problems come back as report errors, not exceptions.

    Args:
        path: Path to a .json or .csv request.

    Returns:
        Dict with keys alpha, groups, referenceCategories.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file type is unsupported or required fields are
            missing.
    """
    if not path.exists():
        raise FileNotFoundError(f"Request file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        with path.open(encoding="utf-8") as fh:
            request = json.load(fh)
        if not isinstance(request, dict) or not isinstance(request.get("groups"), list):
            raise ValueError(f"{path.name}: request must be an object with a 'groups' list.")
        return {
            "alpha": request.get("alpha", DEFAULT_ALPHA),
            "groups": request["groups"],
            "referenceCategories": request.get("referenceCategories") or [],
        }

    if suffix == ".csv":
        df = pd.read_csv(path, dtype={"name": str}, keep_default_na=False)
        missing = [col for col in REQUIRED_CSV_COLUMNS if col not in df.columns]
        if missing:
            raise ValueError(f"{path.name}: missing required columns {missing}")
        return {
            "alpha": DEFAULT_ALPHA,
            "groups": df[REQUIRED_CSV_COLUMNS].to_dict("records"),
            "referenceCategories": [],
        }

    raise ValueError(f"Unsupported request file type '{path.suffix}' (expected .json or .csv)")


# ---------------------------------------------------------------------------
# Console summary
# ---------------------------------------------------------------------------

def print_report_summary(result: MultiComparisonResult, references: list[str]) -> None:
    """Print overall tests, significant pairs, and reference comparisons."""
    stats = result.overall_stats
    print(f"  α = {format_decimal(result.alpha, 4)}, "
          f"df = {stats.degrees_of_freedom}, "
          f"comparisons = {result.num_comparisons}")

    for label, test in zip(
        TEST_NAMES.values(),
        (stats.chi_square, stats.chi_square_yates, stats.g_test),
    ):
        print(f"  {label:<20} stat={format_decimal(test.statistic)}, "
              f"p={format_scientific(test.p_value)} → {test.interpretation}")

    sig_pairs = [
        f"{e.group_a} vs {e.group_b}" for e in result.pairwise_comparisons if e.is_significant
    ]
    print(f"  Bonferroni-significant pairs ({len(sig_pairs)}): "
          f"{', '.join(sig_pairs) or 'none'}")

    ref_df = reference_comparisons(result, references)
    for rec in ref_df.to_dict("records"):
        print(f"  {rec['reference']} vs {rec['comparison']}: "
              f"p={format_scientific(rec['corrected_p_value'])} "
              f"({rec['interpretation'] or rec['error']})")


# ---------------------------------------------------------------------------
# Master runner
# ---------------------------------------------------------------------------

def run_disparity_report(
    request_path: Path = REQUEST_PATH,
    output_dir: Path = RESULTS_DIR,
    reference_categories: Iterable[str] | None = None,
) -> tuple[MultiComparisonResult, dict[str, Path]]:
    """
    Load a request, run the engine, and export every report format.

    A rejected request still gets a JSON export (carrying the validation
    errors); CSV and Word exports need a completed report.

    Args:
        request_path: Request document (.json or .csv).
        output_dir: Directory for exported files.
        reference_categories: Overrides the request's referenceCategories.

    Returns:
        Tuple of (result, {"json": path, "csv": path, "docx": path}); only the
        JSON path is present for a rejected request.
    """
    sep = "=" * 70
    print(f"\n{sep}")
    print("DISPARITY REPORT")
    print(f"  Request: {request_path}")
    print(f"{sep}\n")

    request = load_request(request_path)
    print(f"Loaded {len(request['groups'])} categories from {request_path.name}")

    result = report_from_request(request)
    output_dir.mkdir(parents=True, exist_ok=True)
    paths: dict[str, Path] = {
        "json": export_results_json(result, output_dir / JSON_FILENAME),
    }

    if result.is_rejected:
        print("\nInput rejected:")
        for message in result.errors:
            print(f"  - {message}")
        return result, paths

    if result.errors:
        print("\nCompleted with warnings:")
        for message in result.errors:
            print(f"  - {message}")

    selected = resolve_references(
        result,
        reference_categories if reference_categories is not None
        else request["referenceCategories"],
    )

    print(f"\n{'—'*50}")
    print("RESULTS")
    print(f"{'—'*50}")
    print_report_summary(result, selected)

    print()
    paths["csv"] = export_results_csv(result, output_dir / CSV_FILENAME)
    paths["docx"] = build_report_document(result, selected, output_dir / DOCX_FILENAME)

    print(f"\n{sep}")
    print(f"REPORT COMPLETE — results in {output_dir}")
    print(sep)
    return result, paths


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    run_disparity_report(Path(sys.argv[1]) if len(sys.argv) > 1 else REQUEST_PATH)
