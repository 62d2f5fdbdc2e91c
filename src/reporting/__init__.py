"""
src/reporting — Exports and runner around the disparity engine.

Module layout
-------------
config.py      — Paths, output file names, document styling
formatting.py  — Scientific / decimal / percent display helpers
exports.py     — Flat CSV and JSON exports
document.py    — Word statistical report (python-docx)
runner.py      — Load a request, run the engine, export everything

Public interface
----------------
    run_disparity_report(request_path, output_dir, reference_categories)
    load_request(path)
    export_results_csv(result, path)
    export_results_json(result, path)
    build_report_document(result, references, path)
"""

from .document import build_report_document
from .exports import export_results_csv, export_results_json, results_to_frame
from .formatting import format_decimal, format_percent, format_scientific
from .runner import load_request, print_report_summary, run_disparity_report

__all__ = [
    # Runner
    "run_disparity_report",
    "load_request",
    "print_report_summary",
    # Exports
    "export_results_csv",
    "export_results_json",
    "results_to_frame",
    "build_report_document",
    # Formatting
    "format_scientific",
    "format_decimal",
    "format_percent",
]
