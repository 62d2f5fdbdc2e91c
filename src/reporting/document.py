"""
Word (.docx) statistical report.

Sections, in order:
  1. Input parameters
  2. Contingency table summary (observed, expected, contribution to χ²)
  3. Overall test results with interpretations
  4. Pairwise p-value matrix (Bonferroni-corrected, upper triangle)
  5. Comparisons to the selected reference categories
  6. Calculation errors / warnings
  7. Disclaimer
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from docx import Document
from docx.enum.section import WD_ORIENT
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Inches, Pt, RGBColor

from src.disparity.config import TEST_NAMES
from src.disparity.pairwise import bonferroni_alpha
from src.disparity.reference import reference_comparisons, resolve_references
from src.disparity.report import MultiComparisonResult

from .config import (
    DISCLAIMER,
    DOCX_BODY_SIZE,
    DOCX_FILENAME,
    DOCX_FONT_NAME,
    DOCX_HEADING_SIZES,
    DOCX_LANDSCAPE_MIN_GROUPS,
    DOCX_MARGINS_INCHES,
    RESULTS_DIR,
)
from .formatting import format_decimal, format_percent, format_scientific

SIGNIFICANT_COLOR = RGBColor(0xC0, 0x00, 0x00)


# ---------------------------------------------------------------------------
# Document helpers
# ---------------------------------------------------------------------------

def _new_document(landscape: bool = False):
    doc = Document()
    style = doc.styles["Normal"]
    style.font.name = DOCX_FONT_NAME
    style.font.size = Pt(DOCX_BODY_SIZE)

    for section in doc.sections:
        if landscape:
            section.orientation = WD_ORIENT.LANDSCAPE
            section.page_width, section.page_height = section.page_height, section.page_width
        section.top_margin    = Inches(DOCX_MARGINS_INCHES["top"])
        section.bottom_margin = Inches(DOCX_MARGINS_INCHES["bottom"])
        section.left_margin   = Inches(DOCX_MARGINS_INCHES["left"])
        section.right_margin  = Inches(DOCX_MARGINS_INCHES["right"])
    return doc


def _heading(doc, text: str, level: int = 2):
    p = doc.add_heading(text, level=level)
    p.runs[0].font.name = DOCX_FONT_NAME
    p.runs[0].font.size = Pt(DOCX_HEADING_SIZES.get(level, DOCX_BODY_SIZE))
    p.runs[0].font.bold = True
    return p


def _body(doc, text: str, italic: bool = False):
    p = doc.add_paragraph()
    run = p.add_run(text)
    run.italic = italic
    p.paragraph_format.space_after = Pt(6)
    return p


def _table(doc, header: list[str], rows: Iterable[list[str]]):
    """Grid table with a bold header row; numeric columns right-aligned."""
    rows = list(rows)
    table = doc.add_table(rows=1 + len(rows), cols=len(header))
    table.style = "Table Grid"

    for col, text in enumerate(header):
        cell = table.rows[0].cells[col]
        cell.text = text
        cell.paragraphs[0].runs[0].font.bold = True

    for r, values in enumerate(rows, start=1):
        for col, text in enumerate(values):
            cell = table.rows[r].cells[col]
            cell.text = text
            if col > 0:
                cell.paragraphs[0].alignment = WD_ALIGN_PARAGRAPH.RIGHT
    doc.add_paragraph()
    return table


def _highlight(cell) -> None:
    for run in cell.paragraphs[0].runs:
        run.font.bold = True
        run.font.color.rgb = SIGNIFICANT_COLOR


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

def _add_parameters(doc, result: MultiComparisonResult, references: list[str]) -> None:
    _heading(doc, "Input Parameters")
    _body(doc, f"Significance Level (α): {format_decimal(result.alpha, 4)}")
    _body(doc, f"Number of categories: {result.table.n_groups}")
    _body(doc, f"Reference categories: {', '.join(references)}")


def _add_contingency(doc, result: MultiComparisonResult) -> None:
    _heading(doc, "Contingency Table Summary")
    contributions = result.overall_stats.contributions
    _table(
        doc,
        ["Category", "# Did NOT Experience", "# Experienced", "Row Subtotal",
         "% Experienced", "Expected Experienced", "Expected Not Experienced",
         "(O-E)²/E"],
        (
            [
                row.name,
                str(row.not_experienced),
                str(row.experienced),
                str(row.row_total),
                format_percent(row.percent_experienced),
                format_decimal(row.expected_experienced, 2),
                format_decimal(row.expected_not_experienced, 2),
                format_decimal(contributions[row.name]),
            ]
            for row in result.observed_data
        ),
    )


def _add_overall(doc, result: MultiComparisonResult) -> None:
    stats = result.overall_stats
    _heading(doc, "Overall Test Results")
    _body(doc, f"Limit (Significance Level α): {format_decimal(result.alpha, 4)}")
    _body(doc, f"Degrees of Freedom: {stats.degrees_of_freedom}")
    _body(doc, f"# of Pairwise Comparisons: {result.num_comparisons}")
    _body(
        doc,
        "Bonferroni Corrected α: "
        f"{format_decimal(bonferroni_alpha(result.alpha, result.num_comparisons), 4)}",
    )

    tests = (stats.chi_square, stats.chi_square_yates, stats.g_test)
    table = _table(
        doc,
        ["Test", "Statistic", "P-Value", "Interpretation"],
        (
            [name, format_decimal(test.statistic), format_scientific(test.p_value),
             test.interpretation]
            for name, test in zip(TEST_NAMES.values(), tests)
        ),
    )
    for r, test in enumerate(tests, start=1):
        if test.is_significant:
            _highlight(table.rows[r].cells[2])


def _add_matrix(doc, result: MultiComparisonResult) -> None:
    names = result.table.group_names
    matrix = result.pairwise_results_matrix
    _heading(doc, "P-Values of Pairwise Chi-Square Comparisons with Bonferroni Correction")
    _body(
        doc,
        "P-values are Bonferroni-corrected (raw p × number of comparisons, capped "
        f"at 1) and compared against α = {format_decimal(result.alpha, 4)}.",
        italic=True,
    )

    rows = []
    for i, row_name in enumerate(names):
        cells = [row_name]
        for j, col_name in enumerate(names):
            value = matrix[row_name][col_name]
            cells.append("" if j <= i else format_scientific(value))
        rows.append(cells)
    table = _table(doc, [""] + names, rows)

    for entry in result.pairwise_comparisons:
        if entry.is_significant:
            i, j = names.index(entry.group_a), names.index(entry.group_b)
            _highlight(table.rows[i + 1].cells[j + 1])


def _add_references(doc, result: MultiComparisonResult, references: list[str]) -> None:
    frame = reference_comparisons(result, references)
    _heading(doc, "Comparison to Selected Reference Categories")
    if frame.empty:
        _body(doc, "Every category is selected as a reference; nothing to compare.", italic=True)
        return
    rows = [
        [
            rec["reference"],
            rec["comparison"],
            format_scientific(rec["corrected_p_value"]),
            rec["interpretation"] or rec["error"],
        ]
        for rec in frame.to_dict("records")
    ]
    table = _table(doc, ["Reference", "Compared Category", "Corrected P-Value", "Interpretation"], rows)
    for r, rec in enumerate(frame.to_dict("records"), start=1):
        if rec["is_significant"]:
            _highlight(table.rows[r].cells[2])


def _add_errors(doc, result: MultiComparisonResult) -> None:
    if not result.errors:
        return
    _heading(doc, "Calculation Errors/Warnings")
    for message in result.errors:
        doc.add_paragraph(message, style="List Bullet")


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

def build_report_document(
    result: MultiComparisonResult,
    references: Iterable[str] | None = None,
    output_path: Path = RESULTS_DIR / DOCX_FILENAME,
) -> Path:
    """
    Write the statistical report as a Word document.

    Args:
        result: A completed (non-rejected) report.
        references: Reference categories for the comparison section; defaults
            to the first category.
        output_path: Destination .docx path.

    Returns:
        Path to the written document.

    Raises:
        ValueError: If the report holds no data or a reference is unknown.
    """
    if result.is_rejected or not result.table.rows:
        raise ValueError("No report data available to export.")

    selected = resolve_references(result, references)
    doc = _new_document(landscape=result.table.n_groups >= DOCX_LANDSCAPE_MIN_GROUPS)

    _heading(doc, "Statistical Report: Disparity Calculator", level=1)
    _add_parameters(doc, result, selected)
    _add_contingency(doc, result)
    _add_overall(doc, result)
    _add_matrix(doc, result)
    _add_references(doc, result, selected)
    _add_errors(doc, result)

    _heading(doc, "Disclaimer")
    _body(doc, DISCLAIMER, italic=True)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    doc.save(str(output_path))
    print(f"Word report exported to {output_path}")
    return output_path
