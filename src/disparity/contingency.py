"""
Contingency table construction: input validation, row totals, percentages,
and expected counts under the null hypothesis of equal outcome rates.

Validation is all-or-nothing: every problem in the snapshot is collected
into the error list and, if any exist, the table is returned empty with
``is_valid = False``.  Nothing downstream runs on a partially valid snapshot.

Degenerate data (a category with zero total, or a zero grand total) is not a
validation failure.  It produces a warning in the same error list and the
table is still built; degenerate rows have expected counts of 0 and therefore
contribute nothing to any statistic.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Integral, Real
from typing import Any, Iterable, Mapping

import numpy as np
import pandas as pd

from .config import ALPHA_LOWER_BOUND, ALPHA_UPPER_BOUND, MIN_GROUPS


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GroupInput:
    """One category as submitted: a name and its two outcome counts."""

    name: str
    experienced: int
    not_experienced: int

    @property
    def row_total(self) -> int:
        return self.experienced + self.not_experienced


@dataclass(frozen=True)
class ContingencyRow:
    name: str
    experienced: int
    not_experienced: int
    row_total: int
    percent_experienced: float
    expected_experienced: float
    expected_not_experienced: float

    @property
    def is_degenerate(self) -> bool:
        return self.row_total == 0


@dataclass(frozen=True)
class ContingencyTable:
    """
    The k×2 observed table plus marginals, built from one input snapshot.

    ``errors`` holds validation errors when ``is_valid`` is False, and
    non-fatal warnings otherwise.
    """

    alpha: float | None
    rows: tuple[ContingencyRow, ...]
    grand_total: int
    total_experienced: int
    total_not_experienced: int
    errors: tuple[str, ...]
    is_valid: bool

    @property
    def group_names(self) -> list[str]:
        return [row.name for row in self.rows]

    @property
    def n_groups(self) -> int:
        return len(self.rows)

    def observed(self) -> np.ndarray:
        """Observed counts as a k×2 array: [experienced, not_experienced]."""
        return np.array(
            [[row.experienced, row.not_experienced] for row in self.rows],
            dtype=float,
        ).reshape(-1, 2)

    def expected(self) -> np.ndarray:
        """Expected counts under independence as a k×2 array."""
        return np.array(
            [[row.expected_experienced, row.expected_not_experienced] for row in self.rows],
            dtype=float,
        ).reshape(-1, 2)

    def to_frame(self) -> pd.DataFrame:
        """Observed and expected counts as a DataFrame indexed by category."""
        return pd.DataFrame(
            [
                {
                    "category": row.name,
                    "experienced": row.experienced,
                    "not_experienced": row.not_experienced,
                    "row_total": row.row_total,
                    "percent_experienced": row.percent_experienced,
                    "expected_experienced": row.expected_experienced,
                    "expected_not_experienced": row.expected_not_experienced,
                }
                for row in self.rows
            ],
            columns=[
                "category", "experienced", "not_experienced", "row_total",
                "percent_experienced", "expected_experienced",
                "expected_not_experienced",
            ],
        ).set_index("category")


# ---------------------------------------------------------------------------
# Shared arithmetic
# ---------------------------------------------------------------------------

def expected_counts(observed: np.ndarray) -> np.ndarray:
    """
    Expected cell counts from an observed table's own marginals.

    E[i, j] = row_total[i] * col_total[j] / grand_total.  A zero grand total
    yields an all-zero expected table rather than NaN.

    Args:
        observed: r×c array of observed counts.

    Returns:
        r×c array of expected counts.
    """
    observed = np.asarray(observed, dtype=float)
    grand_total = observed.sum()
    if grand_total == 0:
        return np.zeros_like(observed)
    row_totals = observed.sum(axis=1)
    col_totals = observed.sum(axis=0)
    return np.outer(row_totals, col_totals) / grand_total


def percent_experienced(experienced: int, row_total: int) -> float:
    """Share of a category that experienced the outcome, in percent (0 if empty)."""
    if row_total == 0:
        return 0.0
    return experienced / row_total * 100


# ---------------------------------------------------------------------------
# Input coercion and validation
# ---------------------------------------------------------------------------

def _coerce_count(value: Any, label: str) -> tuple[int | None, str | None]:
    """
    Coerce a submitted count to a non-negative int.

    Accepts ints (including numpy integers), integral floats, and integer
    strings such as ``"12"``.  Booleans are rejected.

    Returns:
        Tuple of (count or None, error message or None).
    """
    if isinstance(value, bool) or value is None:
        return None, f"{label} must be a number"

    if isinstance(value, str):
        text = value.strip()
        try:
            value = int(text)
        except ValueError:
            try:
                value = float(text) if text else None
            except ValueError:
                value = None
        if value is None:
            return None, f"{label} must be a number"

    if isinstance(value, Integral):
        count = int(value)
    elif isinstance(value, Real):
        if not math.isfinite(value):
            return None, f"{label} must be a number"
        if not float(value).is_integer():
            return None, f"{label} must be an integer"
        count = int(value)
    else:
        return None, f"{label} must be a number"

    if count < 0:
        return None, f"{label} cannot be negative"
    return count, None


def coerce_alpha(value: Any) -> tuple[float | None, str | None]:
    """
    Coerce and range-check the significance level.

    Returns:
        Tuple of (alpha or None, error message or None).
    """
    if isinstance(value, bool) or value is None:
        return None, "Significance Level must be a number"
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None, "Significance Level must be a number"
    if not isinstance(value, Real) or math.isnan(value):
        return None, "Significance Level must be a number"

    alpha = float(value)
    if not ALPHA_LOWER_BOUND < alpha < ALPHA_UPPER_BOUND:
        return None, (
            f"Significance Level must be greater than 0 and less than 1 "
            f"(got {alpha})"
        )
    return alpha, None


def _field(group: Any, *keys: str) -> Any:
    """Read the first present key from a mapping, or attribute from an object."""
    if isinstance(group, Mapping):
        for key in keys:
            if key in group:
                return group[key]
        return None
    for key in keys:
        if hasattr(group, key):
            return getattr(group, key)
    return None


def validate_inputs(
    alpha: Any,
    groups: Iterable[Any],
) -> tuple[float | None, list[GroupInput], list[str]]:
    """
    Validate a raw input snapshot.

    Each group may be a :class:`GroupInput` or a mapping using either the
    request-contract keys (``name``, ``experienced``, ``notExperienced``) or
    their snake_case equivalents.

    Args:
        alpha: Submitted significance level.
        groups: Submitted categories.  Anything that is not a sequence of
            categories (a number, a string, a single mapping) is reported as
            a validation error.

    Returns:
        Tuple of (alpha, coerced groups, validation errors).  When the error
        list is non-empty the other two values must not be used.
    """
    errors: list[str] = []

    alpha_value, alpha_error = coerce_alpha(alpha)
    if alpha_error:
        errors.append(alpha_error)

    if groups is not None and (
        isinstance(groups, (str, bytes, Mapping)) or not isinstance(groups, Iterable)
    ):
        errors.append("Categories must be a list")
        groups = []
    else:
        groups = list(groups) if groups is not None else []
        if len(groups) < MIN_GROUPS:
            errors.append("At least two categories are required")

    coerced: list[GroupInput] = []
    seen_names: set[str] = set()
    for position, group in enumerate(groups, start=1):
        prefix = f"Category {position}"

        raw_name = _field(group, "name")
        name = raw_name.strip() if isinstance(raw_name, str) else ""
        if not name:
            errors.append(f"{prefix}: name cannot be empty")
        elif name in seen_names:
            errors.append(f"{prefix}: duplicate category name '{name}'")
        else:
            seen_names.add(name)

        experienced, exp_error = _coerce_count(
            _field(group, "experienced"),
            f"{prefix}: Experienced count",
        )
        not_experienced, not_exp_error = _coerce_count(
            _field(group, "notExperienced", "not_experienced"),
            f"{prefix}: Not Experienced count",
        )
        for err in (exp_error, not_exp_error):
            if err:
                errors.append(err)

        if name and experienced is not None and not_experienced is not None:
            coerced.append(GroupInput(name, experienced, not_experienced))

    return alpha_value, coerced, errors


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

def build_contingency_table(alpha: Any, groups: Iterable[Any]) -> ContingencyTable:
    """
    Validate the snapshot and derive the contingency table.

    Args:
        alpha: Significance level (0 < alpha < 1).
        groups: Two or more categories with experienced / not-experienced counts.

    Returns:
        ContingencyTable.  On validation failure ``is_valid`` is False, rows
        are empty and ``errors`` lists every problem found.
    """
    alpha_value, group_inputs, errors = validate_inputs(alpha, groups)
    if errors:
        return ContingencyTable(
            alpha=alpha_value,
            rows=(),
            grand_total=0,
            total_experienced=0,
            total_not_experienced=0,
            errors=tuple(errors),
            is_valid=False,
        )

    observed = np.array(
        [[g.experienced, g.not_experienced] for g in group_inputs], dtype=float
    )
    expected = expected_counts(observed)

    total_experienced = sum(g.experienced for g in group_inputs)
    total_not_experienced = sum(g.not_experienced for g in group_inputs)
    grand_total = total_experienced + total_not_experienced

    warnings: list[str] = []
    if grand_total == 0:
        warnings.append(
            "Total count across all categories is 0; "
            "no difference in outcome rates can be detected."
        )

    rows: list[ContingencyRow] = []
    for group, (exp_e, exp_n) in zip(group_inputs, expected):
        if group.row_total == 0 and grand_total > 0:
            warnings.append(
                f"Category '{group.name}' has a total count of 0 and "
                "contributes nothing to the test statistics."
            )
        rows.append(ContingencyRow(
            name=group.name,
            experienced=group.experienced,
            not_experienced=group.not_experienced,
            row_total=group.row_total,
            percent_experienced=percent_experienced(group.experienced, group.row_total),
            expected_experienced=float(exp_e),
            expected_not_experienced=float(exp_n),
        ))

    return ContingencyTable(
        alpha=alpha_value,
        rows=tuple(rows),
        grand_total=grand_total,
        total_experienced=total_experienced,
        total_not_experienced=total_not_experienced,
        errors=tuple(warnings),
        is_valid=True,
    )
