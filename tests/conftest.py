"""
Shared pytest fixtures for the disparity engine and reporting tests.

Group lists use the request-contract keys (name / experienced /
notExperienced) so the same fixtures feed the engine, the exporters and
the runner.
"""

from __future__ import annotations

import json

import pytest


def _group(name: str, experienced: int, not_experienced: int) -> dict:
    return {"name": name, "experienced": experienced, "notExperienced": not_experienced}


# ---------------------------------------------------------------------------
# Group fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def two_group_disparity():
    """50% vs 80%: clearly different at α = 0.05 (χ² ≈ 19.8)."""
    return [
        _group("Group1", 50, 50),
        _group("Group2", 80, 20),
    ]


@pytest.fixture
def identical_three_groups():
    """Three 10/10 groups with identical rates; every statistic is exactly 0."""
    return [
        _group("A", 10, 10),
        _group("B", 10, 10),
        _group("C", 10, 10),
    ]


@pytest.fixture
def groups_with_empty():
    """Two valid groups plus one with a total count of 0."""
    return [
        _group("A", 50, 50),
        _group("B", 80, 20),
        _group("Empty", 0, 0),
    ]


@pytest.fixture
def four_groups():
    """Mixed rates: A and C identical, B high, D low."""
    return [
        _group("A", 50, 50),
        _group("B", 80, 20),
        _group("C", 50, 50),
        _group("D", 20, 80),
    ]


@pytest.fixture
def borderline_three_groups():
    """
    A vs B is significant unadjusted (raw p ≈ 0.046) but not after Bonferroni
    with 3 comparisons (corrected p ≈ 0.137).
    """
    return [
        _group("A", 50, 50),
        _group("B", 64, 36),
        _group("C", 50, 50),
    ]


# ---------------------------------------------------------------------------
# Request file fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def request_json_path(tmp_path, four_groups):
    """JSON request with an explicit reference selection."""
    path = tmp_path / "request.json"
    path.write_text(json.dumps({
        "alpha": 0.05,
        "groups": four_groups,
        "referenceCategories": ["A"],
    }), encoding="utf-8")
    return path


@pytest.fixture
def request_csv_path(tmp_path):
    path = tmp_path / "request.csv"
    path.write_text(
        "name,experienced,notExperienced\n"
        "Group1,50,50\n"
        "Group2,80,20\n",
        encoding="utf-8",
    )
    return path
