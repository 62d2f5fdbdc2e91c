"""Unit tests for src/reporting/formatting.py."""

from __future__ import annotations

import math

import pytest

from src.reporting.formatting import (
    MISSING,
    format_decimal,
    format_percent,
    format_scientific,
)


class TestFormatScientific:

    @pytest.mark.parametrize("value,expected", [
        (8.6802e-06, "8.68e-06"),
        (1.23456e-10, "1.23e-10"),
        (0.0432, "0.0432"),
        (0.001, "0.001"),
        (1.0, "1"),
        (0, "0"),
    ])
    def test_values(self, value, expected):
        assert format_scientific(value) == expected

    def test_digits(self):
        assert format_scientific(8.6802e-06, 2) == "8.7e-06"

    @pytest.mark.parametrize("value", [None, math.nan])
    def test_missing(self, value):
        assert format_scientific(value) == MISSING

    def test_infinity(self):
        assert format_scientific(math.inf) == "Infinity"
        assert format_scientific(-math.inf) == "-Infinity"


class TestFormatDecimal:

    def test_default_places(self):
        assert format_decimal(19.78021978) == "19.780"

    def test_custom_places(self):
        assert format_decimal(0.05, 4) == "0.0500"
        assert format_decimal(65, 2) == "65.00"

    def test_special_values(self):
        assert format_decimal(None) == MISSING
        assert format_decimal(math.inf) == "Infinity"


class TestFormatPercent:

    def test_values(self):
        assert format_percent(62.5) == "62.5%"
        assert format_percent(80) == "80.0%"
        assert format_percent(0.0) == "0.0%"

    def test_missing(self):
        assert format_percent(math.nan) == MISSING
