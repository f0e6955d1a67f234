"""Tests for argument normalization."""
import math

import pytest

from src.dna.normalize import normalize_arg, render_arg, round_number


class TestRoundNumber:
    """One-decimal, half-up rounding."""

    @pytest.mark.parametrize("value, expected", [
        (500, 500.0),
        (0.84, 0.8),
        (0.86, 0.9),
        (2.25, 2.3),
        (0.25, 0.3),
        (-2.25, -2.2),
        (500.04, 500.0),
        (500.06, 500.1),
    ])
    def test_rounding(self, value, expected):
        assert round_number(value) == pytest.approx(expected)

    def test_differs_from_bankers_rounding(self):
        assert round_number(0.25) != round(0.25, 1)

    def test_integers_past_double_range_become_infinite(self):
        assert round_number(16 ** 300) == math.inf
        assert round_number(-(16 ** 300)) == -math.inf

    def test_integer_precision(self):
        assert round_number(2.5, precision=0) == 3.0


class TestNormalizeArg:
    """Per-type normalization."""

    def test_strings_lowercased_and_trimmed(self):
        assert normalize_arg("  BD*4 ") == "bd*4"

    def test_booleans_pass_through(self):
        assert normalize_arg(True) is True
        assert normalize_arg(False) is False

    def test_numbers_rounded(self):
        assert normalize_arg(1.2345) == pytest.approx(1.2)


class TestRenderArg:
    """Rendering into the DNA string."""

    def test_integral_float_has_no_fraction(self):
        assert render_arg(500.0) == "500"

    def test_fractional_float(self):
        assert render_arg(0.8) == "0.8"

    def test_booleans(self):
        assert render_arg(True) == "true"
        assert render_arg(False) == "false"

    def test_strings(self):
        assert render_arg("bd*4") == "bd*4"

    @pytest.mark.parametrize("value, expected", [
        (1e20, "100000000000000000000"),
        (1e21, "1e+21"),
        (1.5e22, "1.5e+22"),
        (-1e21, "-1e+21"),
        (2e21, "2e+21"),
    ])
    def test_large_numbers_use_exponent_form(self, value, expected):
        assert render_arg(normalize_arg(value)) == expected

    def test_non_finite(self):
        assert render_arg(math.inf) == "Infinity"
        assert render_arg(-math.inf) == "-Infinity"
        assert render_arg(math.nan) == "NaN"

    def test_negative(self):
        assert render_arg(normalize_arg(-3.04)) == "-3"
