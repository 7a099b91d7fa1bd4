"""Tests for log-space helpers."""

import math

import pytest

from idiomcooc.utils.logmath import log_ratio, safe_log


class TestSafeLog:

    def test_zero_is_negative_infinity(self):
        assert safe_log(0) == float("-inf")

    def test_positive(self):
        assert safe_log(math.e) == pytest.approx(1.0)

    def test_returns_python_float(self):
        assert type(safe_log(2)) is float


class TestLogRatio:

    def test_ratio(self):
        assert log_ratio(2, 3) == pytest.approx(math.log(2 / 3))

    def test_zero_numerator(self):
        assert log_ratio(0, 5) == float("-inf")

    def test_zero_over_zero_is_nan(self):
        assert math.isnan(log_ratio(0, 0))
