"""Tests for ElementMutualInformation and Lift records."""

import math

import pytest

from idiomcooc.core.records import (
    ElementMutualInformation,
    Lift,
    LIFT_ORDER,
    compare_lifts,
)


class TestElementMutualInformation:

    def test_nan_rejected(self):
        """A nan score fails at construction."""
        with pytest.raises(ValueError, match="nan"):
            ElementMutualInformation("X", float("nan"))

    def test_infinite_allowed(self):
        assert ElementMutualInformation("X", float("-inf")).log_prob == float("-inf")
        assert ElementMutualInformation("X", math.inf).log_prob == math.inf

    def test_value_equality(self):
        assert ElementMutualInformation("X", 0.5) == ElementMutualInformation("X", 0.5)
        assert ElementMutualInformation("X", 0.5) != ElementMutualInformation("Y", 0.5)
        assert len({ElementMutualInformation("X", 0.5), ElementMutualInformation("X", 0.5)}) == 1

    def test_frozen(self):
        record = ElementMutualInformation("X", 0.5)
        with pytest.raises(AttributeError):
            record.log_prob = 1.0

    def test_to_dict(self):
        assert ElementMutualInformation("X", 0.5).to_dict() == {"element": "X", "log_prob": 0.5}


class TestLift:

    def test_equality_ignores_count(self):
        """Equality and hash use (lift, row, column) only."""
        a = Lift(row=1, column=10, lift=0.5, count=3)
        b = Lift(row=1, column=10, lift=0.5, count=7)

        assert a == b
        assert hash(a) == hash(b)
        assert a != Lift(row=1, column=10, lift=0.6, count=3)
        assert a != Lift(row=2, column=10, lift=0.5, count=3)

    def test_str(self):
        assert str(Lift(row="for", column="i", lift=1.23456, count=4)) == "for,i:1.23"

    def test_higher_lift_first(self):
        high = Lift(row=5, column=10, lift=2.0, count=1)
        low = Lift(row=1, column=10, lift=-1.0, count=9)

        assert compare_lifts(high, low) < 0
        assert compare_lifts(low, high) > 0
        assert sorted([low, high]) == [high, low]

    def test_negative_infinity_last(self):
        lifts = [
            Lift(row=1, column=10, lift=float("-inf"), count=0),
            Lift(row=2, column=10, lift=0.0, count=1),
        ]
        assert [lift.row for lift in sorted(lifts, key=LIFT_ORDER)] == [2, 1]

    def test_tie_broken_by_row_hash(self):
        a = Lift(row=2, column=10, lift=1.0, count=1)
        b = Lift(row=9, column=10, lift=1.0, count=1)

        assert compare_lifts(a, b) < 0
        assert sorted([b, a], key=LIFT_ORDER) == [a, b]

    def test_same_row_compares_column_hash_to_row_hash(self):
        """Third key compares the first record's column hash with its own row hash."""
        a = Lift(row=5, column=3, lift=1.0, count=1)
        b = Lift(row=5, column=8, lift=1.0, count=1)

        assert compare_lifts(a, b) < 0  # hash(3) < hash(5)
        assert compare_lifts(b, a) > 0  # hash(8) > hash(5)
        assert compare_lifts(a, a) < 0

    def test_identical_keys_compare_equal_only_when_column_hash_matches_row(self):
        a = Lift(row=4, column=4, lift=0.0, count=1)
        assert compare_lifts(a, a) == 0

    def test_to_dict(self):
        assert Lift(row="a", column="b", lift=0.5, count=2).to_dict() == {
            "row": "a",
            "column": "b",
            "lift": 0.5,
            "count": 2,
        }
