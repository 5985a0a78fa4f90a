"""Checked math tests"""
import pytest

from risk_model.src.constants import U128_MAX
from risk_model.src.errors import ArithmeticError
from risk_model.src.math import (
    bps_of,
    checked_div,
    checked_mul,
    within_relative_change,
)


def test_checked_ops_at_limit():
    assert checked_mul(U128_MAX, 1) == U128_MAX
    with pytest.raises(ArithmeticError):
        checked_mul(2**64, 2**64)


def test_checked_div_by_zero():
    with pytest.raises(ArithmeticError):
        checked_div(1, 0)


def test_bps_of():
    assert bps_of(1_000_000, 5_000) == 500_000
    assert bps_of(1, 9_999) == 0
    assert bps_of(10_000, 1) == 1


@pytest.mark.parametrize(
    "current,proposed,expected",
    [
        (11_000, 12_100, True),
        (11_000, 12_101, False),
        (11_000, 9_900, True),
        (11_000, 9_899, False),
        (10_500, 11_550, True),
        (1, 1, True),
        (1, 2, False),
        (0, 0, True),
        (0, 1, False),
    ],
)
def test_within_relative_change(current, proposed, expected):
    assert within_relative_change(current, proposed, 1_000) is expected


def test_within_relative_change_huge_proposal():
    assert within_relative_change(11_000, 2**125, 1_000) is False
    assert within_relative_change(11_000, -(2**125), 1_000) is False
