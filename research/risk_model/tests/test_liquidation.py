"""Liquidation amount tests"""
import pytest

from risk_model.src.constants import U128_MAX
from risk_model.src.errors import ArithmeticError, InvalidAmountError, NotInitializedError
from risk_model.src.instructions.liquidation import (
    get_liquidation_incentive_amount,
    get_max_liquidatable_amount,
)
from risk_model.src.instructions.risk_params import set_risk_params


def test_get_max_liquidatable_amount(initialized):
    # default close factor is 5_000 (50%)
    assert get_max_liquidatable_amount(initialized, 1_000_000) == 500_000


def test_get_liquidation_incentive_amount(initialized):
    # default incentive is 1_000 (10%)
    assert get_liquidation_incentive_amount(initialized, 500_000) == 50_000


def test_amounts_round_down(initialized):
    assert get_max_liquidatable_amount(initialized, 3) == 1
    assert get_liquidation_incentive_amount(initialized, 19) == 1
    assert get_liquidation_incentive_amount(initialized, 9) == 0


def test_zero_amounts(initialized):
    assert get_max_liquidatable_amount(initialized, 0) == 0
    assert get_liquidation_incentive_amount(initialized, 0) == 0


def test_amounts_follow_updated_params(initialized, admin):
    set_risk_params(initialized, admin, close_factor=5_500, liquidation_incentive=1_100)

    assert get_max_liquidatable_amount(initialized, 1_000_000) == 550_000
    assert get_liquidation_incentive_amount(initialized, 550_000) == 60_500


def test_large_debt_does_not_lose_precision(initialized):
    """Multiplication happens before division, even for 18-decimal amounts"""
    debt = 123_456_789 * 10**18 + 1
    assert get_max_liquidatable_amount(initialized, debt) == debt * 5_000 // 10_000


def test_overflow_raises(initialized):
    with pytest.raises(ArithmeticError):
        get_max_liquidatable_amount(initialized, U128_MAX)


def test_negative_amounts_rejected(initialized):
    with pytest.raises(InvalidAmountError):
        get_max_liquidatable_amount(initialized, -1)
    with pytest.raises(InvalidAmountError):
        get_liquidation_incentive_amount(initialized, -1)


def test_computations_are_pure(initialized):
    first = get_max_liquidatable_amount(initialized, 777_777)
    second = get_max_liquidatable_amount(initialized, 777_777)
    assert first == second
    assert get_liquidation_incentive_amount(initialized, first) == get_liquidation_incentive_amount(initialized, first)
    assert initialized.events == []


def test_requires_initialization(deployment):
    with pytest.raises(NotInitializedError):
        get_max_liquidatable_amount(deployment, 1_000)
    with pytest.raises(NotInitializedError):
        get_liquidation_incentive_amount(deployment, 1_000)
