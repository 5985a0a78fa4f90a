"""Liquidation amounts derived from the current risk parameters"""
from ..errors import InvalidAmountError
from ..math import bps_of
from ..state.deployment import Deployment
from .risk_params import get_close_factor, get_liquidation_incentive


def _require_non_negative(amount: int, name: str) -> None:
    if amount < 0:
        raise InvalidAmountError(f"{name} must be non-negative, got {amount}")


def get_max_liquidatable_amount(deployment: Deployment, outstanding_debt: int) -> int:
    """Largest share of `outstanding_debt` one liquidation may repay"""
    _require_non_negative(outstanding_debt, "outstanding_debt")
    # max = outstanding_debt * close_factor / BPS_SCALE, rounded down
    return bps_of(outstanding_debt, get_close_factor(deployment))


def get_liquidation_incentive_amount(deployment: Deployment, liquidated_amount: int) -> int:
    """Bonus owed to the liquidator for repaying `liquidated_amount`"""
    _require_non_negative(liquidated_amount, "liquidated_amount")
    # incentive = liquidated_amount * liquidation_incentive / BPS_SCALE, rounded down
    return bps_of(liquidated_amount, get_liquidation_incentive(deployment))
