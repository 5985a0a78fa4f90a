"""Checked integer math shared by the risk engine"""
from .constants import BPS_SCALE, U128_MAX
from .errors import ArithmeticError


def checked_mul(a: int, b: int) -> int:
    """Multiply with overflow checking"""
    result = a * b
    if result > U128_MAX:
        raise ArithmeticError("Arithmetic overflow in multiplication")
    return result


def checked_div(a: int, b: int) -> int:
    """Divide with overflow checking"""
    if b == 0:
        raise ArithmeticError("Division by zero")
    return a // b


def bps_of(amount: int, bps: int) -> int:
    """floor(amount * bps / BPS_SCALE), multiplying before dividing"""
    return checked_div(checked_mul(amount, bps), BPS_SCALE)


def within_relative_change(current: int, proposed: int, max_change_bps: int) -> bool:
    """True iff |proposed - current| is at most max_change_bps of current.

    Cross-multiplied so no precision is lost: a current value of 0 only
    accepts 0.
    """
    delta = abs(proposed - current)
    # Compared as unbounded ints, so any proposal size is rejected cleanly
    return delta * BPS_SCALE <= current * max_change_bps
