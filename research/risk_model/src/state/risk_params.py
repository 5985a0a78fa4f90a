"""Risk parameter state and partial-update variants"""
from dataclasses import dataclass, replace
from typing import Optional, Tuple, Union

from ..constants import (
    DEFAULT_CLOSE_FACTOR,
    DEFAULT_LIQUIDATION_INCENTIVE,
    DEFAULT_LIQUIDATION_THRESHOLD,
    DEFAULT_MIN_COLLATERAL_RATIO,
)

# Field order used for validation and event payloads
RISK_PARAM_FIELDS = (
    "min_collateral_ratio",
    "liquidation_threshold",
    "close_factor",
    "liquidation_incentive",
)


@dataclass(frozen=True)
class RiskParameters:
    """The deployment's single parameter set, all values in basis points"""
    min_collateral_ratio: int = DEFAULT_MIN_COLLATERAL_RATIO
    liquidation_threshold: int = DEFAULT_LIQUIDATION_THRESHOLD
    close_factor: int = DEFAULT_CLOSE_FACTOR
    liquidation_incentive: int = DEFAULT_LIQUIDATION_INCENTIVE

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return tuple(getattr(self, name) for name in RISK_PARAM_FIELDS)

    def ratio_ordering_ok(self) -> bool:
        """Positions must become liquidatable before dropping below the minimum ratio"""
        return self.min_collateral_ratio > self.liquidation_threshold


class Keep:
    """Leave the field at its current value"""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "KEEP"


KEEP = Keep()


@dataclass(frozen=True)
class SetTo:
    """Replace the field with `value`"""
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"SetTo value must be int, got {type(self.value).__name__}")


FieldUpdate = Union[Keep, SetTo]


def as_field_update(value: Union[FieldUpdate, Optional[int]]) -> FieldUpdate:
    """Normalize None/int arguments into a FieldUpdate"""
    if value is None:
        return KEEP
    if isinstance(value, (Keep, SetTo)):
        return value
    return SetTo(value)


def apply_updates(params: RiskParameters, updates: dict) -> RiskParameters:
    """Build the prospective parameter set; fields marked KEEP are retained"""
    changes = {
        name: update.value
        for name, update in updates.items()
        if isinstance(update, SetTo)
    }
    return replace(params, **changes)
