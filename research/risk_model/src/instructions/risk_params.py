"""Risk parameter initialization, validated updates and getters"""
import logging
from typing import Optional, Union

from .. import events
from ..constants import MAX_CAPPED_PARAMETER_BPS
from ..errors import (
    AlreadyInitializedError,
    InvalidCollateralRatioError,
    NotInitializedError,
    ParameterChangeTooLargeError,
    ParameterOutOfRangeError,
    RiskUnauthorizedError,
    UnauthorizedError,
)
from ..math import within_relative_change
from ..state.deployment import Deployment
from ..state.risk_params import (
    RISK_PARAM_FIELDS,
    FieldUpdate,
    RiskParameters,
    SetTo,
    apply_updates,
    as_field_update,
)
from .admin import require_admin, set_admin

logger = logging.getLogger(__name__)

# Fields with an absolute 100% ceiling
CAPPED_FIELDS = ("close_factor", "liquidation_incentive")

UpdateArg = Union[FieldUpdate, Optional[int]]


def initialize_risk_params(deployment: Deployment) -> None:
    """Install the default parameter set. Allowed once per deployment."""
    if deployment.risk_params is not None:
        raise AlreadyInitializedError("Risk parameters already initialized")
    deployment.risk_params = deployment.default_risk_params()
    logger.info("Risk parameters initialized to %s", deployment.risk_params.as_tuple())


def initialize(deployment: Deployment, admin: str) -> None:
    """Set the first admin and the default risk parameters together"""
    if deployment.admin is not None or deployment.risk_params is not None:
        raise AlreadyInitializedError("Deployment already initialized")
    set_admin(deployment, admin, None)
    initialize_risk_params(deployment)


def get_risk_params(deployment: Deployment) -> RiskParameters:
    if deployment.risk_params is None:
        raise NotInitializedError("Risk parameters not initialized")
    return deployment.risk_params


def get_min_collateral_ratio(deployment: Deployment) -> int:
    return get_risk_params(deployment).min_collateral_ratio


def get_liquidation_threshold(deployment: Deployment) -> int:
    return get_risk_params(deployment).liquidation_threshold


def get_close_factor(deployment: Deployment) -> int:
    return get_risk_params(deployment).close_factor


def get_liquidation_incentive(deployment: Deployment) -> int:
    return get_risk_params(deployment).liquidation_incentive


def _check_field(deployment: Deployment, name: str, current: int, proposed: int) -> None:
    """Absolute range first, then the relative change bound"""
    config = deployment.config
    if proposed < 0:
        raise ParameterOutOfRangeError(name, proposed)
    if config.enforce_bps_ceiling and name in CAPPED_FIELDS and proposed > MAX_CAPPED_PARAMETER_BPS:
        raise ParameterOutOfRangeError(name, proposed)
    if not within_relative_change(current, proposed, config.max_parameter_change_bps):
        raise ParameterChangeTooLargeError(name, current, proposed)


def set_risk_params(
    deployment: Deployment,
    caller: str,
    min_collateral_ratio: UpdateArg = None,
    liquidation_threshold: UpdateArg = None,
    close_factor: UpdateArg = None,
    liquidation_incentive: UpdateArg = None,
) -> RiskParameters:
    """Apply a partial update to the risk parameters.

    Validation order is fixed: authorization, then per-field checks for every
    supplied field, then the collateral ratio ordering on the prospective set.
    Nothing is written unless every check passes.

    Returns:
        The parameter set now in effect.
    """
    try:
        require_admin(deployment, caller)
    except UnauthorizedError as e:
        logger.warning("Rejected risk parameter update by %s", caller)
        raise RiskUnauthorizedError(str(e)) from e

    current = get_risk_params(deployment)
    updates = dict(zip(
        RISK_PARAM_FIELDS,
        map(as_field_update, (
            min_collateral_ratio,
            liquidation_threshold,
            close_factor,
            liquidation_incentive,
        )),
    ))

    for name, update in updates.items():
        if isinstance(update, SetTo):
            _check_field(deployment, name, getattr(current, name), update.value)

    prospective = apply_updates(current, updates)
    if not prospective.ratio_ordering_ok():
        raise InvalidCollateralRatioError(
            f"min_collateral_ratio {prospective.min_collateral_ratio} must exceed "
            f"liquidation_threshold {prospective.liquidation_threshold}"
        )

    deployment.risk_params = prospective
    deployment.emit(events.risk_params_changed(*prospective.as_tuple()))
    logger.info("Risk parameters changed from %s to %s", current.as_tuple(), prospective.as_tuple())
    return prospective
