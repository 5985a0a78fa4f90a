"""Events appended to a deployment's event log"""
from dataclasses import dataclass
from typing import Tuple

from .constants import (
    TOPIC_ADMIN_CHANGED,
    TOPIC_RISK_PARAMS_CHANGED,
    TOPIC_ROLE_GRANTED,
    TOPIC_ROLE_REVOKED,
)


@dataclass(frozen=True)
class Event:
    """A topic plus the payload delivered unmodified to observers"""
    topic: str
    payload: Tuple = ()


def admin_changed(new_admin: str) -> Event:
    return Event(TOPIC_ADMIN_CHANGED, (new_admin,))


def role_granted(role: str, account: str) -> Event:
    return Event(TOPIC_ROLE_GRANTED, (role, account))


def role_revoked(role: str, account: str) -> Event:
    return Event(TOPIC_ROLE_REVOKED, (role, account))


def risk_params_changed(min_cr: int, liq_threshold: int, close_factor: int, liq_incentive: int) -> Event:
    return Event(TOPIC_RISK_PARAMS_CHANGED, (min_cr, liq_threshold, close_factor, liq_incentive))
