"""Admin and role management"""
import logging
from typing import Optional

from .. import events
from ..errors import UnauthorizedError
from ..state.deployment import Deployment

logger = logging.getLogger(__name__)


def has_admin(deployment: Deployment) -> bool:
    return deployment.admin is not None


def get_admin(deployment: Deployment) -> Optional[str]:
    return deployment.admin


def set_admin(deployment: Deployment, new_admin: str, caller: Optional[str] = None) -> None:
    """Set the admin, or transfer it when one already exists.

    The first assignment needs no caller. Every later one must be made by
    the current admin.
    """
    if not new_admin:
        raise ValueError("new_admin must be a non-empty address")

    current = deployment.admin
    if current is not None and (caller is None or caller != current):
        logger.warning("Rejected admin transfer to %s by %s", new_admin, caller)
        raise UnauthorizedError("Only the current admin can change the admin")

    deployment.admin = new_admin
    deployment.emit(events.admin_changed(new_admin))
    logger.info("Admin changed from %s to %s", current, new_admin)


def require_admin(deployment: Deployment, caller: str) -> None:
    if deployment.admin is None or caller != deployment.admin:
        raise UnauthorizedError(f"{caller} is not the admin")


def has_role(deployment: Deployment, role: str, account: str) -> bool:
    return deployment.roles.has(role, account)


def grant_role(deployment: Deployment, caller: str, role: str, account: str) -> None:
    require_admin(deployment, caller)
    deployment.roles.grant(role, account)
    deployment.emit(events.role_granted(role, account))
    logger.info("Granted role %s to %s", role, account)


def revoke_role(deployment: Deployment, caller: str, role: str, account: str) -> None:
    require_admin(deployment, caller)
    deployment.roles.revoke(role, account)
    deployment.emit(events.role_revoked(role, account))
    logger.info("Revoked role %s from %s", role, account)


def require_role_or_admin(deployment: Deployment, caller: str, role: str) -> None:
    """Guard for privileged operations open to holders of `role` as well as the admin"""
    if deployment.admin is not None and caller == deployment.admin:
        return
    if deployment.roles.has(role, caller):
        return
    raise UnauthorizedError(f"{caller} lacks role {role!r}")
