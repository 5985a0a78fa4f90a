"""Deployment state: the handle every instruction reads and writes"""
from dataclasses import dataclass, field
from typing import List, Optional

from ..config import EngineConfig
from ..events import Event
from .risk_params import RiskParameters
from .roles import RoleRegistry


@dataclass
class Deployment:
    """Represents one deployment's persistent state.

    Three logical slots (admin, role registry, risk parameters) plus the
    append-only event log observers read from.
    """
    config: EngineConfig = field(default_factory=EngineConfig)
    admin: Optional[str] = None  # Using string instead of Address
    roles: RoleRegistry = field(default_factory=RoleRegistry)
    risk_params: Optional[RiskParameters] = None
    events: List[Event] = field(default_factory=list)

    def emit(self, event: Event) -> None:
        self.events.append(event)

    def default_risk_params(self) -> RiskParameters:
        """Parameter set installed by initialization"""
        return RiskParameters(
            min_collateral_ratio=self.config.default_min_collateral_ratio,
            liquidation_threshold=self.config.default_liquidation_threshold,
            close_factor=self.config.default_close_factor,
            liquidation_incentive=self.config.default_liquidation_incentive,
        )
