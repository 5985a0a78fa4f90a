"""Role registry state"""
from dataclasses import dataclass, field
from typing import Dict, Tuple


@dataclass
class RoleRegistry:
    """Grants keyed by (role, account). Absence means not granted."""
    grants: Dict[Tuple[str, str], bool] = field(default_factory=dict)

    def has(self, role: str, account: str) -> bool:
        return self.grants.get((role, account), False)

    def grant(self, role: str, account: str) -> None:
        self.grants[(role, account)] = True

    def revoke(self, role: str, account: str) -> None:
        """Drop the entry so revoked grants do not accumulate"""
        self.grants.pop((role, account), None)
