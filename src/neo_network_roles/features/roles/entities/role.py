"""Network role domain entity.

A role is a named bundle of boolean capabilities. ``True`` grants a
capability, ``False`` explicitly denies it; denies are kept, not dropped.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class Role:
    """Domain entity representing one network role."""

    key: str
    display_name: str
    capabilities: Dict[str, bool] = field(default_factory=dict)

    def __post_init__(self):
        self.capabilities = {str(cap): bool(grant) for cap, grant in (self.capabilities or {}).items()}

    @property
    def name(self) -> str:
        """Role key (the immutable slug)."""
        return self.key

    def has_cap(self, cap: str) -> bool:
        """Check if the role grants a capability. Denied or missing caps are False."""
        return bool(self.capabilities.get(cap, False))

    def granted_capabilities(self) -> Dict[str, bool]:
        return {cap: grant for cap, grant in self.capabilities.items() if grant}

    def denied_capabilities(self) -> Dict[str, bool]:
        return {cap: grant for cap, grant in self.capabilities.items() if not grant}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted role definition shape."""
        return {"name": self.display_name, "capabilities": dict(self.capabilities)}

    def copy(self) -> "Role":
        return Role(key=self.key, display_name=self.display_name, capabilities=dict(self.capabilities))

    def __str__(self) -> str:
        return f"Role({self.key})"
