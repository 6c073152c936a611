"""Role services."""

from .role_registry import RoleRegistry
from .role_defaults import RoleDefaults, RoleResetReport, RoleResetResult

__all__ = ["RoleRegistry", "RoleDefaults", "RoleResetReport", "RoleResetResult"]
