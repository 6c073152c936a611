"""Roles feature for neo-network-roles.

- entities/: Role and RoleSet (with its persisted representation)
- repositories/: role set persistence on the option store
- services/: the per-network role registry and the built-in role defaults
"""

from .entities import Role, RoleSet, RoleDefinition
from .repositories import RoleSetRepository
from .services import RoleRegistry, RoleDefaults, RoleResetReport, RoleResetResult

__all__ = [
    "Role",
    "RoleSet",
    "RoleDefinition",
    "RoleSetRepository",
    "RoleRegistry",
    "RoleDefaults",
    "RoleResetReport",
    "RoleResetResult",
]
