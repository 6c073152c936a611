"""Role entities."""

from .role import Role
from .role_set import RoleSet, RoleDefinition

__all__ = ["Role", "RoleSet", "RoleDefinition"]
