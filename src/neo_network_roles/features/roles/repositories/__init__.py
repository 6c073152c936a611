"""Role repositories."""

from .role_set_repository import RoleSetRepository

__all__ = ["RoleSetRepository"]
