"""Hooks feature for neo-network-roles.

- entities/: event names and priorities
- services/: the synchronous hook registry
"""

from .entities import NetworkRoleEvent, HookPriority
from .services import HookRegistry

__all__ = ["NetworkRoleEvent", "HookPriority", "HookRegistry"]
