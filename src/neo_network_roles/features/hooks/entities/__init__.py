"""Hook entities."""

from .events import NetworkRoleEvent, HookPriority

__all__ = ["NetworkRoleEvent", "HookPriority"]
