"""Hook services."""

from .hook_registry import HookRegistry, RegisteredHook

__all__ = ["HookRegistry", "RegisteredHook"]
