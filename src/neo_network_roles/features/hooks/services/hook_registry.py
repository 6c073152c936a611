"""Hook registry for network role events.

Handles registration and synchronous execution of actions (fire and forget
callbacks) and filters (callbacks that transform and return a value).
Handlers run in priority order, then registration order. Exceptions raised
by a handler propagate to the code that fired the event.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from itertools import count
from typing import Any, Callable, Dict, List, Union

from ..entities import HookPriority, NetworkRoleEvent


logger = logging.getLogger(__name__)

HookName = Union[NetworkRoleEvent, str]


@dataclass
class RegisteredHook:
    """Registered hook information."""
    name: str
    callback: Callable[..., Any]
    priority: int
    sequence: int

    def sort_key(self) -> tuple:
        return (self.priority, self.sequence)


class HookRegistry:
    """Registry of action and filter handlers keyed by event name."""

    def __init__(self):
        self._actions: Dict[str, List[RegisteredHook]] = defaultdict(list)
        self._filters: Dict[str, List[RegisteredHook]] = defaultdict(list)
        self._sequence = count()

    # Actions

    def add_action(
        self,
        event: HookName,
        callback: Callable[..., Any],
        priority: int = HookPriority.NORMAL,
    ) -> None:
        """Register a callback to run when ``event`` fires."""
        self._register(self._actions, event, callback, priority)

    def remove_action(self, event: HookName, callback: Callable[..., Any]) -> bool:
        """Unregister an action callback. Returns True if it was registered."""
        return self._unregister(self._actions, event, callback)

    def has_action(self, event: HookName, callback: Callable[..., Any] = None) -> bool:
        return self._has(self._actions, event, callback)

    def do_action(self, event: HookName, *args: Any) -> None:
        """Run every action registered for ``event`` with the given arguments."""
        name = self._name(event)
        hooks = list(self._actions.get(name, ()))
        if not hooks:
            return

        logger.debug(f"Firing action '{name}' on {len(hooks)} handler(s)")
        for hook in hooks:
            hook.callback(*args)

    # Filters

    def add_filter(
        self,
        event: HookName,
        callback: Callable[..., Any],
        priority: int = HookPriority.NORMAL,
    ) -> None:
        """Register a callback that receives and returns the filtered value."""
        self._register(self._filters, event, callback, priority)

    def remove_filter(self, event: HookName, callback: Callable[..., Any]) -> bool:
        """Unregister a filter callback. Returns True if it was registered."""
        return self._unregister(self._filters, event, callback)

    def has_filter(self, event: HookName, callback: Callable[..., Any] = None) -> bool:
        return self._has(self._filters, event, callback)

    def apply_filters(self, event: HookName, value: Any, *args: Any) -> Any:
        """Pass ``value`` through every filter registered for ``event``."""
        name = self._name(event)
        for hook in list(self._filters.get(name, ())):
            value = hook.callback(value, *args)
        return value

    # Internals

    @staticmethod
    def _name(event: HookName) -> str:
        return event.value if isinstance(event, NetworkRoleEvent) else str(event)

    def _register(
        self,
        table: Dict[str, List[RegisteredHook]],
        event: HookName,
        callback: Callable[..., Any],
        priority: int,
    ) -> None:
        name = self._name(event)
        hooks = table[name]
        if any(hook.callback == callback for hook in hooks):
            logger.warning(f"Handler {callback!r} already registered for '{name}', replacing")
            self._unregister(table, name, callback)
            hooks = table[name]

        hooks.append(
            RegisteredHook(
                name=name,
                callback=callback,
                priority=int(priority),
                sequence=next(self._sequence),
            )
        )
        hooks.sort(key=RegisteredHook.sort_key)

    def _unregister(
        self,
        table: Dict[str, List[RegisteredHook]],
        event: HookName,
        callback: Callable[..., Any],
    ) -> bool:
        name = self._name(event)
        hooks = table.get(name, [])
        remaining = [hook for hook in hooks if hook.callback != callback]
        if len(remaining) == len(hooks):
            return False
        table[name] = remaining
        return True

    def _has(
        self,
        table: Dict[str, List[RegisteredHook]],
        event: HookName,
        callback: Callable[..., Any] = None,
    ) -> bool:
        hooks = table.get(self._name(event), [])
        if callback is None:
            return bool(hooks)
        return any(hook.callback == callback for hook in hooks)
