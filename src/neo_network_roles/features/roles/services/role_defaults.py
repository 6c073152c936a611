"""Built-in network roles: population and reset."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ....config.constants import DEFAULT_ROLE_KEYS, get_default_network_roles
from ..entities import Role
from .role_registry import RoleRegistry

logger = logging.getLogger(__name__)


@dataclass
class RoleResetResult:
    """Outcome of resetting one built-in role."""
    key: str
    changed: bool
    restored_count: int = 0
    removed_count: int = 0


@dataclass
class RoleResetReport:
    """Outcome of a reset request."""
    results: List[RoleResetResult] = field(default_factory=list)
    not_affected: List[str] = field(default_factory=list)

    @property
    def num_reset(self) -> int:
        return sum(1 for result in self.results if result.changed)

    @property
    def num_requested(self) -> int:
        return len(self.results)


class RoleDefaults:
    """Adds and restores the built-in network roles on a registry."""

    def __init__(self, registry: RoleRegistry):
        self._registry = registry

    @staticmethod
    def default_keys() -> List[str]:
        return list(DEFAULT_ROLE_KEYS)

    def populate(self) -> List[Role]:
        """Add every built-in role that is missing. Existing roles are left alone.

        Returns:
            The roles that were added
        """
        added = []
        for definition in get_default_network_roles():
            if self._registry.get_role(definition["role"]):
                continue
            role = self._registry.add_role(
                definition["role"], definition["display_name"], definition["capabilities"]
            )
            if role:
                added.append(role)
        return added

    def reset(self, keys: Optional[Iterable[str]] = None, reset_all: bool = False) -> RoleResetReport:
        """Restore built-in roles to their default definition.

        Custom roles are never touched; requested keys that are not built-in
        roles are reported as not affected.

        Args:
            keys: Built-in role keys to reset
            reset_all: Reset every built-in role, ignoring ``keys``

        Returns:
            Per-role report of what changed
        """
        requested = list(dict.fromkeys(keys or []))
        report = RoleResetReport()

        if reset_all:
            to_reset = self.default_keys()
            report.not_affected = [key for key in self._registry.get_role_names() if key not in DEFAULT_ROLE_KEYS]
        else:
            to_reset = [key for key in requested if key in DEFAULT_ROLE_KEYS]
            report.not_affected = [key for key in requested if key not in DEFAULT_ROLE_KEYS]

        definitions = {definition["role"]: definition for definition in get_default_network_roles()}
        for key in to_reset:
            before = self._registry.get_role(key)
            before = before.copy() if before else None

            self._registry.remove_role(key)
            definition = definitions[key]
            after = self._registry.add_role(key, definition["display_name"], definition["capabilities"])

            before_caps = before.capabilities if before else {}
            after_caps = after.capabilities if after else {}
            result = RoleResetResult(
                key=key,
                changed=before != after,
                restored_count=len(set(after_caps) - set(before_caps)),
                removed_count=len(set(before_caps) - set(after_caps)),
            )
            report.results.append(result)
            logger.info(
                f"Reset network role '{key}' on network {self._registry.network_id}: "
                f"restored={result.restored_count}, removed={result.removed_count}"
            )

        return report
