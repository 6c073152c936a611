"""Network role registry.

Owns the role set of one network at a time. Role and capability mutations
rewrite the whole persisted role set, unless the registry was built from an
immutable override ("pinned"), in which case they only touch memory.

Fires:
    roles_initialized(registry)  after a network's role set is (re)loaded
    roles_changed(network_id)    after any role or capability mutation; network_id
                                 is None when pinned, as the set serves every network
"""

import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, TypeVar

from ....core.shared import TenantContext
from ...hooks import HookRegistry, HookPriority, NetworkRoleEvent
from ..entities import Role, RoleSet
from ..repositories import RoleSetRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RoleRegistry:
    """Role definitions of the network the registry is initialized for."""

    def __init__(
        self,
        repository: RoleSetRepository,
        context: TenantContext,
        hooks: HookRegistry,
        pinned_roles: Optional[RoleSet] = None,
    ):
        self._repository = repository
        self._context = context
        self._hooks = hooks
        self._use_db = pinned_roles is None
        self._roles: Optional[RoleSet] = pinned_roles.copy() if pinned_roles is not None else None
        self._retired: List[str] = []
        self._network_id = 0

        self._hooks.add_action(NetworkRoleEvent.TENANT_SWITCHED, self._on_tenant_switched, HookPriority.EARLY)
        self.for_tenant(context.network_id)

    # Network selection

    @property
    def network_id(self) -> int:
        """ID of the network the roles are initialized for."""
        return self._network_id

    @property
    def is_persistent(self) -> bool:
        """Whether mutations are written to the option store."""
        return self._use_db

    def for_tenant(self, network_id: Optional[int] = None) -> None:
        """Set the network to operate on and (re)load its role set.

        Args:
            network_id: Network ID, defaults to the current network of the context
        """
        self._network_id = self._context.resolve(network_id)

        if self._roles is not None and not self._use_db:
            return

        self._roles = self._repository.load(self._network_id)
        self._retired = self._repository.load_retired(self._network_id)
        self._init_roles()

    def with_tenant(self, network_id: int, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Call ``fn`` with the registry initialized for ``network_id``.

        The previous network is restored afterwards, also when ``fn`` raises.
        """
        with self.tenant_scope(network_id):
            return fn(*args, **kwargs)

    @contextmanager
    def tenant_scope(self, network_id: int) -> Iterator["RoleRegistry"]:
        """Context manager form of :meth:`with_tenant`."""
        previous = self._network_id
        network_id = self._context.resolve(network_id)
        if network_id == previous:
            yield self
            return

        self.for_tenant(network_id)
        try:
            yield self
        finally:
            self.for_tenant(previous)

    # Lookups

    @property
    def roles(self) -> RoleSet:
        """The loaded role set. Treat as read-only."""
        return self._roles

    @property
    def roles_data(self) -> Dict[str, Dict[str, Any]]:
        """The role set in its persisted shape."""
        return self._roles.to_payload()

    @property
    def role_names(self) -> Dict[str, str]:
        return self._roles.names()

    @property
    def retired_roles(self) -> List[str]:
        """Keys of roles that were removed and not added again."""
        return list(self._retired)

    def get_role(self, key: str) -> Optional[Role]:
        return self._roles.get(key)

    def get_role_names(self) -> Dict[str, str]:
        """Get role display names keyed by role key."""
        return self._roles.names()

    def is_role_name(self, key: str) -> bool:
        return key in self._roles

    def is_retired_role(self, key: str) -> bool:
        return key in self._retired and key not in self._roles

    # Mutations

    def add_role(self, key: str, display_name: str, capabilities: Optional[Dict[str, bool]] = None) -> Optional[Role]:
        """Add a role if the key is free.

        Returns:
            The new Role, or None if ``key`` is empty or already taken
        """
        if not key or key in self._roles:
            logger.debug(f"Role '{key}' not added to network {self._network_id}: empty or existing key")
            return None

        role = Role(key=key, display_name=display_name, capabilities=dict(capabilities or {}))
        self._roles.add(role)
        if key in self._retired:
            self._retired.remove(key)
            self._persist_retired()
        self._persist()

        logger.info(f"Added network role '{key}' to network {self._network_id}")
        return role

    def remove_role(self, key: str) -> bool:
        """Remove a role. Returns False if it did not exist."""
        if key not in self._roles:
            return False

        self._roles.remove(key)
        if key not in self._retired:
            self._retired.append(key)
            self._persist_retired()
        self._persist()

        logger.info(f"Removed network role '{key}' from network {self._network_id}")
        return True

    def add_cap(self, role_key: str, cap: str, grant: bool = True) -> bool:
        """Grant (or explicitly deny) a capability on a role."""
        role = self._roles.get(role_key)
        if role is None or not cap:
            return False

        role.capabilities[cap] = bool(grant)
        self._persist()

        logger.info(f"Set capability '{cap}'={bool(grant)} on network role '{role_key}'")
        return True

    def remove_cap(self, role_key: str, cap: str) -> bool:
        """Remove a capability from a role."""
        role = self._roles.get(role_key)
        if role is None or cap not in role.capabilities:
            return False

        del role.capabilities[cap]
        self._persist()

        logger.info(f"Removed capability '{cap}' from network role '{role_key}'")
        return True

    # Internals

    def _init_roles(self) -> None:
        logger.debug(f"Initialized {len(self._roles)} role(s) for network {self._network_id}")
        self._hooks.do_action(NetworkRoleEvent.ROLES_INITIALIZED, self)

    def _persist(self) -> None:
        if self._use_db:
            self._repository.save(self._network_id, self._roles)
        self._hooks.do_action(NetworkRoleEvent.ROLES_CHANGED, self._network_id if self._use_db else None)

    def _persist_retired(self) -> None:
        if self._use_db:
            self._repository.save_retired(self._network_id, self._retired)

    def _on_tenant_switched(self, new_network_id: int, old_network_id: int) -> None:
        self.for_tenant(new_network_id)

    def __repr__(self) -> str:
        return f"RoleRegistry(network_id={self._network_id}, roles={self._roles.keys()}, persistent={self._use_db})"
