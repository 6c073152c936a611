"""Capability resolution and per-user network role management.

Resolution merges, in this order:

1. the capabilities of every role key found in the user's record, in record
   order, later roles overwriting earlier ones on the same capability;
2. the individual entries of the record, which always beat role-derived ones.

Role keys are memberships, not capabilities, and never appear in the merged
map. Keys of roles that were removed from the network are skipped too, so a
stale membership entry contributes nothing.

Fires:
    role_added(user_id, role)               after add_role
    role_removed(user_id, role)             after remove_role
    role_set(user_id, role, old_roles)      after set_role
"""

import logging
from typing import Dict, List, Optional

from ....core.shared import TenantContext
from ...hooks import HookPriority, HookRegistry, NetworkRoleEvent
from ...roles import RoleRegistry
from ..entities import CapabilitySetFactory, ResolvedCapabilities
from ..repositories import CapabilityRecordRepository
from .resolution_cache import RoleResolutionCache

logger = logging.getLogger(__name__)


class CapabilityResolver:
    """Resolves and mutates users' network roles and capabilities."""

    def __init__(
        self,
        records: CapabilityRecordRepository,
        registry: RoleRegistry,
        context: TenantContext,
        hooks: HookRegistry,
        cache: Optional[RoleResolutionCache] = None,
        result_factory: CapabilitySetFactory = ResolvedCapabilities,
    ):
        self._records = records
        self._registry = registry
        self._context = context
        self._hooks = hooks
        self._cache = cache if cache is not None else RoleResolutionCache()
        self._result_factory = result_factory

        self._hooks.add_action(NetworkRoleEvent.ROLES_CHANGED, self._on_roles_changed, HookPriority.EARLY)
        self._hooks.add_action(NetworkRoleEvent.TENANT_SWITCHED, self._on_tenant_switched, HookPriority.EARLY)

    @property
    def cache(self) -> RoleResolutionCache:
        return self._cache

    def capability_key(self, network_id: Optional[int] = None) -> str:
        """User meta key holding capability records for a network."""
        return self._records.key(self._context.resolve(network_id))

    # Resolution

    def resolve(self, user_id: int, network_id: Optional[int] = None) -> ResolvedCapabilities:
        """Get the merged capability set of a user in a network.

        Args:
            user_id: User ID
            network_id: Network ID, defaults to the current network

        Returns:
            The resolved capabilities, from cache when available
        """
        network_id = self._context.resolve(network_id)
        cached = self._cache.get(user_id, network_id)
        if cached is not None:
            return cached

        record = self._records.load(user_id, network_id)

        with self._registry.tenant_scope(network_id) as registry:
            roles = [key for key in record if registry.is_role_name(key)]
            allcaps: Dict[str, bool] = {}
            for key in roles:
                allcaps.update(registry.get_role(key).capabilities)
            retired = {key for key in record if registry.is_retired_role(key)}

        for cap, grant in record.items():
            if cap in retired or cap in roles:
                continue
            allcaps[cap] = grant

        resolved = self._result_factory(
            user_id=user_id,
            network_id=network_id,
            caps=dict(record),
            roles=roles,
            allcaps=allcaps,
        )
        self._cache.set(user_id, network_id, resolved)
        return resolved

    def get_roles(self, user_id: int, network_id: Optional[int] = None) -> List[str]:
        """Get the network role keys of a user, in record order."""
        return list(self.resolve(user_id, network_id).roles)

    def get_capabilities(self, user_id: int, network_id: Optional[int] = None) -> Dict[str, bool]:
        """Get the raw capability record of a user."""
        return dict(self.resolve(user_id, network_id).caps)

    def has_cap(self, user_id: int, cap: str, network_id: Optional[int] = None) -> bool:
        return self.resolve(user_id, network_id).has_cap(cap)

    # Role membership

    def add_role(self, user_id: int, role: str, network_id: Optional[int] = None) -> bool:
        """Add a network role to a user. Returns False if ``role`` is empty."""
        if not role:
            return False

        network_id = self._context.resolve(network_id)
        record = self._records.load(user_id, network_id)
        record[role] = True
        self._save(user_id, network_id, record)

        logger.info(f"Added network role '{role}' to user {user_id} on network {network_id}")
        self._hooks.do_action(NetworkRoleEvent.ROLE_ADDED, user_id, role)
        return True

    def remove_role(self, user_id: int, role: str, network_id: Optional[int] = None) -> bool:
        """Remove a network role from a user. Returns False if the user does not have it."""
        network_id = self._context.resolve(network_id)
        if role not in self.get_roles(user_id, network_id):
            return False

        record = self._records.load(user_id, network_id)
        record.pop(role, None)
        self._save(user_id, network_id, record)

        logger.info(f"Removed network role '{role}' from user {user_id} on network {network_id}")
        self._hooks.do_action(NetworkRoleEvent.ROLE_REMOVED, user_id, role)
        return True

    def set_role(self, user_id: int, role: Optional[str], network_id: Optional[int] = None) -> bool:
        """Replace every network role of a user with ``role``.

        An empty ``role`` removes all roles. Individual capability entries
        are kept.

        Returns:
            False if the user already had exactly that one role
        """
        network_id = self._context.resolve(network_id)
        old_roles = self.get_roles(user_id, network_id)
        if role and old_roles == [role]:
            return False

        record = self._records.load(user_id, network_id)
        for old_role in old_roles:
            record.pop(old_role, None)
        if role:
            record[role] = True
        self._save(user_id, network_id, record)

        logger.info(f"Set network role of user {user_id} on network {network_id} to '{role or ''}'")
        self._hooks.do_action(NetworkRoleEvent.ROLE_SET, user_id, role or "", old_roles)
        return True

    # Individual capabilities

    def add_cap(self, user_id: int, cap: str, grant: bool = True, network_id: Optional[int] = None) -> bool:
        """Grant or explicitly deny an individual capability."""
        if not cap:
            return False

        network_id = self._context.resolve(network_id)
        record = self._records.load(user_id, network_id)
        record[cap] = bool(grant)
        self._save(user_id, network_id, record)

        logger.debug(f"Set capability '{cap}'={bool(grant)} for user {user_id} on network {network_id}")
        return True

    def remove_cap(self, user_id: int, cap: str, network_id: Optional[int] = None) -> bool:
        """Remove an individual capability entry."""
        network_id = self._context.resolve(network_id)
        record = self._records.load(user_id, network_id)
        if cap not in record:
            return False

        del record[cap]
        self._save(user_id, network_id, record)

        logger.debug(f"Removed capability '{cap}' from user {user_id} on network {network_id}")
        return True

    def remove_all_caps(self, user_id: int, network_id: Optional[int] = None) -> bool:
        """Delete a user's whole capability record in a network."""
        network_id = self._context.resolve(network_id)
        removed = self._records.delete(user_id, network_id)
        self._cache.invalidate(user_id, network_id)

        if removed:
            logger.info(f"Removed all network capabilities of user {user_id} on network {network_id}")
        return removed

    # Internals

    def _save(self, user_id: int, network_id: int, record: Dict[str, bool]) -> None:
        self._records.save(user_id, network_id, record)
        self._cache.invalidate(user_id, network_id)

    def _on_roles_changed(self, network_id: Optional[int]) -> None:
        # None: a pinned role set shared by every network changed
        if network_id is None:
            self._cache.clear()
        else:
            self._cache.invalidate_network(network_id)

    def _on_tenant_switched(self, new_network_id: int, old_network_id: int) -> None:
        self._cache.invalidate_network(old_network_id)
