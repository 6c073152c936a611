"""Keeps the legacy ``site_admins`` list in line with the administrator role.

The legacy list is a derived view once this sync is active: reads are
computed from administrator role holders, and granting or revoking super
admin privileges is translated into adding or removing the role. The stored
list is never written here.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from ....config.constants import NetworkRoleKeys, OptionKeys
from ....core.shared import TenantContext
from ...capabilities import CapabilityResolver, NetworkUserQuery
from ...hooks import HookPriority, HookRegistry, NetworkRoleEvent
from ...storage.entities import OptionStore, UserDirectory

logger = logging.getLogger(__name__)


class LegacySuperAdminSync:
    """Legacy adapter between ``site_admins`` and network administrator roles."""

    def __init__(
        self,
        options: OptionStore,
        directory: UserDirectory,
        resolver: CapabilityResolver,
        query: NetworkUserQuery,
        context: TenantContext,
        hooks: HookRegistry,
    ):
        self._options = options
        self._directory = directory
        self._resolver = resolver
        self._query = query
        self._context = context
        self._hooks = hooks
        self._suppressed = 0

    def register(self) -> None:
        """Subscribe to the grant, revoke and tenant creation events."""
        self._hooks.add_action(NetworkRoleEvent.SUPER_ADMIN_GRANTED, self.on_granted)
        self._hooks.add_action(NetworkRoleEvent.SUPER_ADMIN_REVOKED, self.on_revoked)
        self._hooks.add_filter(NetworkRoleEvent.TENANT_CREATED, self.on_tenant_created, HookPriority.NORMAL)

    def unregister(self) -> None:
        self._hooks.remove_action(NetworkRoleEvent.SUPER_ADMIN_GRANTED, self.on_granted)
        self._hooks.remove_action(NetworkRoleEvent.SUPER_ADMIN_REVOKED, self.on_revoked)
        self._hooks.remove_filter(NetworkRoleEvent.TENANT_CREATED, self.on_tenant_created)

    # Read intercept

    @property
    def is_suppressed(self) -> bool:
        return self._suppressed > 0

    @contextmanager
    def suppressed(self) -> Iterator[None]:
        """Read the stored legacy list instead of the derived view while active."""
        self._suppressed += 1
        try:
            yield
        finally:
            self._suppressed -= 1

    def get_site_admins(self, network_id: Optional[int] = None) -> List[str]:
        """Get the legacy admin list of a network.

        Computed as the logins of the network's administrator role holders,
        falling back to the stored list if nobody holds the role yet.
        """
        network_id = self._context.resolve(network_id)
        if self.is_suppressed:
            return self.get_stored_site_admins(network_id)

        user_ids = self._query.users_with_role(NetworkRoleKeys.ADMINISTRATOR, network_id)
        logins = [login for login in map(self._directory.get_username, user_ids) if login]
        if not logins:
            return self.get_stored_site_admins(network_id)
        return logins

    def get_stored_site_admins(self, network_id: Optional[int] = None, default: Optional[List[str]] = None) -> List[str]:
        """Get the legacy admin list exactly as stored."""
        network_id = self._context.resolve(network_id)
        value = self._options.get(network_id, OptionKeys.SITE_ADMINS, default if default is not None else [])
        if not isinstance(value, list):
            return []
        return [str(login) for login in value]

    # Write translation

    def home_network(self, user_id: int) -> int:
        """Network a user's super admin privileges apply to."""
        network_id = self._directory.get_primary_network(user_id)
        return network_id if network_id else self._context.network_id

    def on_granted(self, user_id: int) -> None:
        network_id = self.home_network(user_id)
        if NetworkRoleKeys.ADMINISTRATOR in self._resolver.get_roles(user_id, network_id):
            return
        self._resolver.add_role(user_id, NetworkRoleKeys.ADMINISTRATOR, network_id)
        logger.info(f"Granted network administrator to user {user_id} on network {network_id}")

    def on_revoked(self, user_id: int) -> None:
        network_id = self.home_network(user_id)
        if self._resolver.remove_role(user_id, NetworkRoleKeys.ADMINISTRATOR, network_id):
            logger.info(f"Revoked network administrator from user {user_id} on network {network_id}")

    # New networks

    def on_tenant_created(self, options: Dict[str, Any], network_id: int) -> Dict[str, Any]:
        """Grant the administrator role to the users listed in a new network's options.

        Returns:
            The options, unmodified
        """
        logins = options.get(OptionKeys.SITE_ADMINS) or []
        if not logins:
            return options

        network_id = int(network_id)
        with self.suppressed():
            user_ids = self._directory.get_user_ids_by_logins(logins)
            for user_id in user_ids:
                self._resolver.add_role(user_id, NetworkRoleKeys.ADMINISTRATOR, network_id)
        self._resolver.cache.invalidate_network(network_id)

        logger.info(f"Granted network administrator to {len(user_ids)} user(s) on new network {network_id}")
        return options
