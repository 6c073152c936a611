"""Baseline network membership driven by site membership changes."""

import logging
from typing import Optional

from ....config.constants import NetworkRoleKeys
from ....core.shared import TenantContext
from ...capabilities import CapabilityResolver
from ...hooks import HookRegistry, NetworkRoleEvent
from ...storage.entities import UserDirectory

logger = logging.getLogger(__name__)


class MembershipSync:
    """Adds and removes the ``member`` role as users join and leave sites.

    Users with any grant beyond plain membership are never demoted.
    """

    def __init__(
        self,
        resolver: CapabilityResolver,
        directory: UserDirectory,
        context: TenantContext,
        hooks: HookRegistry,
    ):
        self._resolver = resolver
        self._directory = directory
        self._context = context
        self._hooks = hooks

    def register(self) -> None:
        self._hooks.add_action(NetworkRoleEvent.USER_ADDED_TO_SITE, self.on_user_added_to_site)
        self._hooks.add_action(NetworkRoleEvent.USER_REMOVED_FROM_SITE, self.on_user_removed_from_site)
        self._hooks.add_action(NetworkRoleEvent.USER_CREATED, self.on_user_created)

    def unregister(self) -> None:
        self._hooks.remove_action(NetworkRoleEvent.USER_ADDED_TO_SITE, self.on_user_added_to_site)
        self._hooks.remove_action(NetworkRoleEvent.USER_REMOVED_FROM_SITE, self.on_user_removed_from_site)
        self._hooks.remove_action(NetworkRoleEvent.USER_CREATED, self.on_user_created)

    def on_user_added_to_site(self, user_id: int, site_id: Optional[int]) -> None:
        """Make a user a network member unless they already have any entry there."""
        network_id = self._network_of(site_id)
        if network_id is None:
            return

        if self._resolver.get_capabilities(user_id, network_id):
            return
        self._resolver.set_role(user_id, NetworkRoleKeys.MEMBER, network_id)
        logger.info(f"Added user {user_id} to network {network_id} as member via site {site_id}")

    def on_user_removed_from_site(self, user_id: int, site_id: Optional[int]) -> None:
        """Clear a plain member's record once they have no site left in the network."""
        network_id = self._network_of(site_id)
        if network_id is None:
            return

        for other_site_id, other_network_id in self._directory.get_sites_of_user(user_id).items():
            if other_network_id == network_id and other_site_id != site_id:
                return

        caps = self._resolver.get_capabilities(user_id, network_id)
        if caps and set(caps) != {NetworkRoleKeys.MEMBER}:
            logger.debug(f"Keeping network {network_id} record of user {user_id}: has grants beyond membership")
            return

        self._resolver.remove_all_caps(user_id, network_id)
        logger.info(f"Removed user {user_id} from network {network_id} after leaving site {site_id}")

    def on_user_created(self, user_id: int, site_id: Optional[int] = None) -> None:
        """Treat a new user as added to the current site."""
        self.on_user_added_to_site(user_id, site_id if site_id else self._context.site_id)

    def _network_of(self, site_id: Optional[int]) -> Optional[int]:
        if not site_id:
            return None
        network_id = self._directory.get_site_network(site_id)
        if network_id is None:
            logger.debug(f"Ignoring membership change on unknown site {site_id}")
        return network_id
