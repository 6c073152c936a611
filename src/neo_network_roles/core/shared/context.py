"""Tenant context entity.

Holds the "current network" for one process or request. The context is an
injectable object, never a module global: every service that needs to know
the current network receives the same TenantContext instance.
"""

import logging
from typing import Optional

from ..exceptions import TenantNotFoundError
from ...features.hooks import HookRegistry, NetworkRoleEvent

logger = logging.getLogger(__name__)


class TenantContext:
    """Current network (and site) for the running request.

    Switching fires ``tenant_switched(new_network_id, old_network_id)`` when
    the network actually changes. Scoped lookups on another network go
    through ``RoleRegistry.tenant_scope`` and leave the context alone.
    """

    def __init__(
        self,
        hooks: HookRegistry,
        network_id: int,
        site_id: Optional[int] = None,
    ):
        self._hooks = hooks
        self._network_id = int(network_id)
        self._site_id = site_id

    @property
    def network_id(self) -> int:
        return self._network_id

    @property
    def site_id(self) -> Optional[int]:
        return self._site_id

    def set_site(self, site_id: Optional[int]) -> None:
        """Set the site the current request runs on."""
        self._site_id = site_id

    def resolve(self, network_id: Optional[int] = None) -> int:
        """Get ``network_id`` if given, else the current network."""
        if network_id:
            return int(network_id)
        return self._network_id

    def switch_to(self, network_id: int) -> int:
        """Switch the current network.

        Args:
            network_id: Network to switch to

        Returns:
            The network ID that was current before the switch
        """
        old_network_id = self._network_id
        new_network_id = int(network_id)
        if new_network_id < 1:
            raise TenantNotFoundError(f"Invalid network ID: {network_id}", details={"network_id": network_id})
        if new_network_id == old_network_id:
            return old_network_id

        self._network_id = new_network_id
        logger.debug(f"Switched network {old_network_id} -> {new_network_id}")
        self._hooks.do_action(NetworkRoleEvent.TENANT_SWITCHED, new_network_id, old_network_id)
        return old_network_id

    def __repr__(self) -> str:
        return f"TenantContext(network_id={self._network_id}, site_id={self._site_id})"
