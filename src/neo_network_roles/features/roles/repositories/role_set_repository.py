"""Role set persistence on top of the network-scoped option store."""

import logging
from typing import List

from ....config.constants import OptionKeys
from ...storage.entities import OptionStore
from ..entities import RoleSet

logger = logging.getLogger(__name__)


class RoleSetRepository:
    """Loads and stores the role set of a network.

    Every save rewrites the whole ``user_roles`` value; there are no partial
    updates at the storage layer.
    """

    def __init__(self, option_store: OptionStore):
        self._options = option_store

    def load(self, network_id: int) -> RoleSet:
        """Load the role set of a network. Missing data loads as an empty set."""
        return RoleSet.from_payload(self._options.get(network_id, OptionKeys.USER_ROLES, {}))

    def save(self, network_id: int, role_set: RoleSet) -> None:
        self._options.set(network_id, OptionKeys.USER_ROLES, role_set.to_payload())
        logger.debug(f"Saved {len(role_set)} role(s) for network {network_id}")

    def load_retired(self, network_id: int) -> List[str]:
        """Load the keys of roles that were removed from a network."""
        retired = self._options.get(network_id, OptionKeys.RETIRED_USER_ROLES, [])
        if not isinstance(retired, list):
            return []
        return [str(key) for key in retired]

    def save_retired(self, network_id: int, retired: List[str]) -> None:
        if retired:
            self._options.set(network_id, OptionKeys.RETIRED_USER_ROLES, list(retired))
        else:
            self._options.delete(network_id, OptionKeys.RETIRED_USER_ROLES)
