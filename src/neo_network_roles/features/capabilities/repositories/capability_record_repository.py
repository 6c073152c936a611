"""Per-user, per-network capability records on the user meta store."""

import logging
from typing import Dict, Optional

from ....config.settings import NetworkRolesSettings
from ...storage.entities import UserMetaStore

logger = logging.getLogger(__name__)


class CapabilityRecordRepository:
    """Loads and stores ``<prefix>network_<id>_capabilities`` user meta.

    A record maps role keys and capability names to booleans. It is the only
    persisted authorization state of a user in a network.
    """

    def __init__(self, user_meta_store: UserMetaStore, settings: NetworkRolesSettings):
        self._meta = user_meta_store
        self._settings = settings

    def key(self, network_id: int) -> str:
        return self._settings.capability_key(network_id)

    def exists(self, user_id: int, network_id: int) -> bool:
        return self._meta.get(user_id, self.key(network_id)) is not None

    def load(self, user_id: int, network_id: int) -> Dict[str, bool]:
        """Load a user's record. Missing or malformed records load as empty."""
        return self._coerce(self._meta.get(user_id, self.key(network_id), {}), user_id)

    def save(self, user_id: int, network_id: int, record: Dict[str, bool]) -> None:
        self._meta.set(user_id, self.key(network_id), {cap: bool(grant) for cap, grant in record.items()})

    def delete(self, user_id: int, network_id: int) -> bool:
        return self._meta.delete(user_id, self.key(network_id))

    def find_all(self, network_id: int) -> Dict[int, Dict[str, bool]]:
        """Get the records of every user that has one in a network, by user ID."""
        return {
            user_id: self._coerce(value, user_id)
            for user_id, value in self._meta.find(self.key(network_id)).items()
        }

    @staticmethod
    def _coerce(value: Optional[object], user_id: int) -> Dict[str, bool]:
        if isinstance(value, dict):
            return {str(cap): bool(grant) for cap, grant in value.items()}
        if value not in (None, "", []):
            logger.warning(f"Ignoring malformed capability record of user {user_id}")
        return {}
