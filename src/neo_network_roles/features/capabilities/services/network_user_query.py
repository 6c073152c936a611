"""Queries over the capability records of a network's users."""

import logging
from typing import Any, Dict, List, Optional

from ....core.shared import TenantContext
from ...roles import RoleRegistry
from ..repositories import CapabilityRecordRepository

logger = logging.getLogger(__name__)

NO_ROLE_BUCKET = "none"


class NetworkUserQuery:
    """Finds and counts users by their network roles.

    Only users that have a capability record in the network are considered.
    """

    def __init__(self, records: CapabilityRecordRepository, registry: RoleRegistry, context: TenantContext):
        self._records = records
        self._registry = registry
        self._context = context

    def users_with_role(self, role: str, network_id: Optional[int] = None) -> List[int]:
        """Get the IDs of users holding ``role`` in a network, ascending."""
        network_id = self._context.resolve(network_id)
        return [
            user_id
            for user_id, record in self._records.find_all(network_id).items()
            if role in record
        ]

    def users_with_no_role(self, network_id: Optional[int] = None) -> List[int]:
        """Get the IDs of users whose record is empty or holds no existing role key."""
        network_id = self._context.resolve(network_id)
        role_keys = self._role_keys(network_id)
        return [
            user_id
            for user_id, record in self._records.find_all(network_id).items()
            if not role_keys.intersection(record)
        ]

    def count_users(self, network_id: Optional[int] = None) -> Dict[str, Any]:
        """Count the users of a network, in total and per role.

        Returns:
            ``{"total_users": int, "avail_roles": {role: count, ..., "none": count}}``;
            roles nobody holds are left out, ``none`` is always present
        """
        network_id = self._context.resolve(network_id)
        records = self._records.find_all(network_id)

        with self._registry.tenant_scope(network_id) as registry:
            role_keys = registry.roles.keys()

        counts: Dict[str, int] = {}
        no_role = 0
        for record in records.values():
            held = [key for key in role_keys if key in record]
            if not held:
                no_role += 1
            for key in held:
                counts[key] = counts.get(key, 0) + 1

        avail_roles = {key: counts[key] for key in role_keys if key in counts}
        avail_roles[NO_ROLE_BUCKET] = no_role
        return {"total_users": len(records), "avail_roles": avail_roles}

    def _role_keys(self, network_id: int) -> set:
        with self._registry.tenant_scope(network_id) as registry:
            return set(registry.roles.keys())
