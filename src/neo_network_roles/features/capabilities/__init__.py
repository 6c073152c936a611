"""Capabilities feature for neo-network-roles.

- entities/: the resolved capability set and its factory protocol
- repositories/: per-user, per-network capability records
- services/: resolution (with its cache) and user queries
"""

from .entities import ResolvedCapabilities, CapabilitySetFactory
from .repositories import CapabilityRecordRepository
from .services import RoleResolutionCache, CapabilityResolver, NetworkUserQuery

__all__ = [
    "ResolvedCapabilities",
    "CapabilitySetFactory",
    "CapabilityRecordRepository",
    "RoleResolutionCache",
    "CapabilityResolver",
    "NetworkUserQuery",
]
