"""Capability services."""

from .resolution_cache import RoleResolutionCache
from .capability_resolver import CapabilityResolver
from .network_user_query import NetworkUserQuery

__all__ = ["RoleResolutionCache", "CapabilityResolver", "NetworkUserQuery"]
