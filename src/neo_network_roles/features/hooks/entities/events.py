"""Hook names and priorities for network role events."""

from enum import Enum


class NetworkRoleEvent(str, Enum):
    """Events fired or consumed by the network roles services."""

    # Fired by CapabilityResolver after persisting a user's record
    ROLE_ADDED = "role_added"
    ROLE_REMOVED = "role_removed"
    ROLE_SET = "role_set"

    # Fired by RoleRegistry
    ROLES_INITIALIZED = "roles_initialized"
    ROLES_CHANGED = "roles_changed"

    # Fired by TenantContext
    TENANT_SWITCHED = "tenant_switched"

    # External triggers
    SUPER_ADMIN_GRANTED = "super_admin_granted"
    SUPER_ADMIN_REVOKED = "super_admin_revoked"
    TENANT_CREATED = "tenant_created"
    USER_ADDED_TO_SITE = "user_added_to_site"
    USER_REMOVED_FROM_SITE = "user_removed_from_site"
    USER_CREATED = "user_created"


class HookPriority(int, Enum):
    """Hook execution priorities (lower runs first)."""

    HIGHEST = 0
    EARLY = 1
    NORMAL = 10
    LATE = 100
    LOWEST = 1000
