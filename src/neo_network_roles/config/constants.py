"""Constants for neo-network-roles.

Storage key names and the built-in network role definitions. Key names
match the layout already present in deployed option and user meta tables,
so they must not be renamed.
"""

from enum import Enum
from typing import Any, Dict, Final, List


class OptionKeys:
    """Network-scoped option keys."""

    USER_ROLES: Final[str] = "user_roles"
    SITE_ADMINS: Final[str] = "site_admins"
    RETIRED_USER_ROLES: Final[str] = "retired_user_roles"
    MIGRATED: Final[str] = "_migrated"
    USER_NETWORK_MIGRATION_DONE: Final[str] = "_user_network_migration_done"


class UserMetaKeys:
    """User-scoped meta keys."""

    RELATIONSHIP_MIGRATED: Final[str] = "_relationship_migrated"
    CAPABILITIES_TEMPLATE: Final[str] = "{prefix}network_{network_id}_capabilities"


class NetworkRoleKeys:
    """Role keys the library itself depends on."""

    ADMINISTRATOR: Final[str] = "administrator"
    MEMBER: Final[str] = "member"


class StorageBackend(str, Enum):
    """Supported storage backends for options and user meta."""

    MEMORY = "memory"
    REDIS = "redis"


NETWORK_ADMINISTRATOR_CAPABILITIES: Final[List[str]] = [
    "manage_network",
    "manage_sites",
    "manage_network_users",
    "manage_network_themes",
    "manage_network_plugins",
    "manage_network_options",
]


def get_default_network_roles() -> List[Dict[str, Any]]:
    """Get the definition data of the built-in network roles.

    A fresh list is built on every call so callers may mutate the result.
    """
    return [
        {
            "role": NetworkRoleKeys.ADMINISTRATOR,
            "display_name": "Network Administrator",
            "capabilities": dict.fromkeys(NETWORK_ADMINISTRATOR_CAPABILITIES, True),
        },
        {
            "role": NetworkRoleKeys.MEMBER,
            "display_name": "Network Member",
            "capabilities": {},
        },
    ]


DEFAULT_ROLE_KEYS: Final[List[str]] = [NetworkRoleKeys.ADMINISTRATOR, NetworkRoleKeys.MEMBER]
