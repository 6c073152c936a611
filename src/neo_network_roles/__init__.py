"""Neo-Network-Roles - Network scoped roles and capabilities for multi-site tenants.

This library provides per-network role definitions, per-user capability
resolution with deny-override merging, synchronization with the legacy super
admin list and a one-time migration of existing users.

Logging is not configured on import; call ``setup_logging()`` or configure
the ``neo_network_roles`` logger yourself.
"""

from .__version__ import __version__

# Configuration
from .config import (
    NetworkRolesSettings,
    get_settings,
    reset_settings,
    setup_logging,
    get_logger,
    OptionKeys,
    UserMetaKeys,
    NetworkRoleKeys,
    StorageBackend,
    get_default_network_roles,
)

from .core.exceptions import (
    # Base Exception
    NetworkRolesError,

    # Common Exceptions
    ConfigurationError,
    StorageError,
    StorageConnectionError,
    SerializationError,
    RoleError,
    RoleNotFoundError,
    RoleAlreadyExistsError,
    InvalidArgumentError,
    PersistenceDisabledError,
    TenantError,
    TenantNotFoundError,

    # Utility Functions
    create_error_response,
)

from .core.shared import TenantContext

# Features
from .features.hooks import HookRegistry, HookPriority, NetworkRoleEvent
from .features.storage import (
    OptionStore,
    UserMetaStore,
    UserDirectory,
    InMemoryOptionStore,
    InMemoryUserMetaStore,
    InMemoryUserDirectory,
    RedisOptionStore,
    RedisUserMetaStore,
)
from .features.roles import Role, RoleSet, RoleSetRepository, RoleRegistry, RoleDefaults
from .features.capabilities import (
    ResolvedCapabilities,
    CapabilityRecordRepository,
    RoleResolutionCache,
    CapabilityResolver,
    NetworkUserQuery,
)
from .features.sync import LegacySuperAdminSync, MembershipSync
from .features.migration import MigrationCoordinator, MigrationStatus

# Wiring
from .bootstrap import NetworkRoles

__all__ = [
    "__version__",

    # Configuration
    "NetworkRolesSettings",
    "get_settings",
    "reset_settings",
    "setup_logging",
    "get_logger",
    "OptionKeys",
    "UserMetaKeys",
    "NetworkRoleKeys",
    "StorageBackend",
    "get_default_network_roles",

    # Exceptions
    "NetworkRolesError",
    "ConfigurationError",
    "StorageError",
    "StorageConnectionError",
    "SerializationError",
    "RoleError",
    "RoleNotFoundError",
    "RoleAlreadyExistsError",
    "InvalidArgumentError",
    "PersistenceDisabledError",
    "TenantError",
    "TenantNotFoundError",
    "create_error_response",

    # Tenancy and hooks
    "TenantContext",
    "HookRegistry",
    "HookPriority",
    "NetworkRoleEvent",

    # Storage
    "OptionStore",
    "UserMetaStore",
    "UserDirectory",
    "InMemoryOptionStore",
    "InMemoryUserMetaStore",
    "InMemoryUserDirectory",
    "RedisOptionStore",
    "RedisUserMetaStore",

    # Roles and capabilities
    "Role",
    "RoleSet",
    "RoleSetRepository",
    "RoleRegistry",
    "RoleDefaults",
    "ResolvedCapabilities",
    "CapabilityRecordRepository",
    "RoleResolutionCache",
    "CapabilityResolver",
    "NetworkUserQuery",

    # Sync and migration
    "LegacySuperAdminSync",
    "MembershipSync",
    "MigrationCoordinator",
    "MigrationStatus",

    # Wiring
    "NetworkRoles",
]
