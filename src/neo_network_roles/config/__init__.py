"""Configuration module for neo-network-roles."""

from .constants import (
    OptionKeys,
    UserMetaKeys,
    NetworkRoleKeys,
    StorageBackend,
    NETWORK_ADMINISTRATOR_CAPABILITIES,
    DEFAULT_ROLE_KEYS,
    get_default_network_roles,
)

from .settings import (
    NetworkRolesSettings,
    get_settings,
    reset_settings,
)

from .logging_config import (
    setup_logging,
    get_logger,
    LogVerbosity,
    LogFormat,
    LoggingConfig,
)

__all__ = [
    "OptionKeys",
    "UserMetaKeys",
    "NetworkRoleKeys",
    "StorageBackend",
    "NETWORK_ADMINISTRATOR_CAPABILITIES",
    "DEFAULT_ROLE_KEYS",
    "get_default_network_roles",
    "NetworkRolesSettings",
    "get_settings",
    "reset_settings",
    "setup_logging",
    "get_logger",
    "LogVerbosity",
    "LogFormat",
    "LoggingConfig",
]
