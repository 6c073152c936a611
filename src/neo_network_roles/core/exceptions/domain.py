"""Domain-specific exceptions for neo-network-roles.

The library layer favors silent no-ops for expected absence and duplicate
conditions; these exceptions are raised by storage adapters and by the
operator-facing layer (CLI) only.
"""

from .base import NetworkRolesError


# Configuration Errors
class ConfigurationError(NetworkRolesError):
    """Raised when there's a configuration issue."""
    pass


# Storage Errors
class StorageError(NetworkRolesError):
    """Base class for errors raised by option and user meta stores."""
    pass


class StorageConnectionError(StorageError):
    """Raised when the storage backend cannot be reached."""
    pass


class SerializationError(StorageError):
    """Raised when a value cannot be serialized for storage."""
    pass


# Role Errors
class RoleError(NetworkRolesError):
    """Base class for network role errors."""
    pass


class RoleNotFoundError(RoleError):
    """Raised when a network role does not exist."""
    pass


class RoleAlreadyExistsError(RoleError):
    """Raised when a network role key is already taken."""
    pass


class InvalidArgumentError(RoleError):
    """Raised when a role key or capability name is empty or malformed."""
    pass


class PersistenceDisabledError(RoleError):
    """Raised when a durable change is requested on pinned role definitions."""

    def __init__(self, message: str = "Network role definitions are not persistent.", **kwargs):
        super().__init__(message, **kwargs)


# Tenant Errors
class TenantError(NetworkRolesError):
    """Base class for tenant (network) errors."""
    pass


class TenantNotFoundError(TenantError):
    """Raised when a network or site cannot be resolved."""
    pass
