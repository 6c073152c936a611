"""Exceptions module for neo-network-roles."""

from .base import (
    NetworkRolesError,
    create_error_response,
)

from .domain import (
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
)

__all__ = [
    "NetworkRolesError",
    "create_error_response",
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
]
