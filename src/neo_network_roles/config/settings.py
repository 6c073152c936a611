"""Settings for neo-network-roles.

Environment driven configuration using pydantic-settings. Every field can be
overridden with a ``NETWORK_ROLES_`` prefixed environment variable or a
``.env`` file.
"""

from functools import lru_cache
from typing import Any, Dict, List, Optional

from pydantic import Field, RedisDsn, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import StorageBackend, UserMetaKeys


class NetworkRolesSettings(BaseSettings):
    """Runtime configuration for the network roles services."""

    model_config = SettingsConfigDict(
        env_prefix="NETWORK_ROLES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Tenancy
    main_network_id: int = Field(default=1, ge=1)
    default_network_id: int = Field(default=1, ge=1)
    table_prefix: str = Field(default="wp_")

    # Migration
    migration_batch_size: int = Field(default=20, ge=1)
    initial_site_admins: List[str] = Field(default_factory=lambda: ["admin"])

    # Storage
    storage_backend: StorageBackend = Field(default=StorageBackend.MEMORY)
    redis_url: Optional[RedisDsn] = Field(default=None)
    redis_key_prefix: str = Field(default="network_roles")

    # Pinned role definitions (non-persistent registry)
    role_definitions_override: Optional[Dict[str, Any]] = Field(default=None)

    @field_validator("table_prefix")
    @classmethod
    def validate_table_prefix(cls, value: str) -> str:
        if not value.replace("_", "").isalnum():
            raise ValueError(f"table_prefix must be alphanumeric with underscores, got: {value!r}")
        return value

    def capability_key(self, network_id: int) -> str:
        """Get the user meta key holding a user's capabilities on a network."""
        return UserMetaKeys.CAPABILITIES_TEMPLATE.format(prefix=self.table_prefix, network_id=network_id)

    @property
    def is_redis_backend(self) -> bool:
        """Check if options and user meta live in Redis."""
        return self.storage_backend == StorageBackend.REDIS

    @property
    def is_pinned(self) -> bool:
        """Check if role definitions are supplied by an immutable override."""
        return self.role_definitions_override is not None


@lru_cache()
def get_settings() -> NetworkRolesSettings:
    """Get cached settings instance."""
    return NetworkRolesSettings()


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
