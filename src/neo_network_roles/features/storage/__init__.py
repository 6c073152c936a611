"""Storage feature for neo-network-roles.

- entities/: protocols for the option store, user meta store and user directory
- adapters/: in-memory and Redis implementations
"""

from .entities import OptionStore, UserMetaStore, UserDirectory
from .adapters import (
    InMemoryOptionStore,
    InMemoryUserMetaStore,
    InMemoryUserDirectory,
    RedisOptionStore,
    RedisUserMetaStore,
)

__all__ = [
    "OptionStore",
    "UserMetaStore",
    "UserDirectory",
    "InMemoryOptionStore",
    "InMemoryUserMetaStore",
    "InMemoryUserDirectory",
    "RedisOptionStore",
    "RedisUserMetaStore",
]
