"""Storage adapters."""

from .memory_adapter import InMemoryOptionStore, InMemoryUserMetaStore, InMemoryUserDirectory
from .redis_adapter import RedisOptionStore, RedisUserMetaStore

__all__ = [
    "InMemoryOptionStore",
    "InMemoryUserMetaStore",
    "InMemoryUserDirectory",
    "RedisOptionStore",
    "RedisUserMetaStore",
]
