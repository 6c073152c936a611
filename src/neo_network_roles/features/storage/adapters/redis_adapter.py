"""Redis storage adapters for neo-network-roles.

Options are stored as JSON strings under ``<prefix>:option:<network>:<key>``.
User meta values are stored in one hash per meta key,
``<prefix>:usermeta:<key>``, with the user ID as the hash field, so that
finding every user holding a key is a single HGETALL.
"""

import json
import logging
from typing import Any, Dict, Optional

from redis import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError

from ....core.exceptions import SerializationError, StorageConnectionError, StorageError

logger = logging.getLogger(__name__)


def _encode(value: Any) -> str:
    try:
        return json.dumps(value, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Value is not JSON serializable: {e}")


def _decode(raw: Any, default: Any, location: str) -> Any:
    if raw is None:
        return default
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    try:
        return json.loads(raw)
    except ValueError as e:
        logger.warning(f"Discarding undecodable value at {location}: {e}")
        return default


class RedisStorageMixin:
    """Shared client handling and error translation."""

    def __init__(self, client: Redis, key_prefix: str = "network_roles"):
        self._redis = client
        self._key_prefix = key_prefix

    @classmethod
    def from_url(cls, url: str, key_prefix: str = "network_roles"):
        """Create an adapter with its own client for ``url``."""
        return cls(Redis.from_url(url, decode_responses=True), key_prefix=key_prefix)

    def _call(self, operation: str, func, *args):
        try:
            return func(*args)
        except RedisConnectionError as e:
            raise StorageConnectionError(
                f"Redis unavailable during {operation}: {e}",
                details={"operation": operation},
            )
        except RedisError as e:
            raise StorageError(f"Redis {operation} failed: {e}", details={"operation": operation})


class RedisOptionStore(RedisStorageMixin):
    """Network-scoped option store backed by Redis strings."""

    def _key(self, scope: int, key: str) -> str:
        return f"{self._key_prefix}:option:{scope}:{key}"

    def get(self, scope: int, key: str, default: Any = None) -> Any:
        full_key = self._key(scope, key)
        return _decode(self._call("get", self._redis.get, full_key), default, full_key)

    def set(self, scope: int, key: str, value: Any) -> None:
        self._call("set", self._redis.set, self._key(scope, key), _encode(value))

    def delete(self, scope: int, key: str) -> bool:
        return bool(self._call("delete", self._redis.delete, self._key(scope, key)))


class RedisUserMetaStore(RedisStorageMixin):
    """User-scoped meta store backed by one Redis hash per meta key."""

    def _key(self, key: str) -> str:
        return f"{self._key_prefix}:usermeta:{key}"

    def get(self, user_id: int, key: str, default: Any = None) -> Any:
        full_key = self._key(key)
        raw = self._call("hget", self._redis.hget, full_key, str(user_id))
        return _decode(raw, default, f"{full_key}[{user_id}]")

    def set(self, user_id: int, key: str, value: Any) -> None:
        self._call("hset", self._redis.hset, self._key(key), str(user_id), _encode(value))

    def delete(self, user_id: int, key: str) -> bool:
        return bool(self._call("hdel", self._redis.hdel, self._key(key), str(user_id)))

    def find(self, key: str) -> Dict[int, Any]:
        full_key = self._key(key)
        raw_values: Optional[Dict[Any, Any]] = self._call("hgetall", self._redis.hgetall, full_key)
        result: Dict[int, Any] = {}
        for field, raw in sorted((raw_values or {}).items(), key=lambda item: int(item[0])):
            user_id = int(field)
            result[user_id] = _decode(raw, None, f"{full_key}[{user_id}]")
        return result
