"""In-process cache of resolved capability sets.

Entries are keyed by (user_id, network_id) and never expire on their own;
they are dropped when the user's record changes, when the network's role set
changes, or when the process leaves the network.
"""

import logging
from typing import Dict, Optional, Tuple

from ..entities import ResolvedCapabilities

logger = logging.getLogger(__name__)

CacheKey = Tuple[int, int]


class RoleResolutionCache:
    """Memoized resolution results per (user, network)."""

    def __init__(self):
        self._entries: Dict[CacheKey, ResolvedCapabilities] = {}
        self._hits = 0
        self._misses = 0

    def get(self, user_id: int, network_id: int) -> Optional[ResolvedCapabilities]:
        entry = self._entries.get((user_id, network_id))
        if entry is None:
            self._misses += 1
        else:
            self._hits += 1
        return entry

    def set(self, user_id: int, network_id: int, resolved: ResolvedCapabilities) -> None:
        self._entries[(user_id, network_id)] = resolved

    def invalidate(self, user_id: int, network_id: int) -> bool:
        return self._entries.pop((user_id, network_id), None) is not None

    def invalidate_network(self, network_id: int) -> int:
        """Drop every entry of a network. Returns the number of entries dropped."""
        keys = [key for key in self._entries if key[1] == network_id]
        for key in keys:
            del self._entries[key]
        if keys:
            logger.debug(f"Invalidated {len(keys)} cached capability set(s) of network {network_id}")
        return len(keys)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get_stats(self) -> Dict[str, int]:
        return {"entries": len(self._entries), "hits": self._hits, "misses": self._misses}
