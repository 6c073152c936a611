"""In-memory storage adapters for neo-network-roles.

Used by tests, the CLI's default configuration and single-process
deployments. Values are deep-copied on the way in and out so callers never
alias stored state, mirroring a serializing backend.
"""

import copy
import logging
from collections import OrderedDict
from typing import Any, Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class InMemoryOptionStore:
    """Network-scoped option store backed by a dictionary."""

    def __init__(self, initial: Optional[Dict[Tuple[int, str], Any]] = None):
        self._options: Dict[Tuple[int, str], Any] = {}
        for (scope, key), value in (initial or {}).items():
            self.set(scope, key, value)

    def get(self, scope: int, key: str, default: Any = None) -> Any:
        if (scope, key) not in self._options:
            return default
        return copy.deepcopy(self._options[(scope, key)])

    def set(self, scope: int, key: str, value: Any) -> None:
        self._options[(scope, key)] = copy.deepcopy(value)
        logger.debug(f"Option '{key}' updated on network {scope}")

    def delete(self, scope: int, key: str) -> bool:
        if (scope, key) not in self._options:
            return False
        del self._options[(scope, key)]
        return True

    def scopes(self) -> List[int]:
        """Get every network ID that has at least one option."""
        return sorted({scope for scope, _ in self._options})


class InMemoryUserMetaStore:
    """User-scoped meta store backed by a dictionary."""

    def __init__(self):
        self._meta: Dict[int, Dict[str, Any]] = {}

    def get(self, user_id: int, key: str, default: Any = None) -> Any:
        user_meta = self._meta.get(user_id, {})
        if key not in user_meta:
            return default
        return copy.deepcopy(user_meta[key])

    def set(self, user_id: int, key: str, value: Any) -> None:
        self._meta.setdefault(user_id, {})[key] = copy.deepcopy(value)

    def delete(self, user_id: int, key: str) -> bool:
        user_meta = self._meta.get(user_id)
        if not user_meta or key not in user_meta:
            return False
        del user_meta[key]
        return True

    def find(self, key: str) -> Dict[int, Any]:
        return {
            user_id: copy.deepcopy(user_meta[key])
            for user_id, user_meta in sorted(self._meta.items())
            if key in user_meta
        }


class InMemoryUserDirectory:
    """User directory for tests and single-process deployments.

    Membership changes made here do not fire any hooks; the caller decides
    which event (``user_added_to_site`` and friends) to dispatch.
    """

    def __init__(self):
        self._logins: Dict[int, str] = {}
        self._sites: Dict[int, int] = {}
        self._memberships: Dict[int, "OrderedDict[int, None]"] = {}
        self._primary_sites: Dict[int, int] = {}

    # Mutators

    def add_user(self, user_id: int, login: str, primary_site_id: Optional[int] = None) -> None:
        self._logins[user_id] = login
        self._memberships.setdefault(user_id, OrderedDict())
        if primary_site_id is not None:
            self._primary_sites[user_id] = primary_site_id

    def add_site(self, site_id: int, network_id: int) -> None:
        self._sites[site_id] = network_id

    def add_user_to_site(self, user_id: int, site_id: int) -> None:
        self._memberships.setdefault(user_id, OrderedDict())[site_id] = None
        self._primary_sites.setdefault(user_id, site_id)

    def remove_user_from_site(self, user_id: int, site_id: int) -> None:
        self._memberships.get(user_id, OrderedDict()).pop(site_id, None)
        if self._primary_sites.get(user_id) == site_id:
            remaining = list(self._memberships.get(user_id, ()))
            if remaining:
                self._primary_sites[user_id] = remaining[0]
            else:
                del self._primary_sites[user_id]

    # UserDirectory protocol

    def get_username(self, user_id: int) -> Optional[str]:
        return self._logins.get(user_id)

    def get_user_ids_by_logins(self, logins: Iterable[str]) -> List[int]:
        wanted = set(logins)
        return [user_id for user_id, login in sorted(self._logins.items()) if login in wanted]

    def get_user_ids(self) -> List[int]:
        return sorted(self._logins)

    def get_site_network(self, site_id: int) -> Optional[int]:
        return self._sites.get(site_id)

    def get_sites_of_user(self, user_id: int) -> Dict[int, int]:
        return {
            site_id: self._sites[site_id]
            for site_id in self._memberships.get(user_id, ())
            if site_id in self._sites
        }

    def get_primary_network(self, user_id: int) -> Optional[int]:
        site_id = self._primary_sites.get(user_id)
        if site_id is None:
            return None
        return self._sites.get(site_id)
