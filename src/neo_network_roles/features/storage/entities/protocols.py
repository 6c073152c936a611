"""Protocol interfaces for the storage collaborators.

The network roles services never talk to a concrete backend. They consume:

- an option store scoped by network (role sets, legacy admin lists, flags),
- a user meta store scoped by user (per-network capability records, flags),
- a user directory (accounts, logins and site memberships), which is owned
  by the surrounding platform and only read here.
"""

from abc import abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class OptionStore(Protocol):
    """Key-value store scoped by network ID."""

    @abstractmethod
    def get(self, scope: int, key: str, default: Any = None) -> Any:
        """Get an option value, or ``default`` if it is absent."""
        ...

    @abstractmethod
    def set(self, scope: int, key: str, value: Any) -> None:
        """Replace an option value."""
        ...

    @abstractmethod
    def delete(self, scope: int, key: str) -> bool:
        """Delete an option. Returns True if it existed."""
        ...


@runtime_checkable
class UserMetaStore(Protocol):
    """Key-value store scoped by user ID."""

    @abstractmethod
    def get(self, user_id: int, key: str, default: Any = None) -> Any:
        """Get a user meta value, or ``default`` if it is absent."""
        ...

    @abstractmethod
    def set(self, user_id: int, key: str, value: Any) -> None:
        """Replace a user meta value."""
        ...

    @abstractmethod
    def delete(self, user_id: int, key: str) -> bool:
        """Delete a user meta value. Returns True if it existed."""
        ...

    @abstractmethod
    def find(self, key: str) -> Dict[int, Any]:
        """Get every user's value for ``key``, keyed by user ID."""
        ...


@runtime_checkable
class UserDirectory(Protocol):
    """Read access to user accounts and their site memberships."""

    @abstractmethod
    def get_username(self, user_id: int) -> Optional[str]:
        """Get the login name of a user, or None if the user does not exist."""
        ...

    @abstractmethod
    def get_user_ids_by_logins(self, logins: Iterable[str]) -> List[int]:
        """Get the IDs of existing users with the given login names."""
        ...

    @abstractmethod
    def get_user_ids(self) -> List[int]:
        """Get all user IDs in ascending order."""
        ...

    @abstractmethod
    def get_site_network(self, site_id: int) -> Optional[int]:
        """Get the network a site belongs to, or None if the site does not exist."""
        ...

    @abstractmethod
    def get_sites_of_user(self, user_id: int) -> Dict[int, int]:
        """Get the sites a user is a member of, as ``{site_id: network_id}``."""
        ...

    @abstractmethod
    def get_primary_network(self, user_id: int) -> Optional[int]:
        """Get the network of the user's primary site, if any."""
        ...
