"""Resolved capability set of one user in one network."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple


@dataclass(frozen=True)
class ResolvedCapabilities:
    """Result of merging a user's network roles with their individual entries.

    ``caps`` is the raw capability record as stored; ``roles`` the role keys
    found in it, in record order; ``allcaps`` the merged map used for checks.
    Instances are shared through the resolution cache, so the maps are stored
    as read-only views and ``roles`` as a tuple.
    """

    user_id: int
    network_id: int
    caps: Mapping[str, bool] = field(default_factory=dict)
    roles: Tuple[str, ...] = ()
    allcaps: Mapping[str, bool] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "caps", MappingProxyType(dict(self.caps)))
        object.__setattr__(self, "roles", tuple(self.roles))
        object.__setattr__(self, "allcaps", MappingProxyType(dict(self.allcaps)))

    def has_cap(self, cap: str) -> bool:
        return bool(self.allcaps.get(cap, False))

    def has_role(self, role: str) -> bool:
        return role in self.roles

    @property
    def is_empty(self) -> bool:
        return not self.caps
