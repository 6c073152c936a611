"""RoleSet entity and its persisted representation.

A RoleSet is the mapping of role key to Role for one network. It is
persisted as one value under the ``user_roles`` option:

    {
        "administrator": {
            "name": "Network Administrator",
            "capabilities": {"manage_network": true, ...}
        },
        ...
    }

Older writers stored the display name under ``display_name``; both spellings
are accepted when decoding, ``name`` is always written.
"""

import json
import logging
from typing import Any, Dict, Iterator, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from .role import Role

logger = logging.getLogger(__name__)


class RoleDefinition(BaseModel):
    """Validated persisted definition of a single role."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="", validation_alias=AliasChoices("name", "display_name"))
    capabilities: Dict[str, bool] = Field(default_factory=dict)


class RoleSet:
    """Ordered mapping of role key to Role for one network."""

    def __init__(self, roles: Optional[List[Role]] = None):
        self._roles: Dict[str, Role] = {}
        for role in roles or []:
            self._roles[role.key] = role

    # Mapping behaviour

    def __contains__(self, key: object) -> bool:
        return key in self._roles

    def __iter__(self) -> Iterator[str]:
        return iter(self._roles)

    def __len__(self) -> int:
        return len(self._roles)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RoleSet):
            return NotImplemented
        return self.to_payload() == other.to_payload()

    def keys(self) -> List[str]:
        return list(self._roles)

    def get(self, key: str) -> Optional[Role]:
        return self._roles.get(key)

    def add(self, role: Role) -> None:
        self._roles[role.key] = role

    def remove(self, key: str) -> Optional[Role]:
        return self._roles.pop(key, None)

    def names(self) -> Dict[str, str]:
        """Get role display names keyed by role key."""
        return {key: role.display_name for key, role in self._roles.items()}

    def copy(self) -> "RoleSet":
        return RoleSet([role.copy() for role in self._roles.values()])

    # Serialization

    def to_payload(self) -> Dict[str, Dict[str, Any]]:
        """Convert to the persisted representation."""
        return {key: role.to_dict() for key, role in self._roles.items()}

    def to_json(self) -> str:
        return json.dumps(self.to_payload())

    @classmethod
    def from_payload(cls, payload: Any) -> "RoleSet":
        """Build a RoleSet from a persisted value.

        Anything that is not a mapping decodes as an empty set. Individual
        role definitions that fail validation are skipped with a warning so
        that one corrupt entry does not hide every other role.
        """
        if not isinstance(payload, dict):
            if payload not in (None, "", []):
                logger.warning(f"Ignoring role set payload of type {type(payload).__name__}")
            return cls()

        roles = []
        for key, data in payload.items():
            if not key:
                continue
            try:
                definition = RoleDefinition.model_validate(data)
            except ValidationError as e:
                logger.warning(f"Skipping invalid definition for role '{key}': {e.error_count()} error(s)")
                continue
            roles.append(Role(key=str(key), display_name=definition.name, capabilities=definition.capabilities))
        return cls(roles)

    @classmethod
    def from_json(cls, raw: str) -> "RoleSet":
        return cls.from_payload(json.loads(raw))

    @classmethod
    def from_definitions(cls, definitions: List[Dict[str, Any]]) -> "RoleSet":
        """Build a RoleSet from ``{"role", "display_name", "capabilities"}`` dicts."""
        return cls([
            Role(
                key=definition["role"],
                display_name=definition.get("display_name", definition["role"]),
                capabilities=definition.get("capabilities", {}),
            )
            for definition in definitions
        ])

    def __repr__(self) -> str:
        return f"RoleSet({', '.join(self._roles)})"
