"""Persisted form of graph nodes shared by every storage backend."""

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from ....config.constants import ItemType
from ....core.exceptions import StorageSerializationError
from .base import Base
from .permission import Permission
from .role import Role

if TYPE_CHECKING:
    from ..services.rbac_service import RBAC


@dataclass
class ItemRecord:
    """Storage record of a role or permission.

    Layout: ``{"type": "Role"|"Permission", "name": str, "grants": [str]}``
    with ``grants`` present only for roles.
    """
    type: ItemType
    name: str
    grants: Optional[List[str]] = None

    def __post_init__(self):
        if not isinstance(self.type, ItemType):
            try:
                self.type = ItemType(self.type)
            except ValueError as e:
                raise StorageSerializationError(
                    f"Unknown item type '{self.type}'",
                    details={"name": self.name, "type": self.type},
                ) from e

        if self.type is ItemType.ROLE:
            self.grants = list(self.grants or [])
        else:
            self.grants = None

    @property
    def is_role(self) -> bool:
        return self.type is ItemType.ROLE

    @classmethod
    def from_entity(cls, item: Base, grants: Optional[List[str]] = None) -> "ItemRecord":
        return cls(type=item.type, name=item.name, grants=grants)

    def to_entity(self, rbac: "RBAC") -> Union[Role, Permission]:
        """Instantiate the entity described by this record for the given engine."""
        if self.is_role:
            return Role(rbac, self.name)
        return Permission.from_name(rbac, self.name)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type.value, "name": self.name}
        if self.is_role:
            data["grants"] = list(self.grants)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ItemRecord":
        try:
            return cls(type=data["type"], name=data["name"], grants=data.get("grants"))
        except (KeyError, TypeError) as e:
            raise StorageSerializationError(
                f"Malformed item record: {e}",
                details={"record": data},
            ) from e

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, raw: Union[str, bytes]) -> "ItemRecord":
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            raise StorageSerializationError(f"Failed to decode item record: {e}") from e

        if not isinstance(data, dict):
            raise StorageSerializationError("Item record must be a JSON object", details={"record": data})
        return cls.from_dict(data)
