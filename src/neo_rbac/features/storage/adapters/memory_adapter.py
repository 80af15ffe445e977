"""Memory storage backend adapter for neo-rbac."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from ....config.constants import ItemType
from ....core.exceptions import (
    DuplicateItemError,
    GrantNotFoundError,
    ItemNotFoundError,
    SelfGrantError,
)
from ...permissions.entities import Base, Permission, RBACStorage, Role
from .binding import RBACBindingMixin

logger = logging.getLogger(__name__)


@dataclass
class MemoryEntry:
    """Stored item with its ordered outgoing edges."""
    item: Base
    grants: List[str] = field(default_factory=list)


class MemoryStorage(RBACBindingMixin, RBACStorage):
    """Process-local storage. State is lost when the engine goes away."""

    def __init__(self):
        self._items: Dict[str, MemoryEntry] = {}

    def _get_entry(self, name: str, item_type: Optional[ItemType] = None) -> MemoryEntry:
        entry = self._items.get(name)
        if entry is None or (item_type is not None and entry.item.type is not item_type):
            raise ItemNotFoundError(f"Item '{name}' is not stored", details={"name": name})
        return entry

    async def add(self, item: Base) -> bool:
        """Store role or permission."""
        if item.name in self._items:
            raise DuplicateItemError(
                f"Item {item.name} is already in storage",
                details={"name": item.name},
            )

        self._items[item.name] = MemoryEntry(item=item)
        logger.info(f"{item.type.value} {item.name} added")
        return True

    async def remove(self, item: Base) -> bool:
        """Remove item and purge its name from every role's grants."""
        self._get_entry(item.name)
        del self._items[item.name]

        for entry in self._items.values():
            if item.name in entry.grants:
                entry.grants.remove(item.name)

        logger.info(f"{item.type.value} {item.name} removed")
        return True

    async def grant(self, role: Role, child: Base) -> bool:
        """Add child to the role grants."""
        if role.name == child.name:
            raise SelfGrantError(
                f"Role {role.name} can not be granted to itself",
                details={"role": role.name},
            )

        entry = self._get_entry(role.name, ItemType.ROLE)
        self._get_entry(child.name)

        if child.name not in entry.grants:
            entry.grants.append(child.name)
            logger.info(f"{child.name} granted to {role.name}")
        return True

    async def revoke(self, role: Role, child: Base) -> bool:
        """Remove child from the role grants."""
        entry = self._get_entry(role.name, ItemType.ROLE)
        self._get_entry(child.name)

        if child.name not in entry.grants:
            raise GrantNotFoundError(
                f"Item {child.name} is not associated to {role.name}",
                details={"role": role.name, "child": child.name},
            )

        entry.grants.remove(child.name)
        logger.info(f"{child.name} revoked from {role.name}")
        return True

    async def get(self, name: str) -> Optional[Union[Role, Permission]]:
        entry = self._items.get(name)
        return entry.item if entry else None

    async def get_role(self, name: str) -> Optional[Role]:
        entry = self._items.get(name)
        if entry and entry.item.type is ItemType.ROLE:
            return entry.item
        return None

    async def get_permission(self, action: str, resource: str) -> Optional[Permission]:
        entry = self._items.get(self._permission_name(action, resource))
        if entry and entry.item.type is ItemType.PERMISSION:
            return entry.item
        return None

    async def get_roles(self) -> List[Role]:
        return [entry.item for entry in self._items.values() if entry.item.type is ItemType.ROLE]

    async def get_permissions(self) -> List[Permission]:
        return [entry.item for entry in self._items.values() if entry.item.type is ItemType.PERMISSION]

    async def get_grants(self, role_name: str) -> List[Union[Role, Permission]]:
        entry = self._items.get(role_name)
        if entry is None or entry.item.type is not ItemType.ROLE:
            return []

        return [self._items[name].item for name in entry.grants if name in self._items]

    async def exists(self, name: str) -> bool:
        return name in self._items

    async def exists_role(self, name: str) -> bool:
        return await self.get_role(name) is not None

    async def exists_permission(self, action: str, resource: str) -> bool:
        return await self.get_permission(action, resource) is not None
