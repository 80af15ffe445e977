"""Role domain entity for neo-rbac.

A role is a named principal category. Roles grant permissions and other
roles; every query method delegates to the owning engine, which walks the
hierarchy stored in its backend.
"""

from typing import TYPE_CHECKING, Iterable, List, Tuple, Union

from ....config.constants import ItemType
from ....core.exceptions import InvalidArgumentError, InvalidNameError
from ..utils.naming import is_valid_name
from .base import Base

if TYPE_CHECKING:
    from ..services.rbac_service import RBAC
    from .permission import Permission


class Role(Base):
    """Named principal category."""

    type = ItemType.ROLE

    __slots__ = ()

    def __init__(self, rbac: "RBAC", name: str):
        if rbac is None:
            raise InvalidArgumentError("RBAC instance is undefined", details={"name": name})

        if not is_valid_name(name, rbac.options.delimiter):
            raise InvalidNameError(
                f"Role '{name}' has no valid name",
                details={"name": name, "delimiter": rbac.options.delimiter},
            )

        super().__init__(rbac, name)

    @property
    def is_super_role(self) -> bool:
        """Check if this is the protected super role of its engine."""
        return self._name == self._rbac.options.super_role

    async def grant(self, item: Union["Role", "Permission"], *, privileged: bool = False) -> bool:
        """Add role or permission to current role."""
        return await self._rbac.grant(self, item, privileged=privileged)

    async def revoke(self, item: Union["Role", "Permission"], *, privileged: bool = False) -> bool:
        """Remove role or permission from current role."""
        return await self._rbac.revoke(self, item, privileged=privileged)

    async def can(self, action: str, resource: str) -> bool:
        """Return True if the hierarchy of this role contains the permission."""
        return await self._rbac.can(self._name, action, resource)

    async def can_any(self, permissions: Iterable[Tuple[str, str]]) -> bool:
        """Check if the role has any of the given permissions."""
        return await self._rbac.can_any(self._name, permissions)

    async def can_all(self, permissions: Iterable[Tuple[str, str]]) -> bool:
        """Check if the role has all the given permissions."""
        return await self._rbac.can_all(self._name, permissions)

    async def has_role(self, role_child_name: str) -> bool:
        """Return True if the current role is or inherits the specified role."""
        return await self._rbac.has_role(self._name, role_child_name)

    async def get_scope(self) -> List[str]:
        """Return names of every permission reachable from this role."""
        return await self._rbac.get_scope(self._name)
