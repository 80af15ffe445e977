"""Shared base of the authorization graph nodes."""

from typing import TYPE_CHECKING, ClassVar

from ....config.constants import ItemType
from ....core.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from ..services.rbac_service import RBAC


class Base:
    """Named node owned by one RBAC engine.

    Nodes hold no hierarchy state; edges live in the engine's storage.
    """

    type: ClassVar[ItemType]

    __slots__ = ("_rbac", "_name")

    def __init__(self, rbac: "RBAC", name: str):
        if rbac is None or not name:
            raise InvalidArgumentError("One of parameters is undefined", details={"name": name})

        self._rbac = rbac
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def rbac(self) -> "RBAC":
        return self._rbac

    async def add(self, *, privileged: bool = False) -> bool:
        """Register this node in the engine storage."""
        return await self._rbac.add(self, privileged=privileged)

    async def remove(self, *, privileged: bool = False) -> bool:
        """Remove this node and every edge pointing to it."""
        return await self._rbac.remove(self, privileged=privileged)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Base):
            return NotImplemented
        return self.type is other.type and self._name == other._name

    def __hash__(self) -> int:
        return hash((self.type, self._name))

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._name!r})"
