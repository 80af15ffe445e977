"""Protocol interfaces for the RBAC storage layer.

Defines the contract every backend fulfils so the engine can run against
memory, Redis or PostgreSQL without knowing which one it talks to.
"""

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional, Protocol, Union, runtime_checkable

from .base import Base
from .permission import Permission
from .role import Role

if TYPE_CHECKING:
    from ..services.rbac_service import RBAC


@runtime_checkable
class RBACStorage(Protocol):
    """Protocol for role/permission persistence and hierarchy edges."""

    @abstractmethod
    def use_rbac(self, rbac: "RBAC") -> None:
        """Bind the storage to its engine. A storage can be bound only once."""
        ...

    @abstractmethod
    async def add(self, item: Base) -> bool:
        """Persist a role or permission. Raises DuplicateItemError if the name exists."""
        ...

    @abstractmethod
    async def remove(self, item: Base) -> bool:
        """Delete an item and purge its name from every role's grants."""
        ...

    @abstractmethod
    async def grant(self, role: Role, child: Base) -> bool:
        """Add the edge role -> child."""
        ...

    @abstractmethod
    async def revoke(self, role: Role, child: Base) -> bool:
        """Remove the edge role -> child. Raises GrantNotFoundError if absent."""
        ...

    @abstractmethod
    async def get(self, name: str) -> Optional[Union[Role, Permission]]:
        """Get a stored item by name."""
        ...

    @abstractmethod
    async def get_role(self, name: str) -> Optional[Role]:
        ...

    @abstractmethod
    async def get_permission(self, action: str, resource: str) -> Optional[Permission]:
        ...

    @abstractmethod
    async def get_roles(self) -> List[Role]:
        ...

    @abstractmethod
    async def get_permissions(self) -> List[Permission]:
        ...

    @abstractmethod
    async def get_grants(self, role_name: str) -> List[Union[Role, Permission]]:
        """Direct children of a role in edge order. Unknown role yields an empty list."""
        ...

    @abstractmethod
    async def exists(self, name: str) -> bool:
        ...

    @abstractmethod
    async def exists_role(self, name: str) -> bool:
        ...

    @abstractmethod
    async def exists_permission(self, action: str, resource: str) -> bool:
        ...
