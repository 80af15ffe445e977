"""RBAC engine.

Coordinates entity creation, hierarchy mutation and permission queries on
top of a pluggable ``RBACStorage``. Mutations of the super role are only
accepted when the caller passes ``privileged=True``; ``init()`` does so when
it applies the configured policy.
"""

import asyncio
import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ....config.constants import ItemType
from ....core.exceptions import (
    ForbiddenError,
    InvalidArgumentError,
    ItemNotFoundError,
)
from ..entities import (
    Base,
    Permission,
    RBACOptions,
    RBACSnapshot,
    RBACStorage,
    Role,
)
from ..utils.naming import decode_name, get_permission_names, is_valid_name
from .traversal import traverse_grants

logger = logging.getLogger(__name__)


class RBAC:
    """Hierarchical role based access control engine."""

    def __init__(self, options: Optional[RBACOptions] = None):
        options = options if options is not None else RBACOptions()

        if not options.delimiter:
            raise InvalidArgumentError("Delimiter is not defined")
        if not is_valid_name(options.super_role, options.delimiter):
            raise InvalidArgumentError(
                f"Super role '{options.super_role}' has no valid name",
                details={"super_role": options.super_role, "delimiter": options.delimiter},
            )

        storage = options.storage
        if storage is None:
            from ...storage.adapters.memory_adapter import MemoryStorage

            storage = MemoryStorage()
        elif not isinstance(storage, RBACStorage):
            raise InvalidArgumentError(
                "Storage does not implement RBACStorage",
                details={"storage": type(storage).__name__},
            )

        self._options = replace(options, storage=storage)
        self._storage = storage
        self._storage.use_rbac(self)

    @property
    def options(self) -> RBACOptions:
        return self._options

    @property
    def storage(self) -> RBACStorage:
        return self._storage

    @staticmethod
    def get_permission_names(permissions: Iterable[Tuple[str, str]], delimiter: str) -> List[str]:
        """Convert (action, resource) pairs to grant names."""
        return get_permission_names(permissions, delimiter)

    async def init(self) -> RBACSnapshot:
        """Apply configured roles, permissions and grants in privileged mode."""
        logger.info(
            f"Initializing RBAC with {len(self._options.roles)} roles, "
            f"{len(self._options.permissions)} resources and {len(self._options.grants)} grant entries"
        )
        return await self.create(
            self._options.roles,
            self._options.permissions,
            self._options.grants,
            privileged=True,
        )

    # Lookups

    async def get(self, name: str) -> Optional[Union[Role, Permission]]:
        """Get instance of Role or Permission by its name."""
        return await self._storage.get(name)

    async def get_role(self, name: str) -> Optional[Role]:
        return await self._storage.get_role(name)

    async def get_roles(self) -> List[Role]:
        return await self._storage.get_roles()

    async def get_permission(self, action: str, resource: str) -> Optional[Permission]:
        return await self._storage.get_permission(action, resource)

    async def get_permission_by_name(self, name: str) -> Optional[Permission]:
        """Get a permission by its encoded grant name."""
        decoded = decode_name(name, self._options.delimiter)
        return await self._storage.get_permission(decoded.action, decoded.resource)

    async def get_permissions(self) -> List[Permission]:
        return await self._storage.get_permissions()

    async def exists(self, name: str) -> bool:
        return await self._storage.exists(name)

    async def exists_role(self, name: str) -> bool:
        return await self._storage.exists_role(name)

    async def exists_permission(self, action: str, resource: str) -> bool:
        return await self._storage.exists_permission(action, resource)

    # Creation

    async def create_role(self, name: str, persist: bool = True, *, privileged: bool = False) -> Role:
        """Create a role owned by this engine, storing it unless persist is False."""
        role = Role(self, name)
        if persist:
            await role.add(privileged=privileged)
        return role

    async def create_roles(
        self,
        names: Sequence[str],
        persist: bool = True,
        *,
        privileged: bool = False,
    ) -> Dict[str, Role]:
        """Create several roles concurrently."""
        roles = await asyncio.gather(
            *(self.create_role(name, persist, privileged=privileged) for name in names)
        )
        return {role.name: role for role in roles}

    async def create_permission(self, action: str, resource: str, persist: bool = True) -> Permission:
        permission = Permission(self, action, resource)
        if persist:
            await permission.add()
        return permission

    async def create_permissions(
        self,
        resources: Mapping[str, Sequence[str]],
        persist: bool = True,
    ) -> Dict[str, Permission]:
        """Create permissions from a mapping of resource to ordered actions."""
        if not isinstance(resources, Mapping):
            raise InvalidArgumentError("Resources must be a mapping of resource to actions")

        permissions: Dict[str, Permission] = {}
        for resource, actions in resources.items():
            if not isinstance(actions, (list, tuple)):
                raise InvalidArgumentError(
                    f"Actions of resource '{resource}' must be a list",
                    details={"resource": resource},
                )
            for action in actions:
                permission = await self.create_permission(action, resource, persist)
                permissions[permission.name] = permission

        return permissions

    async def create(
        self,
        roles: Sequence[str],
        permissions: Mapping[str, Sequence[str]],
        grants: Optional[Mapping[str, Sequence[str]]] = None,
        *,
        privileged: bool = False,
    ) -> RBACSnapshot:
        """Create permissions and roles in one step, then apply grants."""
        created_permissions, created_roles = await asyncio.gather(
            self.create_permissions(permissions),
            self.create_roles(roles, privileged=privileged),
        )

        if grants:
            await self.grants(grants, privileged=privileged)

        return RBACSnapshot(roles=created_roles, permissions=created_permissions)

    # Mutation

    def _check_owned(self, *items: Optional[Base]) -> None:
        for item in items:
            if item is None:
                raise InvalidArgumentError("Item is undefined")
            if item.rbac is not self:
                raise InvalidArgumentError(
                    "Item is associated to another RBAC instance",
                    details={"name": item.name},
                )

    def _check_privileged(self, privileged: bool, *items: Base) -> None:
        if privileged:
            return
        for item in items:
            if item.name == self._options.super_role:
                raise ForbiddenError(
                    f"Role '{item.name}' can only be changed in privileged mode",
                    details={"name": item.name},
                )

    def _check_role(self, role: Base) -> None:
        if role.type is not ItemType.ROLE:
            raise InvalidArgumentError(
                f"'{role.name}' is not a role",
                details={"name": role.name, "type": role.type.value},
            )

    async def _get_existing(self, name: str) -> Union[Role, Permission]:
        item = await self._storage.get(name)
        if item is None:
            raise ItemNotFoundError(f"Item '{name}' does not exist", details={"name": name})
        return item

    async def add(self, item: Base, *, privileged: bool = False) -> bool:
        """Register role or permission in this engine's storage."""
        self._check_owned(item)
        self._check_privileged(privileged, item)
        return await self._storage.add(item)

    async def remove(self, item: Base, *, privileged: bool = False) -> bool:
        """Remove role or permission and every edge pointing to it."""
        self._check_owned(item)
        self._check_privileged(privileged, item)
        return await self._storage.remove(item)

    async def remove_by_name(self, name: str, *, privileged: bool = False) -> bool:
        item = await self._get_existing(name)
        return await self.remove(item, privileged=privileged)

    async def grant(self, role: Role, child: Base, *, privileged: bool = False) -> bool:
        """Grant permission or role to the role."""
        self._check_owned(role, child)
        self._check_role(role)
        self._check_privileged(privileged, role, child)
        return await self._storage.grant(role, child)

    async def grant_by_name(self, role_name: str, child_name: str, *, privileged: bool = False) -> bool:
        role, child = await asyncio.gather(
            self._get_existing(role_name),
            self._get_existing(child_name),
        )
        return await self.grant(role, child, privileged=privileged)

    async def grants(
        self,
        data: Mapping[str, Sequence[str]],
        *,
        privileged: bool = False,
    ) -> Dict[str, List[bool]]:
        """Grant multiple items in order.

        The mapping is validated before anything is written; grants already
        applied stay when a later one fails in storage.
        """
        if not isinstance(data, Mapping):
            raise InvalidArgumentError("Grants must be a mapping of role name to granted names")

        for role_name, children in data.items():
            if not isinstance(children, (list, tuple)):
                raise InvalidArgumentError(
                    f"Grants of role '{role_name}' must be a list",
                    details={"role": role_name},
                )

        results: Dict[str, List[bool]] = {}
        for role_name, children in data.items():
            written = []
            for child_name in children:
                written.append(await self.grant_by_name(role_name, child_name, privileged=privileged))
            results[role_name] = written

        return results

    async def revoke(self, role: Role, child: Base, *, privileged: bool = False) -> bool:
        """Revoke permission or role from the role."""
        self._check_owned(role, child)
        self._check_role(role)
        self._check_privileged(privileged, role, child)
        return await self._storage.revoke(role, child)

    async def revoke_by_name(self, role_name: str, child_name: str, *, privileged: bool = False) -> bool:
        role, child = await asyncio.gather(
            self._get_existing(role_name),
            self._get_existing(child_name),
        )
        return await self.revoke(role, child, privileged=privileged)

    async def delete_all(self, *, privileged: bool = False) -> RBACSnapshot:
        """Remove every permission, then every role."""
        for permission in await self.get_permissions():
            await permission.remove(privileged=privileged)
            logger.info(f"Permission {permission.name} deleted")

        for role in await self.get_roles():
            await role.remove(privileged=privileged)
            logger.info(f"Role {role.name} deleted")

        return RBACSnapshot()

    # Queries

    async def can(self, role_name: str, action: str, resource: str) -> bool:
        """Return True if the role hierarchy contains the permission."""
        def handle(item: Base) -> Optional[bool]:
            if item.type is ItemType.PERMISSION and item.can(action, resource):
                return True
            return None

        return bool(await traverse_grants(self._storage, role_name, handle))

    async def can_any(self, role_name: str, permissions: Iterable[Tuple[str, str]]) -> bool:
        """Check if the role has any of the given permissions."""
        names = set(self.get_permission_names(permissions, self._options.delimiter))
        if not names:
            return False

        def handle(item: Base) -> Optional[bool]:
            if item.type is ItemType.PERMISSION and item.name in names:
                return True
            return None

        return bool(await traverse_grants(self._storage, role_name, handle))

    async def can_all(self, role_name: str, permissions: Iterable[Tuple[str, str]]) -> bool:
        """Check if the role has all the given permissions."""
        missing = set(self.get_permission_names(permissions, self._options.delimiter))
        if not missing:
            return True

        def handle(item: Base) -> Optional[bool]:
            if item.type is ItemType.PERMISSION:
                missing.discard(item.name)
                if not missing:
                    return True
            return None

        await traverse_grants(self._storage, role_name, handle)
        return not missing

    async def has_role(self, role_name: str, role_child_name: str) -> bool:
        """Return True if the role is or inherits the given role."""
        if role_name == role_child_name:
            return True

        def handle(item: Base) -> Optional[bool]:
            if item.type is ItemType.ROLE and item.name == role_child_name:
                return True
            return None

        return bool(await traverse_grants(self._storage, role_name, handle))

    async def get_scope(self, role_name: str) -> List[str]:
        """Return distinct permission names reachable from the role in visit order."""
        scope: List[str] = []
        seen = set()

        def handle(item: Base) -> None:
            if item.type is ItemType.PERMISSION and item.name not in seen:
                seen.add(item.name)
                scope.append(item.name)

        await traverse_grants(self._storage, role_name, handle)
        return scope

    def __repr__(self) -> str:
        return f"RBAC(storage={type(self._storage).__name__}, delimiter={self._options.delimiter!r})"
