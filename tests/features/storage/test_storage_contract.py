"""Behaviour every in-process storage backend shares."""

import pytest

from neo_rbac.core.exceptions import (
    DuplicateItemError,
    GrantNotFoundError,
    ItemNotFoundError,
    SelfGrantError,
    StorageBindingError,
)
from neo_rbac.features.permissions.entities import Permission, Role


class TestStorageContract:
    """Run against memory and Redis storage."""

    @pytest.mark.asyncio
    async def test_add_and_get(self, storage_rbac):
        storage = storage_rbac.storage
        role = Role(storage_rbac, "admin")
        permission = Permission(storage_rbac, "create", "page")

        assert await storage.add(role) is True
        assert await storage.add(permission) is True

        assert await storage.get("admin") == role
        assert await storage.get("create_page") == permission
        assert await storage.get("ghost") is None
        assert await storage.get_role("admin") == role
        assert await storage.get_role("create_page") is None
        assert await storage.get_permission("create", "page") == permission
        assert await storage.get_permission("admin", "x") is None

    @pytest.mark.asyncio
    async def test_loaded_entities_belong_to_engine(self, storage_rbac):
        await storage_rbac.create_permission("create", "page")

        permission = await storage_rbac.storage.get("create_page")

        assert permission.rbac is storage_rbac
        assert permission.action == "create"
        assert permission.resource == "page"

    @pytest.mark.asyncio
    async def test_duplicate(self, storage_rbac):
        await storage_rbac.storage.add(Role(storage_rbac, "admin"))

        with pytest.raises(DuplicateItemError):
            await storage_rbac.storage.add(Role(storage_rbac, "admin"))

    @pytest.mark.asyncio
    async def test_lists(self, storage_rbac):
        await storage_rbac.create(["admin", "user"], {"page": ["create", "read"]})

        roles = await storage_rbac.storage.get_roles()
        permissions = await storage_rbac.storage.get_permissions()

        assert {role.name for role in roles} == {"admin", "user"}
        assert {permission.name for permission in permissions} == {"create_page", "read_page"}

    @pytest.mark.asyncio
    async def test_exists(self, storage_rbac):
        await storage_rbac.create(["admin"], {"page": ["create"]})
        storage = storage_rbac.storage

        assert await storage.exists("admin") is True
        assert await storage.exists("create_page") is True
        assert await storage.exists("ghost") is False
        assert await storage.exists_role("admin") is True
        assert await storage.exists_role("create_page") is False
        assert await storage.exists_permission("create", "page") is True
        assert await storage.exists_permission("delete", "page") is False

    @pytest.mark.asyncio
    async def test_grants_keep_edge_order(self, storage_rbac):
        await storage_rbac.create(
            ["admin", "user"],
            {"page": ["create", "read"]},
            {"admin": ["read_page", "user", "create_page"]},
        )

        grants = await storage_rbac.storage.get_grants("admin")

        assert [item.name for item in grants] == ["read_page", "user", "create_page"]
        assert await storage_rbac.storage.get_grants("user") == []
        assert await storage_rbac.storage.get_grants("ghost") == []
        assert await storage_rbac.storage.get_grants("read_page") == []

    @pytest.mark.asyncio
    async def test_grant_is_idempotent(self, storage_rbac):
        await storage_rbac.create(["admin", "user"], {})
        admin = await storage_rbac.get_role("admin")
        user = await storage_rbac.get_role("user")

        assert await storage_rbac.storage.grant(admin, user) is True
        assert await storage_rbac.storage.grant(admin, user) is True
        assert [item.name for item in await storage_rbac.storage.get_grants("admin")] == ["user"]

    @pytest.mark.asyncio
    async def test_grant_checks(self, storage_rbac):
        await storage_rbac.create(["admin"], {})
        admin = await storage_rbac.get_role("admin")
        ghost = Role(storage_rbac, "ghost")

        with pytest.raises(SelfGrantError):
            await storage_rbac.storage.grant(admin, admin)
        with pytest.raises(ItemNotFoundError):
            await storage_rbac.storage.grant(admin, ghost)
        with pytest.raises(ItemNotFoundError):
            await storage_rbac.storage.grant(ghost, admin)

    @pytest.mark.asyncio
    async def test_revoke(self, storage_rbac):
        await storage_rbac.create(["admin", "user"], {}, {"admin": ["user"]})
        admin = await storage_rbac.get_role("admin")
        user = await storage_rbac.get_role("user")

        assert await storage_rbac.storage.revoke(admin, user) is True
        assert await storage_rbac.storage.get_grants("admin") == []

        with pytest.raises(GrantNotFoundError):
            await storage_rbac.storage.revoke(admin, user)
        with pytest.raises(ItemNotFoundError):
            await storage_rbac.storage.revoke(admin, Role(storage_rbac, "ghost"))

    @pytest.mark.asyncio
    async def test_remove_cascades(self, storage_rbac):
        await storage_rbac.create(
            ["admin", "editor", "user"],
            {"page": ["create"]},
            {"admin": ["user", "create_page"], "editor": ["create_page"]},
        )
        permission = await storage_rbac.get("create_page")

        assert await storage_rbac.storage.remove(permission) is True

        assert await storage_rbac.storage.exists("create_page") is False
        assert [item.name for item in await storage_rbac.storage.get_grants("admin")] == ["user"]
        assert await storage_rbac.storage.get_grants("editor") == []

    @pytest.mark.asyncio
    async def test_remove_missing(self, storage_rbac):
        with pytest.raises(ItemNotFoundError):
            await storage_rbac.storage.remove(Role(storage_rbac, "ghost"))

    def test_binds_once(self, storage_rbac):
        with pytest.raises(StorageBindingError):
            storage_rbac.storage.use_rbac(storage_rbac)

    @pytest.mark.asyncio
    async def test_engine_scenario(self, storage_rbac):
        await storage_rbac.create(
            ["admin", "user"],
            {"page": ["create"], "user": ["delete"]},
            {"user": ["create_page"], "admin": ["user", "delete_user"]},
        )

        assert await storage_rbac.can("admin", "create", "page") is True
        assert await storage_rbac.can("user", "delete", "user") is False
        assert await storage_rbac.get_scope("admin") == ["delete_user", "create_page"]
