"""Tests specific to the memory storage adapter."""

import logging

import pytest

from neo_rbac.core.exceptions import StorageBindingError
from neo_rbac.features.permissions.entities import RBACStorage, Role
from neo_rbac.features.storage.adapters import MemoryStorage


class TestMemoryStorage:
    """Test memory storage behaviour."""

    def test_satisfies_protocol(self):
        assert isinstance(MemoryStorage(), RBACStorage)

    def test_unbound(self):
        storage = MemoryStorage()

        assert storage.rbac is None

    @pytest.mark.asyncio
    async def test_unbound_permission_lookup(self):
        with pytest.raises(StorageBindingError):
            await MemoryStorage().get_permission("create", "page")

    @pytest.mark.asyncio
    async def test_keeps_entity_instances(self, rbac):
        role = await rbac.create_role("admin")

        assert await rbac.storage.get("admin") is role

    @pytest.mark.asyncio
    async def test_logs_mutations(self, rbac, caplog):
        caplog.set_level(logging.INFO, logger="neo_rbac.features.storage.adapters.memory_adapter")

        await rbac.create(["admin", "user"], {}, {"admin": ["user"]})
        await rbac.revoke_by_name("admin", "user")
        await rbac.remove_by_name("user")

        assert "Role admin added" in caplog.text
        assert "user granted to admin" in caplog.text
        assert "user revoked from admin" in caplog.text
        assert "Role user removed" in caplog.text

