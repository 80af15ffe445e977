"""Tests for breadth-first hierarchy traversal."""

from collections import Counter

import pytest
import pytest_asyncio

from neo_rbac import RBAC, RBACOptions
from neo_rbac.config.constants import ItemType
from neo_rbac.core.exceptions import StorageError
from neo_rbac.features.permissions.services.traversal import traverse_grants
from neo_rbac.features.storage.adapters import MemoryStorage


class CountingStorage(MemoryStorage):
    """Memory storage recording how often each role is expanded."""

    def __init__(self):
        super().__init__()
        self.expanded = Counter()

    async def get_grants(self, role_name):
        self.expanded[role_name] += 1
        return await super().get_grants(role_name)


@pytest_asyncio.fixture
async def cyclic_rbac():
    """a -> b -> c -> a, with one permission per role."""
    storage = CountingStorage()
    rbac = RBAC(RBACOptions(storage=storage))
    await rbac.create(
        ["a", "b", "c"],
        {"doc": ["read", "write", "share"]},
        {
            "a": ["b", "read_doc"],
            "b": ["c", "write_doc"],
            "c": ["a", "share_doc"],
        },
    )
    return rbac


class TestTraverseGrants:
    """Test walk order, termination and early exit."""

    @pytest.mark.asyncio
    async def test_cycle_terminates_and_expands_each_role_once(self, cyclic_rbac):
        visited = []

        result = await traverse_grants(cyclic_rbac.storage, "a", lambda item: visited.append(item.name))

        assert result is None
        assert cyclic_rbac.storage.expanded == Counter({"a": 1, "b": 1, "c": 1})
        assert visited == ["b", "read_doc", "c", "write_doc", "a", "share_doc"]

    @pytest.mark.asyncio
    async def test_two_role_cycle(self):
        storage = CountingStorage()
        rbac = RBAC(RBACOptions(storage=storage))
        await rbac.create(["a", "b"], {}, {"a": ["b"], "b": ["a"]})

        assert await rbac.has_role("a", "b") is True
        assert await rbac.has_role("b", "a") is True

        storage.expanded.clear()
        assert await rbac.can("a", "read", "doc") is False
        assert storage.expanded == Counter({"a": 1, "b": 1})

    @pytest.mark.asyncio
    async def test_scope_through_cycle(self, cyclic_rbac):
        assert await cyclic_rbac.get_scope("b") == ["write_doc", "share_doc", "read_doc"]

    @pytest.mark.asyncio
    async def test_first_result_stops_walk(self, cyclic_rbac):
        def handle(item):
            return item.name if item.type is ItemType.PERMISSION else None

        result = await traverse_grants(cyclic_rbac.storage, "a", handle)

        assert result == "read_doc"
        assert cyclic_rbac.storage.expanded == Counter({"a": 1})

    @pytest.mark.asyncio
    async def test_async_visitor(self, cyclic_rbac):
        async def handle(item):
            return True if item.name == "share_doc" else None

        assert await traverse_grants(cyclic_rbac.storage, "a", handle) is True

    @pytest.mark.asyncio
    async def test_false_result_stops_walk(self, cyclic_rbac):
        result = await traverse_grants(cyclic_rbac.storage, "a", lambda item: False)

        assert result is False
        assert cyclic_rbac.storage.expanded == Counter({"a": 1})

    @pytest.mark.asyncio
    async def test_child_visited_per_edge(self):
        rbac = RBAC()
        await rbac.create(
            ["top", "left", "right", "shared"],
            {},
            {"top": ["left", "right"], "left": ["shared"], "right": ["shared"]},
        )
        seen = []

        await traverse_grants(rbac.storage, "top", lambda item: seen.append(item.name))

        assert seen == ["left", "right", "shared", "shared"]

    @pytest.mark.asyncio
    async def test_storage_errors_propagate(self):
        class BrokenStorage(MemoryStorage):
            async def get_grants(self, role_name):
                raise StorageError("backend down")

        with pytest.raises(StorageError):
            await traverse_grants(BrokenStorage(), "a", lambda item: None)
