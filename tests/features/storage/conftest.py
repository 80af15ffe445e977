"""Storage test fixtures."""

import asyncio
import inspect
from typing import Dict, List

import pytest
from redis.exceptions import WatchError

from neo_rbac import RBAC, RBACOptions
from neo_rbac.features.storage.adapters import MemoryStorage, RedisStorage


class FakePipeline:
    """WATCH/MULTI/EXEC over a FakeRedis.

    Reads run immediately while watching; hset and hdel are queued after
    multi() and applied without yielding on execute().
    """

    def __init__(self, client: "FakeRedis"):
        self.client = client
        self.watched: Dict[str, int] = {}
        self.commands: List[tuple] = []

    async def watch(self, *keys):
        for key in keys:
            self.watched[key] = self.client.versions.get(key, 0)

    async def hget(self, key, field):
        return await self.client.hget(key, field)

    async def hmget(self, key, fields):
        return await self.client.hmget(key, fields)

    async def hgetall(self, key):
        return await self.client.hgetall(key)

    def multi(self):
        pass

    def hdel(self, key, *fields):
        self.commands.append(("hdel", key, fields))
        return self

    def hset(self, key, field, value):
        self.commands.append(("hset", key, field, value))
        return self

    async def execute(self):
        changed = [key for key, version in self.watched.items() if self.client.versions.get(key, 0) != version]
        commands, self.commands, self.watched = self.commands, [], {}
        if changed:
            raise WatchError(f"Watched variable changed: {changed}")

        results = []
        for command in commands:
            if command[0] == "hdel":
                results.append(self.client._delete(command[1], command[2]))
            else:
                results.append(self.client._set(command[1], command[2], command[3]))
        self.client.executed_pipelines += 1
        return results


class FakeRedis:
    """In-process stand-in for the hash commands of redis.asyncio.Redis."""

    def __init__(self):
        self.hashes: Dict[str, Dict[str, str]] = {}
        self.versions: Dict[str, int] = {}
        self.executed_pipelines = 0
        self.watch_conflicts = 0

    def _hash(self, key):
        return self.hashes.setdefault(key, {})

    def _set(self, key, field, value):
        data = self._hash(key)
        created = field not in data
        data[field] = value
        self.versions[key] = self.versions.get(key, 0) + 1
        return int(created)

    def _delete(self, key, fields):
        data = self._hash(key)
        removed = sum(1 for field in fields if data.pop(field, None) is not None)
        if removed:
            self.versions[key] = self.versions.get(key, 0) + 1
        return removed

    async def hsetnx(self, key, field, value):
        if field in self._hash(key):
            return 0
        return self._set(key, field, value)

    async def hset(self, key, field, value):
        return self._set(key, field, value)

    async def hget(self, key, field):
        return self._hash(key).get(field)

    async def hmget(self, key, fields):
        data = self._hash(key)
        return [data.get(field) for field in fields]

    async def hgetall(self, key):
        return dict(self._hash(key))

    async def hexists(self, key, field):
        return field in self._hash(key)

    async def hdel(self, key, *fields):
        return self._delete(key, fields)

    def pipeline(self, transaction=True):
        return FakePipeline(self)

    async def transaction(self, func, *watches, value_from_callable=False):
        while True:
            pipe = self.pipeline(transaction=True)
            await pipe.watch(*watches)
            value = func(pipe)
            if inspect.isawaitable(value):
                value = await value
            try:
                result = await pipe.execute()
            except WatchError:
                self.watch_conflicts += 1
                continue
            return value if value_from_callable else result


class YieldingRedis(FakeRedis):
    """FakeRedis that yields to the event loop on every read and write."""

    async def hget(self, key, field):
        await asyncio.sleep(0)
        return await super().hget(key, field)

    async def hmget(self, key, fields):
        await asyncio.sleep(0)
        return await super().hmget(key, fields)

    async def hgetall(self, key):
        await asyncio.sleep(0)
        return await super().hgetall(key)

    async def hset(self, key, field, value):
        await asyncio.sleep(0)
        return await super().hset(key, field, value)


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def yielding_redis():
    return YieldingRedis()


@pytest.fixture(params=["memory", "redis"])
def storage_rbac(request, fake_redis):
    """Engine on each storage backend that can run in-process."""
    if request.param == "memory":
        storage = MemoryStorage()
    else:
        storage = RedisStorage(fake_redis, key_prefix="test")
    return RBAC(RBACOptions(storage=storage))
