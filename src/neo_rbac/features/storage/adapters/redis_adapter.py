"""Redis storage backend adapter for neo-rbac.

All records live in one hash (``{prefix}:items``) whose fields are item
names and whose values are JSON encoded ``ItemRecord`` payloads. Writes that
edit existing records run under WATCH on that hash and retry on conflict.
"""

import logging
from typing import Awaitable, Callable, List, Optional, TypeVar, Union

from redis.asyncio import Redis
from redis.asyncio.client import Pipeline
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError

from ....config.constants import ItemType, StorageDefaults, StorageKeys
from ....core.exceptions import (
    DuplicateItemError,
    GrantNotFoundError,
    InvalidArgumentError,
    ItemNotFoundError,
    SelfGrantError,
    StorageConnectionError,
    StorageError,
)
from ...permissions.entities import Base, ItemRecord, Permission, RBACStorage, Role
from .binding import RBACBindingMixin

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RedisStorage(RBACBindingMixin, RBACStorage):
    """Storage backed by a ``redis.asyncio`` client."""

    def __init__(self, client: Redis, key_prefix: str = StorageDefaults.REDIS_KEY_PREFIX):
        if client is None:
            raise InvalidArgumentError("Redis client is required")
        if not key_prefix:
            raise InvalidArgumentError("Redis key prefix is required")

        self._client = client
        self._key = StorageKeys.ITEMS.format(prefix=key_prefix)

    @property
    def key(self) -> str:
        return self._key

    def _wrap_error(self, operation: str, error: RedisError) -> StorageError:
        logger.error(f"Redis {operation} failed on {self._key}: {error}")
        if isinstance(error, RedisConnectionError):
            return StorageConnectionError(f"Redis connection failed during {operation}: {error}")
        return StorageError(f"Redis {operation} failed: {error}")

    async def _load(self, name: str) -> Optional[ItemRecord]:
        try:
            raw = await self._client.hget(self._key, name)
        except RedisError as e:
            raise self._wrap_error("hget", e) from e
        return ItemRecord.from_json(raw) if raw is not None else None

    async def _load_many(self, names: List[str]) -> List[Optional[ItemRecord]]:
        if not names:
            return []
        try:
            raws = await self._client.hmget(self._key, names)
        except RedisError as e:
            raise self._wrap_error("hmget", e) from e
        return [ItemRecord.from_json(raw) if raw is not None else None for raw in raws]

    async def _load_all(self) -> List[ItemRecord]:
        try:
            raws = await self._client.hgetall(self._key)
        except RedisError as e:
            raise self._wrap_error("hgetall", e) from e
        return [ItemRecord.from_json(raw) for raw in raws.values()]

    async def _transaction(self, operation: str, apply: Callable[[Pipeline], Awaitable[T]]) -> T:
        """Run apply under WATCH on the items hash, retrying when another writer commits first."""
        try:
            return await self._client.transaction(apply, self._key, value_from_callable=True)
        except RedisError as e:
            raise self._wrap_error(operation, e) from e

    async def _read_pair(self, pipe: Pipeline, role: Role, child: Base) -> ItemRecord:
        role_raw, child_raw = await pipe.hmget(self._key, [role.name, child.name])
        role_record = ItemRecord.from_json(role_raw) if role_raw is not None else None
        if role_record is None or not role_record.is_role:
            raise ItemNotFoundError(f"Role '{role.name}' is not stored", details={"name": role.name})
        if child_raw is None:
            raise ItemNotFoundError(f"Item '{child.name}' is not stored", details={"name": child.name})
        return role_record

    async def add(self, item: Base) -> bool:
        """Store role or permission unless the name is taken."""
        record = ItemRecord.from_entity(item)
        try:
            created = await self._client.hsetnx(self._key, record.name, record.to_json())
        except RedisError as e:
            raise self._wrap_error("hsetnx", e) from e

        if not created:
            raise DuplicateItemError(
                f"Item {item.name} is already in storage",
                details={"name": item.name},
            )

        logger.info(f"{item.type.value} {item.name} added")
        return True

    async def remove(self, item: Base) -> bool:
        """Delete the record and strip the name from every role in one transaction."""

        async def apply(pipe: Pipeline) -> None:
            raws = await pipe.hgetall(self._key)
            records = [ItemRecord.from_json(raw) for raw in raws.values()]
            if not any(record.name == item.name for record in records):
                raise ItemNotFoundError(f"Item '{item.name}' is not stored", details={"name": item.name})

            pipe.multi()
            pipe.hdel(self._key, item.name)
            for record in records:
                if record.is_role and item.name in record.grants:
                    record.grants.remove(item.name)
                    pipe.hset(self._key, record.name, record.to_json())

        await self._transaction("remove", apply)
        logger.info(f"{item.type.value} {item.name} removed")
        return True

    async def grant(self, role: Role, child: Base) -> bool:
        if role.name == child.name:
            raise SelfGrantError(
                f"Role {role.name} can not be granted to itself",
                details={"role": role.name},
            )

        async def apply(pipe: Pipeline) -> bool:
            record = await self._read_pair(pipe, role, child)
            if child.name in record.grants:
                return False

            record.grants.append(child.name)
            pipe.multi()
            pipe.hset(self._key, record.name, record.to_json())
            return True

        if await self._transaction("grant", apply):
            logger.info(f"{child.name} granted to {role.name}")
        return True

    async def revoke(self, role: Role, child: Base) -> bool:
        async def apply(pipe: Pipeline) -> None:
            record = await self._read_pair(pipe, role, child)
            if child.name not in record.grants:
                raise GrantNotFoundError(
                    f"Item {child.name} is not associated to {role.name}",
                    details={"role": role.name, "child": child.name},
                )

            record.grants.remove(child.name)
            pipe.multi()
            pipe.hset(self._key, record.name, record.to_json())

        await self._transaction("revoke", apply)
        logger.info(f"{child.name} revoked from {role.name}")
        return True

    async def get(self, name: str) -> Optional[Union[Role, Permission]]:
        record = await self._load(name)
        return self._to_entity(record) if record else None

    async def get_role(self, name: str) -> Optional[Role]:
        record = await self._load(name)
        if record and record.type is ItemType.ROLE:
            return self._to_entity(record)
        return None

    async def get_permission(self, action: str, resource: str) -> Optional[Permission]:
        record = await self._load(self._permission_name(action, resource))
        if record and record.type is ItemType.PERMISSION:
            return self._to_entity(record)
        return None

    async def get_roles(self) -> List[Role]:
        return [self._to_entity(r) for r in await self._load_all() if r.type is ItemType.ROLE]

    async def get_permissions(self) -> List[Permission]:
        return [self._to_entity(r) for r in await self._load_all() if r.type is ItemType.PERMISSION]

    async def get_grants(self, role_name: str) -> List[Union[Role, Permission]]:
        record = await self._load(role_name)
        if record is None or not record.is_role:
            return []

        children = await self._load_many(record.grants)
        return [self._to_entity(child) for child in children if child is not None]

    async def exists(self, name: str) -> bool:
        try:
            return bool(await self._client.hexists(self._key, name))
        except RedisError as e:
            raise self._wrap_error("hexists", e) from e

    async def exists_role(self, name: str) -> bool:
        record = await self._load(name)
        return record is not None and record.type is ItemType.ROLE

    async def exists_permission(self, action: str, resource: str) -> bool:
        record = await self._load(self._permission_name(action, resource))
        return record is not None and record.type is ItemType.PERMISSION
