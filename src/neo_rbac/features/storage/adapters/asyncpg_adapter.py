"""AsyncPG-based storage adapter for neo-rbac.

One row per role or permission; the outgoing edges of a role are kept in
order in a JSONB array so a role and its grants are read in one query.
"""

import json
import logging
import re
from typing import Any, List, Optional, Union

import asyncpg

from ....config.constants import ItemType, StorageDefaults
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

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]{0,62}$")


def _validate_identifier(value: str, kind: str) -> str:
    if not isinstance(value, str) or not IDENTIFIER_PATTERN.match(value):
        raise InvalidArgumentError(f"Invalid {kind} name: {value!r}", details={kind: value})
    return value


class PostgresStorage(RBACBindingMixin, RBACStorage):
    """Storage backed by an asyncpg connection pool."""

    def __init__(
        self,
        pool: asyncpg.Pool,
        schema: str = StorageDefaults.DATABASE_SCHEMA,
        table: str = StorageDefaults.DATABASE_TABLE,
    ):
        if pool is None:
            raise InvalidArgumentError("Connection pool is required")

        self._pool = pool
        self._schema = _validate_identifier(schema, "schema")
        self._table = _validate_identifier(table, "table")

    @property
    def table_name(self) -> str:
        return f"{self._schema}.{self._table}"

    def _wrap_error(self, operation: str, error: Exception) -> StorageError:
        logger.error(f"Failed to {operation} in {self.table_name}: {error}")
        if isinstance(error, OSError):
            return StorageConnectionError(f"Database connection failed during {operation}: {error}")
        return StorageError(f"Failed to {operation}: {error}")

    def _build_record_from_row(self, row: asyncpg.Record) -> ItemRecord:
        grants: Any = row["grants"]
        if isinstance(grants, str):
            grants = json.loads(grants)
        return ItemRecord(type=row["type"], name=row["name"], grants=grants)

    async def _fetch(self, query: str, *args) -> List[asyncpg.Record]:
        try:
            async with self._pool.acquire() as conn:
                return await conn.fetch(query, *args)
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            raise self._wrap_error("fetch records", e) from e

    async def _fetchrow(self, query: str, *args) -> Optional[asyncpg.Record]:
        try:
            async with self._pool.acquire() as conn:
                return await conn.fetchrow(query, *args)
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            raise self._wrap_error("fetch record", e) from e

    async def _load(self, name: str) -> Optional[ItemRecord]:
        row = await self._fetchrow(
            f"SELECT name, type, grants FROM {self.table_name} WHERE name = $1",
            name,
        )
        return self._build_record_from_row(row) if row else None

    async def ensure_schema(self) -> None:
        """Create the records table if it does not exist."""
        query = f"""
            CREATE TABLE IF NOT EXISTS {self.table_name} (
                name TEXT PRIMARY KEY,
                type TEXT NOT NULL CHECK (type IN ('Role', 'Permission')),
                grants JSONB NOT NULL DEFAULT '[]'::jsonb,
                created_at TIMESTAMPTZ NOT NULL DEFAULT now()
            )
        """
        try:
            async with self._pool.acquire() as conn:
                await conn.execute(query)
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            raise self._wrap_error("create table", e) from e

        logger.info(f"Ensured RBAC table {self.table_name}")

    async def add(self, item: Base) -> bool:
        row = await self._fetchrow(
            f"""
                INSERT INTO {self.table_name} (name, type)
                VALUES ($1, $2)
                ON CONFLICT (name) DO NOTHING
                RETURNING name
            """,
            item.name,
            item.type.value,
        )
        if row is None:
            raise DuplicateItemError(
                f"Item {item.name} is already in storage",
                details={"name": item.name},
            )

        logger.info(f"{item.type.value} {item.name} added")
        return True

    async def remove(self, item: Base) -> bool:
        """Delete the row and strip the name from every role in one transaction."""
        try:
            async with self._pool.acquire() as conn:
                async with conn.transaction():
                    deleted = await conn.fetchrow(
                        f"DELETE FROM {self.table_name} WHERE name = $1 RETURNING name",
                        item.name,
                    )
                    if deleted is not None:
                        await conn.execute(
                            f"UPDATE {self.table_name} SET grants = grants - $1::text WHERE grants ? $1::text",
                            item.name,
                        )
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            raise self._wrap_error("remove item", e) from e

        if deleted is None:
            raise ItemNotFoundError(f"Item '{item.name}' is not stored", details={"name": item.name})

        logger.info(f"{item.type.value} {item.name} removed")
        return True

    async def _require_pair(self, role: Role, child: Base) -> None:
        rows = await self._fetch(
            f"SELECT name, type FROM {self.table_name} WHERE name = ANY($1::text[])",
            [role.name, child.name],
        )
        stored = {row["name"]: row["type"] for row in rows}
        if stored.get(role.name) != ItemType.ROLE.value:
            raise ItemNotFoundError(f"Role '{role.name}' is not stored", details={"name": role.name})
        if child.name not in stored:
            raise ItemNotFoundError(f"Item '{child.name}' is not stored", details={"name": child.name})

    async def grant(self, role: Role, child: Base) -> bool:
        if role.name == child.name:
            raise SelfGrantError(
                f"Role {role.name} can not be granted to itself",
                details={"role": role.name},
            )

        await self._require_pair(role, child)
        row = await self._fetchrow(
            f"""
                UPDATE {self.table_name}
                SET grants = grants || to_jsonb($2::text)
                WHERE name = $1 AND NOT grants ? $2::text
                RETURNING name
            """,
            role.name,
            child.name,
        )
        if row is not None:
            logger.info(f"{child.name} granted to {role.name}")
        return True

    async def revoke(self, role: Role, child: Base) -> bool:
        await self._require_pair(role, child)
        row = await self._fetchrow(
            f"""
                UPDATE {self.table_name}
                SET grants = grants - $2::text
                WHERE name = $1 AND grants ? $2::text
                RETURNING name
            """,
            role.name,
            child.name,
        )
        if row is None:
            raise GrantNotFoundError(
                f"Item {child.name} is not associated to {role.name}",
                details={"role": role.name, "child": child.name},
            )

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

    async def _get_by_type(self, item_type: ItemType) -> List[Union[Role, Permission]]:
        rows = await self._fetch(
            f"SELECT name, type, grants FROM {self.table_name} WHERE type = $1 ORDER BY created_at, name",
            item_type.value,
        )
        return [self._to_entity(self._build_record_from_row(row)) for row in rows]

    async def get_roles(self) -> List[Role]:
        return await self._get_by_type(ItemType.ROLE)

    async def get_permissions(self) -> List[Permission]:
        return await self._get_by_type(ItemType.PERMISSION)

    async def get_grants(self, role_name: str) -> List[Union[Role, Permission]]:
        """Children of a role in edge order; dangling names are skipped."""
        rows = await self._fetch(
            f"""
                SELECT child.name, child.type, child.grants
                FROM {self.table_name} AS parent
                CROSS JOIN LATERAL jsonb_array_elements_text(parent.grants)
                    WITH ORDINALITY AS edge(name, position)
                JOIN {self.table_name} AS child ON child.name = edge.name
                WHERE parent.name = $1 AND parent.type = 'Role'
                ORDER BY edge.position
            """,
            role_name,
        )
        return [self._to_entity(self._build_record_from_row(row)) for row in rows]

    async def exists(self, name: str) -> bool:
        return await self._load(name) is not None

    async def exists_role(self, name: str) -> bool:
        record = await self._load(name)
        return record is not None and record.type is ItemType.ROLE

    async def exists_permission(self, action: str, resource: str) -> bool:
        record = await self._load(self._permission_name(action, resource))
        return record is not None and record.type is ItemType.PERMISSION
