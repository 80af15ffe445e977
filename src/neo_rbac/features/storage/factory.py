"""Storage and engine factory for neo-rbac."""

import logging
from typing import Optional

import asyncpg
from redis.asyncio import Redis

from ...config.constants import StorageBackend
from ...config.settings import RBACSettings, get_settings
from ...core.exceptions import InvalidArgumentError, StorageConnectionError
from ..permissions.entities import RBACOptions, RBACStorage
from ..permissions.services.rbac_service import RBAC
from .adapters import MemoryStorage, PostgresStorage, RedisStorage

logger = logging.getLogger(__name__)


async def create_storage(settings: RBACSettings) -> RBACStorage:
    """Create the storage backend selected in settings.

    Args:
        settings: Engine settings naming the backend and its connection

    Returns:
        Unbound storage instance

    Raises:
        InvalidArgumentError: If the backend needs a URL that is not configured
        StorageConnectionError: If the PostgreSQL pool cannot be opened
    """
    backend = settings.storage_backend

    if backend == StorageBackend.MEMORY:
        logger.debug("Creating memory storage")
        return MemoryStorage()

    if backend == StorageBackend.REDIS:
        logger.debug(f"Creating Redis storage with prefix '{settings.redis_key_prefix}'")
        client = Redis.from_url(settings.redis_url, decode_responses=True)
        return RedisStorage(client, key_prefix=settings.redis_key_prefix)

    if backend == StorageBackend.POSTGRES:
        if not settings.database_url:
            raise InvalidArgumentError("database_url is required for the postgres storage backend")

        logger.debug(f"Creating PostgreSQL storage in {settings.database_schema}.{settings.database_table}")
        try:
            pool = await asyncpg.create_pool(
                dsn=settings.database_url,
                min_size=settings.database_pool_min_size,
                max_size=settings.database_pool_max_size,
            )
        except (asyncpg.PostgresError, OSError) as e:
            logger.error(f"Failed to create database pool: {e}")
            raise StorageConnectionError(f"Failed to create database pool: {e}") from e

        storage = PostgresStorage(pool, schema=settings.database_schema, table=settings.database_table)
        await storage.ensure_schema()
        return storage

    raise InvalidArgumentError(f"Unsupported storage backend: {backend}", details={"backend": str(backend)})


async def create_rbac(
    settings: Optional[RBACSettings] = None,
    policy=None,
    initialize: bool = True,
) -> RBAC:
    """Build an engine from settings and an optional policy.

    Args:
        settings: Engine settings, defaults to the cached environment settings
        policy: PolicyDefinition applied by init(); falls back to settings.policy_file
        initialize: Apply the policy when the storage holds no roles yet

    Returns:
        Ready RBAC engine
    """
    settings = settings or get_settings()
    storage = await create_storage(settings)
    rbac = RBAC(RBACOptions.from_settings(settings, policy=policy, storage=storage))

    if initialize:
        if await rbac.get_roles():
            logger.info("Storage already holds roles, skipping policy initialization")
        else:
            await rbac.init()

    return rbac
