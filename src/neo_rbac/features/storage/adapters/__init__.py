"""Storage adapters - in-memory, Redis and PostgreSQL implementations."""

from .binding import RBACBindingMixin
from .memory_adapter import MemoryStorage
from .redis_adapter import RedisStorage
from .asyncpg_adapter import PostgresStorage

__all__ = [
    "RBACBindingMixin",
    "MemoryStorage",
    "RedisStorage",
    "PostgresStorage",
]
