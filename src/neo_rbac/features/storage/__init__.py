"""Storage feature.

Backends implementing RBACStorage and the factory that picks one from
settings.
"""

from .adapters import MemoryStorage, PostgresStorage, RBACBindingMixin, RedisStorage
from .factory import create_rbac, create_storage

__all__ = [
    # Adapters
    "RBACBindingMixin",
    "MemoryStorage",
    "RedisStorage",
    "PostgresStorage",

    # Factory
    "create_storage",
    "create_rbac",
]
