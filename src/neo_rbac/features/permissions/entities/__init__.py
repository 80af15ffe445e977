"""Permission entities package.

Domain entities, storage records and the storage protocol.
"""

from .base import Base
from .permission import Permission
from .role import Role
from .records import ItemRecord
from .protocols import RBACStorage
from .config import RBACOptions, RBACSnapshot

__all__ = [
    # Domain entities
    "Base",
    "Permission",
    "Role",
    "ItemRecord",

    # Protocols
    "RBACStorage",

    # Configuration
    "RBACOptions",
    "RBACSnapshot",
]
