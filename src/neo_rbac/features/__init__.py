"""Features module for neo-rbac.

Permissions hold the domain model and engine; storage holds the backends
the engine persists to.
"""

from .permissions import RBAC, Permission, Role
from .storage import MemoryStorage, create_rbac

__all__ = [
    "RBAC",
    "Permission",
    "Role",
    "MemoryStorage",
    "create_rbac",
]
