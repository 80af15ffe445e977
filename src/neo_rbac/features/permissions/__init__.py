"""Permissions feature.

Roles, permissions, the grant hierarchy and the engine that queries it.
"""

from .entities import (
    Base,
    Permission,
    Role,
    ItemRecord,
    RBACStorage,
    RBACOptions,
    RBACSnapshot,
)
from .services import RBAC, traverse_grants

__all__ = [
    # Entities
    "Base",
    "Permission",
    "Role",
    "ItemRecord",
    "RBACStorage",
    "RBACOptions",
    "RBACSnapshot",

    # Services
    "RBAC",
    "traverse_grants",
]
