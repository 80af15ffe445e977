"""Constants and enums for neo-rbac.

This module defines the constants, enums, and configuration values
used throughout the neo-rbac library.
"""

from enum import Enum
from typing import Dict, Final


# Naming
DEFAULT_DELIMITER: Final[str] = "_"
SUPER_ROLE_NAME: Final[str] = "superadmin"


class ItemType(str, Enum):
    """Tag carried by every node of the authorization graph."""

    ROLE = "Role"
    PERMISSION = "Permission"


class StorageBackend(str, Enum):
    """Supported storage backends."""

    MEMORY = "memory"
    REDIS = "redis"
    POSTGRES = "postgres"


class StorageKeys:
    """Key patterns for the Redis backend."""

    ITEMS: Final[str] = "{prefix}:items"


class StorageDefaults:
    """Default locations used by the persistent backends."""

    REDIS_KEY_PREFIX: Final[str] = "rbac"
    DATABASE_SCHEMA: Final[str] = "public"
    DATABASE_TABLE: Final[str] = "rbac_items"


# Letter shorthands accepted by wind_grant
GRANT_ACTION_LETTERS: Final[Dict[str, str]] = {
    "C": "create",
    "R": "read",
    "U": "update",
    "D": "delete",
    "B": "block",
    "N": "cancel",
}
