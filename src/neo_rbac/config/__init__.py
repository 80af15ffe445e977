"""Configuration module for neo-rbac.

Settings, constants and logging. Policy definitions live in
``neo_rbac.config.policy``.
"""

from .constants import (
    DEFAULT_DELIMITER,
    SUPER_ROLE_NAME,
    GRANT_ACTION_LETTERS,
    ItemType,
    StorageBackend,
    StorageKeys,
    StorageDefaults,
)

from .settings import RBACSettings, get_settings

from .logging_config import (
    setup_logging,
    LoggingSettings,
    LogLevel,
    LogVerbosity,
    LogFormat,
    LoggingConfig,
)

__all__ = [
    # Constants
    "DEFAULT_DELIMITER",
    "SUPER_ROLE_NAME",
    "GRANT_ACTION_LETTERS",
    "ItemType",
    "StorageBackend",
    "StorageKeys",
    "StorageDefaults",

    # Settings
    "RBACSettings",
    "get_settings",

    # Logging
    "setup_logging",
    "LoggingSettings",
    "LogLevel",
    "LogVerbosity",
    "LogFormat",
    "LoggingConfig",
]
