"""Logging configuration for neo-rbac.

The ``neo_rbac`` logger tree is configured through ``logging.config.dictConfig``
from NEO_RBAC_LOG_* environment variables. Storage adapters log every
mutation at info level, so they are held at WARNING unless
NEO_RBAC_ENABLE_STORAGE_LOGGING is set.
"""

import logging
import logging.config
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogVerbosity(str, Enum):
    QUIET = "QUIET"
    NORMAL = "NORMAL"
    VERBOSE = "VERBOSE"
    DEBUG = "DEBUG"


class LogFormat(str, Enum):
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


VERBOSITY_LEVELS: Dict[LogVerbosity, LogLevel] = {
    LogVerbosity.QUIET: LogLevel.ERROR,
    LogVerbosity.NORMAL: LogLevel.WARNING,
    LogVerbosity.VERBOSE: LogLevel.INFO,
    LogVerbosity.DEBUG: LogLevel.DEBUG,
}

FORMAT_STRINGS: Dict[LogFormat, str] = {
    LogFormat.SIMPLE: "%(asctime)s - %(levelname)s - [neo_rbac] %(message)s",
    LogFormat.DETAILED: "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
    LogFormat.JSON: '{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
}

STORAGE_LOGGERS = (
    "neo_rbac.features.storage.adapters.memory_adapter",
    "neo_rbac.features.storage.adapters.redis_adapter",
    "neo_rbac.features.storage.adapters.asyncpg_adapter",
)

# Driver loggers only surface errors
DRIVER_LOGGERS = ("redis", "asyncpg", "asyncio")


def get_log_level_from_verbosity(verbosity: str) -> str:
    """Map a verbosity mode to a level name, WARNING for unknown modes."""
    try:
        return VERBOSITY_LEVELS[LogVerbosity(verbosity.upper())].value
    except ValueError:
        return LogLevel.WARNING.value


class LoggingSettings(BaseSettings):
    """Logging switches read from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="NEO_RBAC_",
        case_sensitive=False,
        extra="ignore",
    )

    configure_logging: bool = Field(default=True, description="Apply dictConfig on package import")
    log_level: Optional[str] = Field(default=None, description="Explicit level, wins over verbosity")
    log_verbosity: str = Field(default=LogVerbosity.NORMAL.value, description="QUIET, NORMAL, VERBOSE or DEBUG")
    log_format: LogFormat = Field(default=LogFormat.SIMPLE, description="simple, detailed or json")
    enable_storage_logging: bool = Field(default=False, description="Let adapters log mutations")

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_format(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v

    @property
    def effective_level(self) -> str:
        if self.log_level and self.log_level.upper() in LogLevel.__members__:
            return self.log_level.upper()
        return get_log_level_from_verbosity(self.log_verbosity)


class LoggingConfig:
    """Builds and applies the dictConfig for the neo_rbac logger tree."""

    @classmethod
    def build(cls, settings: LoggingSettings) -> Dict[str, Any]:
        """Return the dictConfig mapping for the given settings.

        Args:
            settings: Logging switches

        Returns:
            Configuration accepted by logging.config.dictConfig
        """
        level = settings.effective_level
        loggers: Dict[str, Dict[str, Any]] = {
            "neo_rbac": {"level": level, "handlers": ["console"], "propagate": True},
        }

        if not settings.enable_storage_logging:
            storage_level = LogLevel.DEBUG.value if level == LogLevel.DEBUG.value else LogLevel.WARNING.value
            for name in STORAGE_LOGGERS:
                loggers[name] = {"level": storage_level}

        for name in DRIVER_LOGGERS:
            loggers[name] = {"level": LogLevel.ERROR.value}

        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": FORMAT_STRINGS[settings.log_format],
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": level,
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": loggers,
        }

    @classmethod
    def configure(cls, settings: Optional[LoggingSettings] = None) -> None:
        settings = settings or LoggingSettings()
        logging.config.dictConfig(cls.build(settings))
        logging.getLogger(__name__).debug(
            f"Logging configured: level={settings.effective_level}, format={settings.log_format.value}"
        )

    @classmethod
    def set_module_level(cls, module_name: str, level: str) -> None:
        logging.getLogger(module_name).setLevel(getattr(logging, level.upper()))

    @classmethod
    def silence_module(cls, module_name: str) -> None:
        cls.set_module_level(module_name, LogLevel.CRITICAL.value)


def setup_logging() -> None:
    """Configure logging on package import.

    Applications that own their logging set NEO_RBAC_CONFIGURE_LOGGING=false.
    """
    settings = LoggingSettings()
    if settings.configure_logging:
        LoggingConfig.configure(settings)
