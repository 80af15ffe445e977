"""
Settings for neo-rbac.

Environment-driven configuration using Pydantic settings. Every field can be
overridden with a NEO_RBAC_ prefixed environment variable or a .env file.
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_DELIMITER, SUPER_ROLE_NAME, StorageBackend, StorageDefaults


class RBACSettings(BaseSettings):
    """Engine and storage settings."""

    model_config = SettingsConfigDict(
        env_prefix="NEO_RBAC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Naming
    delimiter: str = Field(default=DEFAULT_DELIMITER, description="Separator between action and resource")
    super_role: str = Field(default=SUPER_ROLE_NAME, description="Role name protected outside privileged mode")

    # Storage selection
    storage_backend: StorageBackend = Field(default=StorageBackend.MEMORY, description="Storage backend")

    # Redis configuration
    redis_url: str = Field(default="redis://localhost:6379/0", description="Redis connection URL")
    redis_key_prefix: str = Field(default=StorageDefaults.REDIS_KEY_PREFIX, description="Redis key prefix")

    # PostgreSQL configuration
    database_url: Optional[str] = Field(default=None, description="PostgreSQL DSN")
    database_schema: str = Field(default=StorageDefaults.DATABASE_SCHEMA, description="Schema holding the records table")
    database_table: str = Field(default=StorageDefaults.DATABASE_TABLE, description="Records table name")
    database_pool_min_size: int = Field(default=1, ge=1, description="Minimum pool connections")
    database_pool_max_size: int = Field(default=10, ge=1, description="Maximum pool connections")

    # Policy
    policy_file: Optional[str] = Field(default=None, description="JSON or YAML policy applied by init()")

    @field_validator("delimiter")
    @classmethod
    def validate_delimiter(cls, v: str) -> str:
        """Delimiter must be non-empty and free of whitespace."""
        if not v or any(ch.isspace() for ch in v):
            raise ValueError("delimiter must be a non-empty string without whitespace")
        return v

    @field_validator("super_role", "redis_key_prefix")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("value must not be blank")
        return v

    def is_persistent(self) -> bool:
        """Check if the configured backend outlives the process."""
        return self.storage_backend != StorageBackend.MEMORY


@lru_cache()
def get_settings() -> RBACSettings:
    """Get cached settings instance."""
    return RBACSettings()
