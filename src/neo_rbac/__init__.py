"""Neo-RBAC - hierarchical role based access control for asyncio services.

Roles grant permissions and other roles; the engine answers permission
queries by walking that hierarchy in a pluggable storage backend.
"""

# Initialize logging configuration on import
from .config.logging_config import setup_logging
setup_logging()

from .__version__ import __version__

from .config import (
    DEFAULT_DELIMITER,
    SUPER_ROLE_NAME,
    ItemType,
    StorageBackend,
    RBACSettings,
    get_settings,
)

from .core.exceptions import (
    # Base Exception
    NeoRBACError,

    # Domain Exceptions
    InvalidArgumentError,
    InvalidNameError,
    PolicyIntegrityError,
    ForbiddenError,
    ConflictError,
    DuplicateItemError,
    SelfGrantError,
    StorageBindingError,
    NotFoundError,
    ItemNotFoundError,
    GrantNotFoundError,

    # Infrastructure Exceptions
    StorageError,
    StorageConnectionError,
    StorageSerializationError,

    # Utility Functions
    get_http_status_code,
    create_error_response,
)

from .features.permissions import (
    Base,
    Permission,
    Role,
    ItemRecord,
    RBACStorage,
    RBACOptions,
    RBACSnapshot,
    RBAC,
    traverse_grants,
)

from .features.permissions.utils import (
    encode_name,
    decode_name,
    is_valid_name,
    get_permission_names,
    wind_grant,
    plane_snapshot,
    build_permission_matrix,
    PermissionMatrix,
)

from .features.storage import (
    MemoryStorage,
    RedisStorage,
    PostgresStorage,
    create_storage,
    create_rbac,
)

from .config.policy import PolicyDefinition, DEFAULT_POLICY, default_policy

__all__ = [
    "__version__",

    # Configuration
    "DEFAULT_DELIMITER",
    "SUPER_ROLE_NAME",
    "ItemType",
    "StorageBackend",
    "RBACSettings",
    "get_settings",
    "PolicyDefinition",
    "DEFAULT_POLICY",
    "default_policy",

    # Exceptions
    "NeoRBACError",
    "InvalidArgumentError",
    "InvalidNameError",
    "PolicyIntegrityError",
    "ForbiddenError",
    "ConflictError",
    "DuplicateItemError",
    "SelfGrantError",
    "StorageBindingError",
    "NotFoundError",
    "ItemNotFoundError",
    "GrantNotFoundError",
    "StorageError",
    "StorageConnectionError",
    "StorageSerializationError",
    "get_http_status_code",
    "create_error_response",

    # Entities and engine
    "Base",
    "Permission",
    "Role",
    "ItemRecord",
    "RBACStorage",
    "RBACOptions",
    "RBACSnapshot",
    "RBAC",
    "traverse_grants",

    # Helpers
    "encode_name",
    "decode_name",
    "is_valid_name",
    "get_permission_names",
    "wind_grant",
    "plane_snapshot",
    "build_permission_matrix",
    "PermissionMatrix",

    # Storage
    "MemoryStorage",
    "RedisStorage",
    "PostgresStorage",
    "create_storage",
    "create_rbac",
]
