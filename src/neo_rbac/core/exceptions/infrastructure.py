"""Infrastructure-specific exceptions for neo-rbac.

This module defines exceptions raised by storage backends when the
underlying store misbehaves, as opposed to graph rule violations.
"""

from .base import NeoRBACError


# Storage Errors
class StorageError(NeoRBACError):
    """Base class for storage backend errors."""
    pass


class StorageConnectionError(StorageError):
    """Raised when the storage backend cannot be reached."""
    pass


class StorageSerializationError(StorageError):
    """Raised when a persisted record cannot be encoded or decoded."""
    pass
