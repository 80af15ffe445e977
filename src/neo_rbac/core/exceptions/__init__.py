"""Exceptions module for neo-rbac.

This module provides the complete exception hierarchy for neo-rbac,
organized by domain concerns and infrastructure concerns.
"""

from .base import NeoRBACError
from .http_mapping import HTTP_STATUS_MAP, create_error_response, get_http_status_code

from .domain import (
    # Invalid Argument Errors
    InvalidArgumentError,
    InvalidNameError,
    PolicyIntegrityError,

    # Forbidden Errors
    ForbiddenError,

    # Conflict Errors
    ConflictError,
    DuplicateItemError,
    SelfGrantError,
    StorageBindingError,

    # Not Found Errors
    NotFoundError,
    ItemNotFoundError,
    GrantNotFoundError,
)

from .infrastructure import (
    StorageError,
    StorageConnectionError,
    StorageSerializationError,
)

__all__ = [
    # Base Exception
    "NeoRBACError",

    # Domain Exceptions
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

    # Infrastructure Exceptions
    "StorageError",
    "StorageConnectionError",
    "StorageSerializationError",

    # Utility Functions
    "get_http_status_code",
    "create_error_response",
    "HTTP_STATUS_MAP",
]
