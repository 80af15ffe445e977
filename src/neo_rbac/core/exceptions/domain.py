"""Domain-specific exceptions for neo-rbac.

These exceptions describe violations of the authorization graph rules:
malformed input, forbidden super role mutation, conflicting writes and
references to entities that do not exist.
"""

from typing import Any, Dict, List, Optional

from .base import NeoRBACError


# Invalid Argument Errors
class InvalidArgumentError(NeoRBACError):
    """Raised when a required value is missing, empty or has the wrong shape."""
    pass


class InvalidNameError(InvalidArgumentError):
    """Raised when a role, action or resource name contains the delimiter or whitespace."""
    pass


class PolicyIntegrityError(InvalidArgumentError):
    """Raised when a policy definition grants undeclared roles or permissions."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None, **kwargs):
        self.errors = errors or []
        details = kwargs.pop("details", None) or {"errors": self.errors}
        super().__init__(message, details=details, **kwargs)

    def __str__(self) -> str:
        lines = [self.message]
        lines.extend(f"  - {error['message']}" for error in self.errors)
        return "\n".join(lines)


# Forbidden Errors
class ForbiddenError(NeoRBACError):
    """Raised when the protected super role is mutated outside privileged mode."""
    pass


# Conflict Errors
class ConflictError(NeoRBACError):
    """Raised when an operation conflicts with existing data."""
    pass


class DuplicateItemError(ConflictError):
    """Raised when adding a role or permission whose name is already stored."""
    pass


class SelfGrantError(ConflictError):
    """Raised when a role is granted to itself."""
    pass


class StorageBindingError(ConflictError):
    """Raised when a storage instance is attached to a second engine."""
    pass


# Not Found Errors
class NotFoundError(NeoRBACError):
    """Base class for operations referencing entities that are not stored."""
    pass


class ItemNotFoundError(NotFoundError):
    """Raised when a role or permission name is not present in storage."""
    pass


class GrantNotFoundError(NotFoundError):
    """Raised when revoking an edge that does not exist."""
    pass
