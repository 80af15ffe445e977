"""HTTP status code mapping for exceptions.

Applications embedding the engine behind an API can translate neo-rbac
errors into responses without knowing the individual exception classes.
"""

from typing import Any, Dict, Type

from .base import NeoRBACError

from .domain import (
    InvalidArgumentError,
    ForbiddenError,
    ConflictError,
    NotFoundError,
)
from .infrastructure import StorageError, StorageConnectionError


HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 400 Bad Request
    InvalidArgumentError: 400,

    # 403 Forbidden
    ForbiddenError: 403,

    # 404 Not Found
    NotFoundError: 404,

    # 409 Conflict
    ConflictError: 409,

    # 500 Internal Server Error
    StorageError: 500,

    # 503 Service Unavailable
    StorageConnectionError: 503,
}


def get_http_status_code(exception: Exception) -> int:
    """Return the status code of the most specific mapped class in the exception's MRO."""
    for klass in type(exception).__mro__:
        if klass in HTTP_STATUS_MAP:
            return HTTP_STATUS_MAP[klass]
    return 500


def create_error_response(exception: NeoRBACError) -> Dict[str, Any]:
    """Build the error body an API layer returns for a neo-rbac error.

    Args:
        exception: Raised neo-rbac error

    Returns:
        Mapping with code, message, details and type under ``error``
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": type(exception).__name__,
        }
    }
