"""Root of the neo-rbac exception hierarchy.

Every error carries an ``error_code`` (the class name unless given) and a
``details`` mapping, usually holding the offending role or permission names.
"""

from typing import Any, Dict, Optional


class NeoRBACError(Exception):
    """Base exception for the engine, the entity model and storage backends."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or type(self).__name__
        self.details = details or {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, error_code={self.error_code!r})"
