"""Permission services package.

The RBAC engine and the hierarchy traversal it is built on.
"""

from .traversal import traverse_grants
from .rbac_service import RBAC

__all__ = [
    "RBAC",
    "traverse_grants",
]
