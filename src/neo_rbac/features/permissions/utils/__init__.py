"""Permission utilities package."""

from .naming import (
    DecodedName,
    encode_name,
    decode_name,
    is_valid_name,
    get_permission_names,
)
from .grant_builder import wind_grant, expand_rule
from .projection import (
    PermissionMatrix,
    build_permission_matrix,
    plane_names,
    plane_snapshot,
)

__all__ = [
    # Naming
    "DecodedName",
    "encode_name",
    "decode_name",
    "is_valid_name",
    "get_permission_names",

    # Grant rules
    "wind_grant",
    "expand_rule",

    # Projections
    "PermissionMatrix",
    "build_permission_matrix",
    "plane_names",
    "plane_snapshot",
]
