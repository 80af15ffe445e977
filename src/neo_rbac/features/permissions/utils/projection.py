"""Flat views of engine state for APIs and admin screens."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

from ....config.constants import DEFAULT_DELIMITER
from .naming import decode_name, encode_name

if TYPE_CHECKING:
    from ..entities.base import Base
    from ..entities.config import RBACSnapshot

RESOURCE_NAME_KEY = "resource-name"


def plane_names(items: Iterable["Base"]) -> List[str]:
    """Sorted names of the given entities."""
    return sorted(item.name for item in items)


def plane_snapshot(snapshot: "RBACSnapshot") -> Dict[str, List[str]]:
    """Replace entities of a snapshot with their names."""
    return {
        "roles": list(snapshot.roles),
        "permissions": list(snapshot.permissions),
    }


@dataclass
class PermissionMatrix:
    """Resource x action grid of permission names.

    Each row maps ``"resource-name"`` to the resource and every known action
    to the permission name, or ``None`` when that pair was never created.
    """
    actions: List[str] = field(default_factory=list)
    resources: List[str] = field(default_factory=list)
    matrix: List[Dict[str, Optional[str]]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, list]:
        return {"actions": self.actions, "resources": self.resources, "matrix": self.matrix}


def build_permission_matrix(
    permissions: Iterable["Base"],
    delimiter: str = DEFAULT_DELIMITER,
) -> PermissionMatrix:
    """Project permissions onto a resource x action matrix in first-seen order."""
    actions: List[str] = []
    resources: List[str] = []
    names = set()

    for permission in permissions:
        decoded = decode_name(permission.name, delimiter)
        if decoded.action not in actions:
            actions.append(decoded.action)
        if decoded.resource not in resources:
            resources.append(decoded.resource)
        names.add(permission.name)

    rows: List[Dict[str, Optional[str]]] = []
    for resource in resources:
        row: Dict[str, Optional[str]] = {RESOURCE_NAME_KEY: resource}
        for action in actions:
            name = encode_name(action, resource, delimiter)
            row[action] = name if name in names else None
        rows.append(row)

    return PermissionMatrix(actions=actions, resources=resources, matrix=rows)
