"""Permission domain entity for neo-rbac.

A permission is the atomic capability "perform action on resource". Its
identity is the encoded grant name, so two permissions with the same
action and resource are equal regardless of how they were obtained.
"""

from typing import TYPE_CHECKING

from ....config.constants import ItemType
from ....core.exceptions import InvalidArgumentError, InvalidNameError
from ..utils.naming import decode_name, encode_name, is_valid_name
from .base import Base

if TYPE_CHECKING:
    from ..services.rbac_service import RBAC


class Permission(Base):
    """Graph leaf granting one (action, resource) pair."""

    type = ItemType.PERMISSION

    __slots__ = ("_action", "_resource")

    def __init__(self, rbac: "RBAC", action: str, resource: str):
        if rbac is None or not action or not resource:
            raise InvalidArgumentError(
                "One of parameters is undefined",
                details={"action": action, "resource": resource},
            )

        delimiter = rbac.options.delimiter
        if not is_valid_name(action, delimiter) or not is_valid_name(resource, delimiter):
            raise InvalidNameError(
                f"Action '{action}' or resource '{resource}' has no valid name",
                details={"action": action, "resource": resource, "delimiter": delimiter},
            )

        super().__init__(rbac, encode_name(action, resource, delimiter))
        self._action = action
        self._resource = resource

    @classmethod
    def from_name(cls, rbac: "RBAC", name: str) -> "Permission":
        """Rebuild a permission from a persisted record that stores only its name."""
        if rbac is None:
            raise InvalidArgumentError("RBAC instance is undefined", details={"name": name})

        decoded = decode_name(name, rbac.options.delimiter)
        return cls(rbac, decoded.action, decoded.resource)

    @property
    def action(self) -> str:
        return self._action

    @property
    def resource(self) -> str:
        return self._resource

    def can(self, action: str, resource: str) -> bool:
        """Return True if it has same action and resource."""
        return self._action == action and self._resource == resource
