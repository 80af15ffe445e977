"""Engine binding shared by storage adapters."""

from typing import TYPE_CHECKING, Optional, Union

from ....core.exceptions import StorageBindingError
from ...permissions.entities import ItemRecord, Permission, Role
from ...permissions.utils.naming import encode_name

if TYPE_CHECKING:
    from ...permissions.services.rbac_service import RBAC


class RBACBindingMixin:
    """Holds the engine a storage belongs to and turns records into entities."""

    _rbac: Optional["RBAC"] = None

    def use_rbac(self, rbac: "RBAC") -> None:
        """Bind storage to an engine. A storage can be bound only once."""
        if self._rbac is not None:
            raise StorageBindingError(
                "Storage is already in use in another instance of RBAC",
                details={"storage": type(self).__name__},
            )
        self._rbac = rbac

    @property
    def rbac(self) -> Optional["RBAC"]:
        return self._rbac

    def _require_rbac(self) -> "RBAC":
        if self._rbac is None:
            raise StorageBindingError(
                "Storage is not bound to an RBAC instance",
                details={"storage": type(self).__name__},
            )
        return self._rbac

    def _permission_name(self, action: str, resource: str) -> str:
        return encode_name(action, resource, self._require_rbac().options.delimiter)

    def _to_entity(self, record: ItemRecord) -> Union[Role, Permission]:
        return record.to_entity(self._require_rbac())
