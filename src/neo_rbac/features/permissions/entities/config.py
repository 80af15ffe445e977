"""Engine options and snapshots for neo-rbac."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

from ....config.constants import DEFAULT_DELIMITER, SUPER_ROLE_NAME
from .permission import Permission
from .protocols import RBACStorage
from .role import Role

if TYPE_CHECKING:
    from ....config.policy import PolicyDefinition
    from ....config.settings import RBACSettings


@dataclass
class RBACOptions:
    """Configuration of one RBAC engine.

    ``permissions`` maps a resource to its ordered list of actions and
    ``grants`` maps a role name to the names it grants. Both are applied by
    ``RBAC.init()``.
    """

    delimiter: str = DEFAULT_DELIMITER
    roles: List[str] = field(default_factory=list)
    permissions: Dict[str, List[str]] = field(default_factory=dict)
    grants: Dict[str, List[str]] = field(default_factory=dict)
    storage: Optional[RBACStorage] = None
    super_role: str = SUPER_ROLE_NAME

    @classmethod
    def from_settings(
        cls,
        settings: "RBACSettings",
        policy: Optional["PolicyDefinition"] = None,
        storage: Optional[RBACStorage] = None,
    ) -> "RBACOptions":
        """Build options from settings, loading ``settings.policy_file`` when no policy is given.

        The policy is checked against ``settings.delimiter`` so a broken one
        raises PolicyIntegrityError here instead of failing halfway through
        ``init()``.
        """
        if policy is None and settings.policy_file:
            from ....config.policy import PolicyDefinition

            policy = PolicyDefinition.from_file(settings.policy_file)

        if policy is not None:
            policy.verify_integrity(settings.delimiter)

        options = cls(
            delimiter=settings.delimiter,
            storage=storage,
            super_role=settings.super_role,
        )
        if policy is not None:
            options.roles = list(policy.roles)
            options.permissions = {resource: list(actions) for resource, actions in policy.permissions.items()}
            options.grants = {role: list(children) for role, children in policy.grants.items()}
        return options


@dataclass
class RBACSnapshot:
    """Entities produced by a batch operation, keyed by name."""

    roles: Dict[str, Role] = field(default_factory=dict)
    permissions: Dict[str, Permission] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.roles) + len(self.permissions)
