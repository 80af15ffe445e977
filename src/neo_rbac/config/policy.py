"""Policy definitions for neo-rbac.

A policy declares the roles, the permissions (resource -> actions) and the
grants an engine applies on ``init()``. Policies can be loaded from JSON or
YAML files and checked for references to undeclared roles or permissions
before they touch storage.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from ..core.exceptions import InvalidArgumentError, PolicyIntegrityError
from ..features.permissions.utils.grant_builder import wind_grant
from .constants import DEFAULT_DELIMITER, SUPER_ROLE_NAME


class PolicyErrorType(str, Enum):
    """Kinds of integrity problems found in a policy."""

    ROLE_DNE = "ROLE_DNE"
    RESOURCE_DNE = "RESOURCE_DNE"
    ACTION_DNE = "ACTION_DNE"


class PolicyDefinition(BaseModel):
    """Roles, permissions and grants applied together."""

    roles: List[str] = Field(default_factory=list, description="Role names")
    permissions: Dict[str, List[str]] = Field(default_factory=dict, description="Resource to ordered actions")
    grants: Dict[str, List[str]] = Field(default_factory=dict, description="Role to granted role or permission names")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PolicyDefinition":
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise InvalidArgumentError(
                f"Invalid policy definition: {e.error_count()} error(s)",
                details={"errors": e.errors(include_url=False)},
            ) from e

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> "PolicyDefinition":
        """Load a policy from a JSON or YAML file.

        Args:
            file_path: Path to a .json, .yaml or .yml file

        Returns:
            Policy instance
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"Policy file not found: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            if file_path.suffix.lower() in [".yaml", ".yml"]:
                data = yaml.safe_load(f)
            elif file_path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                raise InvalidArgumentError(
                    f"Unsupported policy file format: {file_path.suffix}",
                    details={"path": str(file_path)},
                )

        return cls.from_dict(data or {})

    def verify_integrity(self, delimiter: str = DEFAULT_DELIMITER) -> None:
        """Raise PolicyIntegrityError listing every grant that references nothing declared."""
        if not delimiter:
            raise InvalidArgumentError("Delimiter is not defined")

        roles = set(self.roles)
        errors: List[Dict[str, Any]] = []

        def report(kind: PolicyErrorType, role: str, grant: str, message: str) -> None:
            errors.append({"type": kind.value, "role": role, "grant": grant, "message": message})

        for role, children in self.grants.items():
            if role not in roles:
                report(PolicyErrorType.ROLE_DNE, role, role, f"Role '{role}' is not declared")

            for child in children:
                if child in roles:
                    continue

                action, found, resource = child.partition(delimiter)
                if not found:
                    report(PolicyErrorType.ROLE_DNE, role, child, f"Role '{child}' granted to '{role}' is not declared")
                elif resource not in self.permissions:
                    report(
                        PolicyErrorType.RESOURCE_DNE, role, child,
                        f"Resource '{resource}' of '{child}' granted to '{role}' is not declared",
                    )
                elif action not in self.permissions[resource]:
                    report(
                        PolicyErrorType.ACTION_DNE, role, child,
                        f"Action '{action}' of '{child}' granted to '{role}' is not declared",
                    )

        if errors:
            raise PolicyIntegrityError("Incorrect rules", errors=errors)


def default_policy(delimiter: str = DEFAULT_DELIMITER) -> PolicyDefinition:
    """Starter policy for superadmin, admin, manager and user.

    Grant names are encoded with ``delimiter``, which must match the
    engine the policy is applied to.
    """
    return PolicyDefinition(
        roles=[SUPER_ROLE_NAME, "admin", "manager", "user"],
        permissions={
            "client": ["read", "create", "update", "block"],
            "admin": ["read", "create"],
            "role": ["read", "create", "update", "delete"],
            "permission": ["read", "create", "update", "delete"],
        },
        grants={
            "user": wind_grant({"client": "R", "admin": "R"}, delimiter),
            "manager": wind_grant({"client": "CU"}, delimiter) + ["user"],
            "admin": wind_grant({"client": "B", "admin": "C"}, delimiter) + ["manager"],
            SUPER_ROLE_NAME: wind_grant({"role": "CRUD", "permission": "CRUD"}, delimiter) + ["admin"],
        },
    )


DEFAULT_POLICY = default_policy()
