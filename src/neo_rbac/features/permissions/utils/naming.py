"""Grant name codec.

A permission is stored under a single name built from its action and
resource joined by the engine delimiter, e.g. ``create_page`` for
``("create", "page")`` with the default ``_`` delimiter.
"""

import re
from typing import Iterable, List, NamedTuple, Tuple

from ....config.constants import DEFAULT_DELIMITER
from ....core.exceptions import InvalidArgumentError


class DecodedName(NamedTuple):
    """Action and resource recovered from a grant name."""
    action: str
    resource: str


def encode_name(action: str, resource: str, delimiter: str = DEFAULT_DELIMITER) -> str:
    """Build the grant name of an (action, resource) pair."""
    if not delimiter:
        raise InvalidArgumentError("Delimiter is not defined")
    if not action:
        raise InvalidArgumentError("Action is not defined", details={"resource": resource})
    if not resource:
        raise InvalidArgumentError("Resource is not defined", details={"action": action})

    return f"{action}{delimiter}{resource}"


def decode_name(name: str, delimiter: str = DEFAULT_DELIMITER) -> DecodedName:
    """Split a grant name at the first delimiter occurrence."""
    if not delimiter:
        raise InvalidArgumentError("Delimiter is not defined")
    if not name:
        raise InvalidArgumentError("Name is required")

    action, found, resource = name.partition(delimiter)
    if not found:
        raise InvalidArgumentError(
            f"Name '{name}' does not contain delimiter '{delimiter}'",
            details={"name": name, "delimiter": delimiter},
        )

    return DecodedName(action=action, resource=resource)


def is_valid_name(name: str, delimiter: str = DEFAULT_DELIMITER) -> bool:
    """Return True if name is non-empty and has no whitespace or delimiter characters."""
    if not delimiter:
        raise InvalidArgumentError("Delimiter is not defined")
    if not isinstance(name, str) or not name:
        return False

    forbidden = "".join(re.escape(ch) for ch in dict.fromkeys(delimiter))
    return re.fullmatch(rf"[^{forbidden}\s]+", name) is not None


def get_permission_names(
    permissions: Iterable[Tuple[str, str]],
    delimiter: str = DEFAULT_DELIMITER,
) -> List[str]:
    """Encode a list of (action, resource) pairs."""
    if not delimiter:
        raise InvalidArgumentError("Delimiter is not defined")

    return [encode_name(action, resource, delimiter) for action, resource in permissions]
