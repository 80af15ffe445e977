"""Compact grant rule expansion.

Rules map a resource to either a string of action letters or an explicit
list of actions::

    wind_grant({"client": "CRU", "report": ["export"]})
    # ["create_client", "read_client", "update_client", "export_report"]
"""

from typing import List, Mapping, Sequence, Union

from ....config.constants import DEFAULT_DELIMITER, GRANT_ACTION_LETTERS
from ....core.exceptions import InvalidArgumentError
from .naming import encode_name

GrantRule = Union[str, Sequence[str]]


def expand_rule(rule: GrantRule) -> List[str]:
    """Turn one rule into the list of actions it stands for."""
    if isinstance(rule, str):
        actions = []
        for letter in rule:
            action = GRANT_ACTION_LETTERS.get(letter.upper())
            if action is None:
                raise InvalidArgumentError(
                    f"Unknown action letter '{letter}'",
                    details={"rule": rule, "letters": sorted(GRANT_ACTION_LETTERS)},
                )
            actions.append(action)
        return actions

    return list(rule)


def wind_grant(rules: Mapping[str, GrantRule], delimiter: str = DEFAULT_DELIMITER) -> List[str]:
    """Expand resource rules into grant names, keeping rule order."""
    if not isinstance(rules, Mapping):
        raise InvalidArgumentError("Grant rules must be a mapping of resource to actions")

    grants: List[str] = []
    for resource, rule in rules.items():
        for action in expand_rule(rule):
            name = encode_name(action, resource, delimiter)
            if name not in grants:
                grants.append(name)
    return grants
