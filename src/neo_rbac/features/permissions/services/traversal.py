"""Breadth-first walk over the role hierarchy."""

import inspect
import logging
from collections import deque
from typing import Awaitable, Callable, Optional, TypeVar, Union

from ....config.constants import ItemType
from ..entities.base import Base
from ..entities.protocols import RBACStorage

logger = logging.getLogger(__name__)

T = TypeVar("T")

GrantVisitor = Callable[[Base], Union[Optional[T], Awaitable[Optional[T]]]]


async def traverse_grants(
    storage: RBACStorage,
    role_name: str,
    handle: GrantVisitor,
) -> Optional[T]:
    """Visit every edge reachable from ``role_name`` in breadth-first order.

    Each role is expanded at most once, so cyclic hierarchies terminate. The
    visitor is called for every child edge (a child reachable through several
    parents is visited once per edge) and may be a plain function or a
    coroutine function. The first non-None result stops the walk and is
    returned; None is returned once the hierarchy is exhausted.
    """
    queue = deque([role_name])
    used = {role_name}

    while queue:
        current = queue.popleft()
        children = await storage.get_grants(current)

        for child in children:
            if child.type is ItemType.ROLE and child.name not in used:
                used.add(child.name)
                queue.append(child.name)

            result = handle(child)
            if inspect.isawaitable(result):
                result = await result

            if result is not None:
                logger.debug(f"Traversal from '{role_name}' stopped at '{child.name}'")
                return result

    return None
