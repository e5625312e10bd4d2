"""Bottom-up construction over nested trees without recursion."""

from __future__ import annotations

from typing import Callable, Iterable, TypeVar

NodeT = TypeVar("NodeT")
ValueT = TypeVar("ValueT")


def build_bottom_up(
    roots: Iterable[NodeT],
    children_of: Callable[[NodeT], list[NodeT]],
    build: Callable[[NodeT, list[ValueT]], ValueT],
) -> list[ValueT]:
    """Build a value for every node once the values of its children exist.

    The tree is walked with an explicit stack, so its depth is bounded only by
    memory. Nodes are keyed by identity; a node reachable from several
    parents is built once.

    Args:
        roots: Top-level nodes in order.
        children_of: Returns the children of a node in order.
        build: Receives a node and the built values of its children, in order.

    Returns:
        The built values of ``roots``, in order.

    Raises:
        ValueError: If a node is its own descendant.
    """
    roots = list(roots)
    built: dict[int, ValueT] = {}
    entered: set[int] = set()
    # (node, whether its children are already built)
    stack: list[tuple[NodeT, bool]] = [(node, False) for node in reversed(roots)]
    while stack:
        node, children_built = stack.pop()
        key = id(node)
        if key in built:
            continue
        if children_built:
            built[key] = build(node, [built[id(child)] for child in children_of(node)])
            continue
        if key in entered:
            raise ValueError("tree contains a cycle")
        entered.add(key)
        stack.append((node, True))
        stack.extend((child, False) for child in reversed(children_of(node)))
    return [built[id(node)] for node in roots]
