"""Depth-first topological sort with cycle detection."""

import logging
from collections.abc import Callable, Hashable, Iterable, Iterator
from enum import StrEnum, auto

from toposorter._errors import ContractViolationError, CycleDetectedError, InvalidArgumentError

logger = logging.getLogger(__name__)


class NodeState(StrEnum):
    """Marking of a node during a single sort."""

    UNVISITED = auto()
    IN_PROGRESS = auto()  # On the current depth-first path
    DONE = auto()  # Appended to the output


def _edge_iterator[T: Hashable](node: T, edges_of: Callable[[T], Iterable[T]]) -> Iterator[T]:
    edges = edges_of(node)
    if edges is None:
        msg = f"edges from node {node!s} is None in the provided graph"
        raise ContractViolationError(node, msg)
    # Iterating a string would treat each character as an edge
    if isinstance(edges, (str, bytes)):
        msg = f"edges from node {node!s} is a {type(edges).__name__}, expected a collection of nodes"
        raise ContractViolationError(node, msg)
    try:
        return iter(edges)
    except TypeError as e:
        msg = f"edges from node {node!s} is not iterable (got {type(edges).__name__})"
        raise ContractViolationError(node, msg) from e


def topological_sort[T: Hashable](nodes: Iterable[T], edges_of: Callable[[T], Iterable[T]]) -> list[T]:
    """Sort nodes so that every node comes after the nodes it depends on.

    The sort is a depth-first post-order walk. Roots are taken in the order
    ``nodes`` yields them, and each node's dependencies are followed in the
    order ``edges_of`` yields them, so the result is fully determined by
    those two orders.

    The walk uses an explicit stack instead of recursion, so the length of
    a dependency chain is not limited by the interpreter's recursion limit.

    Args:
        nodes: Every node of the graph. Iterated exactly once.
        edges_of: Returns the dependencies of a node. An edge (a -> b)
            means "a depends on b", so b is placed before a.

    Returns:
        List containing every node once, dependencies before dependents.

    Raises:
        InvalidArgumentError: If ``nodes`` or ``edges_of`` is missing.
        CycleDetectedError: If a node depends on itself, directly or not.
        ContractViolationError: If ``edges_of`` returns None or a
            non-iterable, or yields a node that is not in ``nodes``.

    Example:
        >>> deps = {"a": ["b"], "b": ["c"], "c": []}
        >>> topological_sort(deps, deps.__getitem__)
        ['c', 'b', 'a']

    """
    if nodes is None:
        msg = "nodes is None"
        raise InvalidArgumentError(msg)
    if edges_of is None:
        msg = "edges_of is None"
        raise InvalidArgumentError(msg)
    if not callable(edges_of):
        msg = f"edges_of must be callable, got {type(edges_of).__name__}"
        raise InvalidArgumentError(msg)

    universe = list(nodes)
    state: dict[T, NodeState] = dict.fromkeys(universe, NodeState.UNVISITED)
    order: list[T] = []
    logger.debug(f"Sorting {len(state)} nodes")

    for root in universe:
        if state[root] is NodeState.DONE:
            continue

        # path[i] is in progress and pending[i] holds its unvisited edges
        state[root] = NodeState.IN_PROGRESS
        path: list[T] = [root]
        pending: list[Iterator[T]] = [_edge_iterator(root, edges_of)]

        while path:
            for target in pending[-1]:
                target_state = state.get(target)
                if target_state is None:
                    msg = f"node {target!s} reached from {path[-1]!s} is not in the provided nodes"
                    raise ContractViolationError(path[-1], msg)
                if target_state is NodeState.DONE:
                    continue
                if target_state is NodeState.IN_PROGRESS:
                    cycle = (*path[path.index(target) :], target)
                    logger.debug(f"Cycle detected at {target!s}")
                    raise CycleDetectedError(target, cycle)

                state[target] = NodeState.IN_PROGRESS
                path.append(target)
                pending.append(_edge_iterator(target, edges_of))
                break
            else:
                # No edges left, every dependency is already in the output
                node = path.pop()
                pending.pop()
                state[node] = NodeState.DONE
                order.append(node)

    return order
