"""Exceptions raised by the sorter."""

from collections.abc import Hashable


class TopologicalSortError(Exception):
    """Base class for errors raised while sorting a graph."""


class InvalidArgumentError(TopologicalSortError, TypeError):
    """Raised when a required argument is missing or has the wrong shape."""


class CycleDetectedError(TopologicalSortError, ValueError):
    """Raised when the graph contains a dependency cycle.

    Attributes:
        node: The node that was reached again while still in progress.
        cycle: The dependency path from ``node`` back to ``node``.

    """

    def __init__(self, node: Hashable, cycle: tuple[Hashable, ...] = ()) -> None:
        self.node = node
        self.cycle = cycle
        msg = f"cyclic dependency detected, {node!s} already visited"
        if cycle:
            msg += f" ({' -> '.join(str(n) for n in cycle)})"
        super().__init__(msg)


class ContractViolationError(TopologicalSortError):
    """Raised when the edge lookup misbehaves for a node.

    This is kept apart from ``CycleDetectedError`` so callers can tell a
    broken graph from a broken edge lookup.
    """

    def __init__(self, node: Hashable, msg: str) -> None:
        self.node = node
        super().__init__(msg)
