"""Adapters reducing common graph shapes to ``topological_sort``'s contract."""

from collections.abc import Callable, Hashable, Iterable, Iterator, Mapping
from typing import Protocol, runtime_checkable

from ._errors import InvalidArgumentError
from ._graph import topological_sort

type EdgesFactory[T] = Callable[[T, tuple[T, ...]], Iterable[T]]


@runtime_checkable
class Graph[T: Hashable](Protocol):
    """A graph that can be iterated for its nodes and asked for a node's edges."""

    def __iter__(self) -> Iterator[T]: ...

    def edges(self, node: T) -> Iterable[T]:
        """Return the nodes that ``node`` depends on."""
        ...


def sort_graph[T: Hashable](graph: Graph[T]) -> list[T]:
    """Sort a graph object exposing per-node edge lookup.

    Example:
        >>> from toposorter import DependencyGraph
        >>> sort_graph(DependencyGraph.from_edges([("a", "b")]))
        ['a', 'b']

    """
    if graph is None:
        msg = "graph is None"
        raise InvalidArgumentError(msg)
    return topological_sort(graph, graph.edges)


def sort_with_factory[T: Hashable](nodes: Iterable[T], factory: EdgesFactory[T]) -> list[T]:
    """Sort nodes whose edges are computed from the node and the full node set.

    Args:
        nodes: Every node of the graph.
        factory: Called as ``factory(node, all_nodes)`` and returns the nodes
            that ``node`` depends on. ``all_nodes`` is the same tuple on
            every call.

    Returns:
        The sorted nodes.

    """
    if nodes is None:
        msg = "nodes is None"
        raise InvalidArgumentError(msg)
    if factory is None:
        msg = "factory is None"
        raise InvalidArgumentError(msg)
    all_nodes = tuple(nodes)
    return topological_sort(all_nodes, lambda node: factory(node, all_nodes))


def sort_mapping[T: Hashable](
    mapping: Mapping[T, Iterable[T]],
    nodes: Iterable[T] | None = None,
) -> list[T]:
    """Sort a static mapping from node to the nodes it depends on.

    Nodes without an entry in ``mapping`` have no edges.

    Args:
        mapping: Mapping from node to its dependencies.
        nodes: The node universe. Defaults to the mapping keys followed by
            every dependency that is not a key, in first-seen order.

    Returns:
        The sorted nodes.

    Example:
        >>> sort_mapping({"a": {"b"}, "c": ["a", "b"]})
        ['b', 'a', 'c']

    """
    if mapping is None:
        msg = "mapping is None"
        raise InvalidArgumentError(msg)
    if nodes is None:
        universe = dict.fromkeys(mapping)
        for deps in mapping.values():
            # None entries are reported by the sort itself
            if deps is not None:
                universe.update(dict.fromkeys(deps))
        nodes = universe
    return topological_sort(nodes, lambda node: mapping.get(node, ()))


def graph_of[T: Hashable](*pairs: tuple[T, Iterable[T]]) -> dict[T, tuple[T, ...]]:
    """Build a node -> dependencies mapping from ``(node, dependencies)`` pairs.

    Example:
        >>> graph_of(("a", ["b"]), ("c", ["a", "b"]))
        {'a': ('b',), 'c': ('a', 'b')}

    """
    return {node: tuple(deps) for node, deps in pairs}
