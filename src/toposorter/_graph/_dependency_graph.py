"""Immutable dependency graph that can be handed to the sorter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from toposorter._errors import CycleDetectedError

from ._algorithms import topological_sort

if TYPE_CHECKING:
    from collections.abc import Hashable, Iterable, Iterator, Mapping


def _unique[T](items: Iterable[T]) -> tuple[T, ...]:
    return tuple(dict.fromkeys(items))


@dataclass(frozen=True, slots=True)
class DependencyGraph[T: Hashable]:
    """A directed graph of "depends on" relationships between nodes.

    This is a pure, immutable data structure with query methods. Nodes and
    edges keep the order in which they were first given, so every query and
    the topological order are deterministic.

    - dependencies[b] = (a,) means "b depends on a"
    - dependents[a] = (b,) means "a is depended on by b"

    Attributes:
        _dependencies: Mapping from node to its direct dependencies.
        _dependents: Mapping from node to nodes that depend on it.

    """

    _dependencies: dict[T, tuple[T, ...]] = field(default_factory=dict)
    _dependents: dict[T, tuple[T, ...]] = field(default_factory=dict)

    @classmethod
    def from_edges(cls, edges: Iterable[tuple[T, T]], nodes: Iterable[T] = ()) -> DependencyGraph[T]:
        """Build a graph from (dependency, dependent) edges.

        An edge (a, b) means "b depends on a", so a is sorted before b.

        Args:
            edges: Iterable of (dependency, dependent) tuples.
            nodes: Extra nodes to include, e.g. nodes without any edges.
                They come first in the node order.

        Returns:
            A new DependencyGraph instance.

        Example:
            >>> graph = DependencyGraph.from_edges([("a", "b"), ("b", "c")])
            >>> graph.dependencies("b")
            ('a',)

        """
        dependencies: dict[T, list[T]] = {node: [] for node in nodes}
        dependents: dict[T, list[T]] = {node: [] for node in dependencies}

        for src, dst in edges:
            for node in (src, dst):
                dependencies.setdefault(node, [])
                dependents.setdefault(node, [])
            dependencies[dst].append(src)
            dependents[src].append(dst)

        return cls(
            _dependencies={k: _unique(v) for k, v in dependencies.items()},
            _dependents={k: _unique(v) for k, v in dependents.items()},
        )

    @classmethod
    def from_mapping(cls, mapping: Mapping[T, Iterable[T]]) -> DependencyGraph[T]:
        """Build a graph from a mapping of node to the nodes it depends on.

        Example:
            >>> DependencyGraph.from_mapping({"a": ["b"]}).topological_order()
            ['b', 'a']

        """
        return cls.from_edges(
            ((dep, node) for node, deps in mapping.items() for dep in deps),
            nodes=mapping.keys(),
        )

    @property
    def nodes(self) -> tuple[T, ...]:
        """All nodes in the graph, in insertion order."""
        return tuple(self._dependencies)

    def edges(self, node: T) -> tuple[T, ...]:
        """Edge lookup used by the sorter; same as ``dependencies``."""
        return self.dependencies(node)

    def dependencies(self, node: T) -> tuple[T, ...]:
        """Get direct dependencies of a node (nodes it depends on).

        Args:
            node: The node to query.

        Returns:
            Nodes that this node directly depends on. Empty for unknown nodes.

        """
        return self._dependencies.get(node, ())

    def dependents(self, node: T) -> tuple[T, ...]:
        """Get direct dependents of a node (nodes that depend on it).

        Args:
            node: The node to query.

        Returns:
            Nodes that directly depend on this node. Empty for unknown nodes.

        """
        return self._dependents.get(node, ())

    def roots(self) -> tuple[T, ...]:
        """Get nodes with no dependencies."""
        return tuple(n for n in self.nodes if not self._dependencies[n])

    def leaves(self) -> tuple[T, ...]:
        """Get nodes that nothing depends on."""
        return tuple(n for n in self.nodes if not self._dependents[n])

    def ancestors(self, node: T) -> frozenset[T]:
        """Get all transitive dependencies of a node."""
        visited: set[T] = set()
        stack = list(self.dependencies(node))
        while stack:
            current = stack.pop()
            if current not in visited:
                visited.add(current)
                stack.extend(self.dependencies(current))
        return frozenset(visited)

    def descendants(self, node: T) -> frozenset[T]:
        """Get all transitive dependents of a node."""
        visited: set[T] = set()
        stack = list(self.dependents(node))
        while stack:
            current = stack.pop()
            if current not in visited:
                visited.add(current)
                stack.extend(self.dependents(current))
        return frozenset(visited)

    def topological_order(self) -> list[T]:
        """Return nodes in topological order (dependencies before dependents).

        Raises:
            CycleDetectedError: If the graph contains a cycle.

        """
        return topological_sort(self._dependencies, self.dependencies)

    def find_cycle(self) -> tuple[T, ...] | None:
        """Return one dependency cycle, or None if the graph is acyclic.

        The cycle starts and ends with the same node, e.g. ``("a", "b", "a")``.
        """
        try:
            self.topological_order()
        except CycleDetectedError as e:
            return e.cycle
        return None

    def has_cycle(self) -> bool:
        """Check if the graph contains a cycle."""
        return self.find_cycle() is not None

    def subgraph(self, nodes: Iterable[T]) -> DependencyGraph[T]:
        """Create a subgraph containing only the specified nodes.

        Edges are kept only if both endpoints are in the node set. Nodes keep
        the order of this graph; unknown nodes are ignored.
        """
        keep = set(nodes)

        def restrict(edges: dict[T, tuple[T, ...]]) -> dict[T, tuple[T, ...]]:
            return {n: tuple(d for d in deps if d in keep) for n, deps in edges.items() if n in keep}

        return DependencyGraph(
            _dependencies=restrict(self._dependencies),
            _dependents=restrict(self._dependents),
        )

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._dependencies)

    def __contains__(self, node: object) -> bool:
        """Check if a node is in the graph."""
        return node in self._dependencies

    def __iter__(self) -> Iterator[T]:
        """Iterate over the nodes in insertion order."""
        return iter(self._dependencies)
