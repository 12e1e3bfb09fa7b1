"""Graph module providing the topological sort and graph abstractions.

This module contains:
- topological_sort: Depth-first sort over a node iterable and an edge lookup
- NodeState: Per-node marking used during a sort
- DependencyGraph[T]: A generic, immutable directed graph
"""

from ._algorithms import NodeState, topological_sort
from ._dependency_graph import DependencyGraph

__all__ = ["DependencyGraph", "NodeState", "topological_sort"]
