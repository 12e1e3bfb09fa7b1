"""Topological sorting of dependency graphs with cycle detection."""

__all__ = [
    "ContractViolationError",
    "CycleDetectedError",
    "DependencyGraph",
    "EdgesFactory",
    "Graph",
    "GraphDocument",
    "GraphFileError",
    "InvalidArgumentError",
    "NodeState",
    "TopologicalSortError",
    "graph_of",
    "load_graph_document",
    "sort_document",
    "sort_graph",
    "sort_mapping",
    "sort_with_factory",
    "topological_sort",
]

from ._adapters import EdgesFactory, Graph, graph_of, sort_graph, sort_mapping, sort_with_factory
from ._errors import ContractViolationError, CycleDetectedError, InvalidArgumentError, TopologicalSortError
from ._graph import DependencyGraph, NodeState, topological_sort
from ._io import GraphDocument, GraphFileError, load_graph_document, sort_document
