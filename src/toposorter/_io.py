"""Loading graph files and exporting sorted orders."""

from __future__ import annotations

import json
import logging
import tomllib
from typing import TYPE_CHECKING

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ._adapters import sort_mapping

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class GraphFileError(Exception):
    """Error reading or validating a graph file."""


class GraphDocument(BaseModel):
    """Contents of a TOML graph file.

    Example file:

        nodes = ["d"]

        [dependencies]
        a = ["c", "e"]  # a depends on c and e
        b = ["a"]
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    nodes: list[str] = Field(default_factory=list, description="Nodes listed first, including standalone ones")
    dependencies: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Mapping from node to the nodes it depends on",
    )

    def node_order(self) -> list[str]:
        """All nodes: listed nodes, then dependency keys, then targets, without duplicates."""
        order = dict.fromkeys(self.nodes)
        order.update(dict.fromkeys(self.dependencies))
        for deps in self.dependencies.values():
            order.update(dict.fromkeys(deps))
        return list(order)


def load_graph_document(path: Path) -> GraphDocument:
    """Load and validate a graph file.

    Args:
        path: Path to the TOML graph file.

    Returns:
        The validated GraphDocument.

    Raises:
        GraphFileError: If the file cannot be read, is not valid TOML, or
            does not match the expected structure.

    """
    logger.debug(f"Loading graph from {path}")
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        msg = f"Cannot read graph file {path}: {e}"
        raise GraphFileError(msg) from e
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise GraphFileError(msg) from e

    try:
        return GraphDocument.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid graph file {path}: {e}"
        raise GraphFileError(msg) from e


def sort_document(document: GraphDocument) -> list[str]:
    """Sort the nodes of a graph document.

    Raises:
        CycleDetectedError: If the graph contains a cycle.

    """
    return sort_mapping(document.dependencies, document.node_order())


def order_to_text(order: list[str]) -> str:
    """One node per line."""
    return "".join(f"{node}\n" for node in order)


def order_to_json(order: list[str], indent: int | None = 2) -> str:
    """JSON array of nodes."""
    return json.dumps(order, indent=indent)


def order_to_toml(order: list[str]) -> str:
    """TOML document with an `order` array."""
    return tomli_w.dumps({"order": order})
