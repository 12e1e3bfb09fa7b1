"""Rich rendering utilities for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from collections.abc import Hashable

    from rich.console import Console


def render_order_table(order: list[str], console: Console) -> None:
    """Render a sorted order as a numbered Rich table.

    Args:
        order: Sorted nodes, dependencies first.
        console: Rich Console to output to.

    """
    if not order:
        console.print("[dim]Graph has no nodes[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Node", style="bold")

    for index, node in enumerate(order, start=1):
        table.add_row(str(index), escape(node))

    console.print(table)
    console.print(f"\n[dim]Total: {len(order)} nodes[/dim]")


def format_cycle(cycle: tuple[Hashable, ...]) -> str:
    """Format a cycle path for display, e.g. ``a -> b -> a``."""
    return " -> ".join(escape(str(node)) for node in cycle)
