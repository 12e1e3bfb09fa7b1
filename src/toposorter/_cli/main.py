"""Command line interface for sorting and checking graph files."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from toposorter._errors import ContractViolationError, CycleDetectedError
from toposorter._io import (
    GraphDocument,
    GraphFileError,
    load_graph_document,
    order_to_json,
    order_to_text,
    order_to_toml,
    sort_document,
)

from .config import ConfigError, OutputFormat, ToposorterConfig, get_config
from .render import format_cycle, render_order_table

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: Annotated[bool, typer.Option("--verbose", help="Enable verbose output")] = False,
) -> None:
    """Toposorter CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_config() -> ToposorterConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _load_document(graph: Path | None, config: ToposorterConfig) -> GraphDocument:
    """Resolve the graph path from the argument or config and load it."""
    if graph is None:
        graph = config.graph
    if graph is None:
        err_console.print(
            "[red]Error: No graph file given. Pass a path or set \\[tool.toposorter].graph in pyproject.toml[/red]",
        )
        raise typer.Exit(code=1)

    err_console.print(f"[cyan]Loading graph from:[/cyan] {graph}")
    try:
        return load_graph_document(graph)
    except GraphFileError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _sort_or_exit(document: GraphDocument) -> list[str]:
    """Sort a graph document, reporting failures and exiting non-zero."""
    try:
        return sort_document(document)
    except CycleDetectedError as e:
        err_console.print(f"[red]✗ Cycle detected at node:[/red] {escape(str(e.node))}")
        if e.cycle:
            err_console.print(f"  [dim]{format_cycle(e.cycle)}[/dim]")
        raise typer.Exit(code=1) from e
    except ContractViolationError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


@app.command()
def sort(
    graph: Annotated[
        Path | None,
        typer.Argument(help="Path to TOML graph file (defaults to the graph configured in pyproject.toml)"),
    ] = None,
    *,
    output_format: Annotated[
        OutputFormat | None,
        typer.Option("-f", "--format", help="Output format (defaults to the configured format, or text)"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Write the order to this file instead of stdout"),
    ] = None,
) -> None:
    """Sort a graph file so that dependencies come before their dependents."""
    config = _load_config()
    document = _load_document(graph, config)
    fmt = output_format or config.format or OutputFormat.TEXT

    order = _sort_or_exit(document)

    logger.debug(f"Sorted {len(order)} nodes")

    match fmt:
        case OutputFormat.JSON:
            text = order_to_json(order)
        case OutputFormat.TOML:
            text = order_to_toml(order)
        case _:
            text = order_to_text(order)

    if output is not None:
        try:
            output.write_text(text if text.endswith("\n") else text + "\n")
        except OSError as e:
            err_console.print(f"[red]Error: Cannot write order to {output}: {escape(str(e))}[/red]")
            raise typer.Exit(code=1) from e
        err_console.print(f"[green]✓ Order written to {output}[/green]")
        return

    if fmt is OutputFormat.TEXT:
        render_order_table(order, out_console)
    else:
        typer.echo(text)


@app.command()
def check(
    graph: Annotated[
        Path | None,
        typer.Argument(help="Path to TOML graph file (defaults to the graph configured in pyproject.toml)"),
    ] = None,
) -> None:
    """Check that a graph file has no dependency cycles."""
    config = _load_config()
    document = _load_document(graph, config)

    order = _sort_or_exit(document)

    err_console.print(f"[green]✓ Graph is acyclic ({len(order)} nodes)[/green]")


def main() -> None:
    """Run the toposorter CLI."""
    app()
