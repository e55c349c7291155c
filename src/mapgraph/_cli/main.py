import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from mapgraph import MapDigraph

from .config import ConfigError, Ordering, get_config
from .document import DocumentError, build_digraph, load_graph_document
from .graph_query import adjacency, digraph_factory, summarize, topological_order
from .graph_render import render_adjacency, render_order, render_summary

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

GraphArgument = Annotated[
    Path | None,
    typer.Argument(help="Path to a TOML graph document. Defaults to [tool.mapgraph].graph"),
]
OrderingOption = Annotated[
    bool | None,
    typer.Option(
        "--sorted/--insertion",
        help="Iterate vertices in sorted or insertion order. Defaults to [tool.mapgraph].ordering",
    ),
]


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Inspect directed graphs stored as TOML edge lists."""
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


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]Error: {escape(message)}[/red]")
    return typer.Exit(code=1)


def _load_digraph(path: Path | None, sort: bool | None) -> MapDigraph[str, Any]:
    """Load a graph document into a MapDigraph.

    Args:
        path: Path to the graph document, or None to use the configured one.
        sort: Force sorted (True) or insertion (False) order, or None to use the configured ordering.

    Returns:
        The populated MapDigraph

    """
    try:
        config = get_config()
    except ConfigError as e:
        raise _fail(str(e)) from e

    if path is None:
        if config.graph is None:
            msg = "No graph document given and no [tool.mapgraph].graph configured"
            raise _fail(msg)
        path = config.graph

    ordering: Ordering = config.ordering
    if sort is not None:
        ordering = "sorted" if sort else "insertion"
    logger.debug(f"Loading {path} with {ordering} ordering")

    try:
        document = load_graph_document(path)
    except DocumentError as e:
        raise _fail(str(e)) from e

    return build_digraph(document, digraph_factory(ordering))


@app.command()
def info(
    path: GraphArgument = None,
    *,
    sort: OrderingOption = None,
) -> None:
    """Show vertex and edge counts, acyclicity and the adjacency of a graph."""
    digraph = _load_digraph(path, sort)

    err_console.print(Panel.fit(f"[bold]{path or 'configured graph'}[/bold]", border_style="cyan"))
    render_summary(summarize(digraph), out_console)
    out_console.print()
    render_adjacency(adjacency(digraph), out_console)


@app.command()
def check(
    path: GraphArgument = None,
    *,
    sort: OrderingOption = None,
) -> None:
    """Check that a graph has no directed cycle. Exits with code 1 otherwise."""
    digraph = _load_digraph(path, sort)

    if not digraph.is_acyclic():
        err_console.print("[red]✗ Graph contains a cycle[/red]")
        raise typer.Exit(code=1)

    err_console.print("[green]✓ Graph is acyclic[/green]")


@app.command()
def order(
    path: GraphArgument = None,
    *,
    sort: OrderingOption = None,
) -> None:
    """Print the vertices in topological order."""
    digraph = _load_digraph(path, sort)

    vertices = topological_order(digraph)
    if vertices is None:
        raise _fail("Graph contains a cycle, no topological order exists")

    render_order(vertices, out_console)


@app.command()
def reverse(
    path: GraphArgument = None,
    *,
    sort: OrderingOption = None,
) -> None:
    """Print the adjacency of the graph with every edge flipped."""
    digraph = _load_digraph(path, sort)

    render_adjacency(adjacency(digraph.reverse()), out_console)


@app.command()
def subgraph(
    path: GraphArgument = None,
    *,
    vertex: Annotated[
        list[str],
        typer.Option("-v", "--vertex", help="Vertex to keep (repeatable)"),
    ],
    sort: OrderingOption = None,
) -> None:
    """Print the adjacency of the subgraph induced by the given vertices."""
    digraph = _load_digraph(path, sort)

    unknown = [v for v in vertex if not digraph.contains(v)]
    if unknown:
        logger.warning(f"Ignoring vertices not in the graph: {', '.join(unknown)}")

    render_adjacency(adjacency(digraph.subgraph(set(vertex))), out_console)


def main() -> None:
    app()
