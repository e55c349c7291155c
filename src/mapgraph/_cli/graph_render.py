"""Rich rendering utilities for graph commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from rich.console import Console

    from .graph_query import AdjacencyRow, GraphSummary


def render_summary(summary: GraphSummary, console: Console) -> None:
    """Render a graph summary as a Rich table.

    Args:
        summary: GraphSummary to render.
        console: Rich Console to output to.

    """
    table = Table(show_header=False, box=None)
    table.add_column("Property", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Vertices", str(summary.vertex_count))
    table.add_row("Edges", str(summary.edge_count))
    table.add_row("Self-loops", str(summary.self_loops))
    acyclic = "[green]yes[/green]" if summary.acyclic else "[red]no[/red]"
    table.add_row("Acyclic", acyclic)

    console.print(table)


def render_adjacency(rows: list[AdjacencyRow], console: Console) -> None:
    """Render the adjacency of a digraph as a Rich table.

    Args:
        rows: List of AdjacencyRow to render.
        console: Rich Console to output to.

    """
    if not rows:
        console.print("[dim]The graph has no vertices[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Vertex", style="bold")
    table.add_column("Out", justify="right")
    table.add_column("Targets")

    for row in rows:
        targets = ", ".join(
            escape(target) if payload is None else f"{escape(target)} [dim]({escape(str(payload))})[/dim]"
            for target, payload in row.targets
        )
        table.add_row(escape(row.vertex), str(row.out_degree), targets or "[dim]-[/dim]")

    console.print(table)
    console.print(f"\n[dim]Total: {len(rows)} vertices[/dim]")


def render_order(order: list[str], console: Console) -> None:
    """Render a topological order, one vertex per line."""
    for position, vertex in enumerate(order, start=1):
        console.print(f"[dim]{position:>3}.[/dim] {escape(vertex)}")
