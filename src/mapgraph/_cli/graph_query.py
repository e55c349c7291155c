"""Graph query functions for CLI commands.

This module provides pure functions for inspecting a digraph.
These are the functional core - no I/O, no Rich rendering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from mapgraph import MapDigraph, topological_sort

if TYPE_CHECKING:
    from mapgraph import Digraph, DigraphFactory

    from .config import Ordering


@dataclass(frozen=True, slots=True)
class GraphSummary:
    """Counts and acyclicity of a digraph."""

    vertex_count: int
    edge_count: int
    acyclic: bool
    self_loops: int


@dataclass(frozen=True, slots=True)
class AdjacencyRow:
    """One vertex with its out-neighbors and their edge payloads."""

    vertex: str
    out_degree: int
    targets: tuple[tuple[str, Any], ...]


def digraph_factory(ordering: Ordering) -> DigraphFactory[MapDigraph[Any, Any]]:
    """Return the factory creating empty digraphs for an ordering."""
    if ordering == "sorted":
        return MapDigraph.sorted_by
    return MapDigraph


def summarize(digraph: Digraph[Any, Any]) -> GraphSummary:
    """Summarize a digraph."""
    return GraphSummary(
        vertex_count=digraph.vertex_count(),
        edge_count=digraph.edge_count(),
        acyclic=digraph.is_acyclic(),
        self_loops=sum(1 for vertex in digraph.vertices() if digraph.contains_edge(vertex, vertex)),
    )


def adjacency(digraph: Digraph[Any, Any]) -> list[AdjacencyRow]:
    """List every vertex with its targets, in the digraph's iteration order."""
    return [
        AdjacencyRow(
            vertex=str(vertex),
            out_degree=digraph.out_degree(vertex),
            targets=tuple((str(target), digraph.get(vertex, target)) for target in digraph.targets(vertex)),
        )
        for vertex in digraph.vertices()
    ]


def topological_order(digraph: Digraph[Any, Any]) -> list[str] | None:
    """Return the vertices in topological order, or None if there is a cycle."""
    try:
        return [str(vertex) for vertex in topological_sort(digraph)]
    except ValueError:
        return None
