"""Digraph capability contract shared by every implementation and adapter."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Collection, Iterable, Iterator
from typing import TYPE_CHECKING, Self

from . import _algorithms

if TYPE_CHECKING:
    from collections.abc import MutableMapping
    from collections.abc import Set as AbstractSet


class ReadOnlyDigraphError(TypeError):
    """Raised when mutating a digraph through a read-only adapter."""


type DigraphFactory[D] = Callable[[], D]


class Digraph[V, E](ABC):
    """A directed graph with at most one edge per ordered vertex pair.

    Vertices are arbitrary caller-supplied values; every edge carries a
    caller-supplied payload of type E. Looking up or removing something that
    is not in the graph is a normal outcome (``False`` or ``None``), never an
    error.

    Because a payload may itself be ``None``, use ``contains_edge`` to tell an
    absent edge from an edge carrying ``None``.
    """

    @abstractmethod
    def add(self, vertex: V) -> bool:
        """Add an isolated vertex. Return True if it was not present yet."""

    @abstractmethod
    def put(self, source: V, target: V, edge: E) -> E | None:
        """Insert or replace the edge from source to target.

        Both endpoints are added as vertices if necessary.

        Returns:
            The previous payload of the edge, or None if there was none.

        """

    @abstractmethod
    def get(self, source: V, target: V, default: E | None = None) -> E | None:
        """Return the payload of the edge from source to target, or default."""

    @abstractmethod
    def remove_edge(self, source: V, target: V) -> E | None:
        """Remove one edge, keeping both vertices. Return its payload or None."""

    @abstractmethod
    def remove_vertex(self, vertex: V) -> bool:
        """Remove a vertex with all its outgoing and incoming edges.

        Returns:
            True if the vertex was present.

        """

    @abstractmethod
    def remove_all(self, vertices: Collection[V]) -> None:
        """Remove every given vertex with its edges; unknown vertices are ignored."""

    @abstractmethod
    def contains_edge(self, source: V, target: V) -> bool:
        """Return True if there is an edge from source to target."""

    @abstractmethod
    def contains(self, vertex: object) -> bool:
        """Return True if vertex is in the graph."""

    @abstractmethod
    def vertices(self) -> Collection[V]:
        """Return a live, restartable view of all vertices."""

    @abstractmethod
    def targets(self, source: V) -> Collection[V]:
        """Return a live view of the out-neighbors of source.

        The view is empty if source is unknown or has no outgoing edges.
        """

    @abstractmethod
    def vertex_count(self) -> int:
        """Return the number of vertices."""

    @abstractmethod
    def out_degree(self, vertex: V) -> int:
        """Return the number of outgoing edges of vertex (0 if unknown)."""

    @abstractmethod
    def edge_count(self) -> int:
        """Return the number of edges."""

    @abstractmethod
    def reverse(self) -> Digraph[V, E]:
        """Return a new digraph with every edge flipped."""

    @abstractmethod
    def subgraph(self, vertices: AbstractSet[V]) -> Digraph[V, E]:
        """Return the new digraph induced by the given vertices."""

    def new_vertex_map[T](self) -> MutableMapping[V, T]:
        """Return an empty mapping that accepts this graph's vertices as keys.

        Algorithms keep per-vertex state in it. The default is a ``dict``, so
        implementations whose vertices need not be hashable override it.
        """
        return {}

    def is_acyclic(self) -> bool:
        """Return True if the graph has no directed cycle (self-loops count)."""
        return _algorithms.is_acyclic(self)

    def edges(self) -> Iterator[tuple[V, V, E]]:
        """Yield ``(source, target, edge)`` for every edge in iteration order."""
        for source in self.vertices():
            for target in self.targets(source):
                yield source, target, self.get(source, target)  # type: ignore[misc]

    def __contains__(self, vertex: object) -> bool:
        return self.contains(vertex)

    def __len__(self) -> int:
        return self.vertex_count()

    def __iter__(self) -> Iterator[V]:
        return iter(self.vertices())

    def update(self, edges: Iterable[tuple[V, V, E]]) -> Self:
        """Put every ``(source, target, edge)`` triple and return self."""
        for source, target, edge in edges:
            self.put(source, target, edge)
        return self
