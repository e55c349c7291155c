"""Digraph adapters: plain forwarding and read-only."""

from __future__ import annotations

from collections.abc import Collection, Iterator
from typing import TYPE_CHECKING, NoReturn

from ._digraph import Digraph, ReadOnlyDigraphError

if TYPE_CHECKING:
    from collections.abc import MutableMapping
    from collections.abc import Set as AbstractSet


class DigraphAdapter[V, E](Digraph[V, E]):
    """Forwards every operation to a wrapped digraph.

    Subclass it to override a subset of the operations.
    """

    def __init__(self, digraph: Digraph[V, E]) -> None:
        self._delegate = digraph

    def add(self, vertex: V) -> bool:
        return self._delegate.add(vertex)

    def put(self, source: V, target: V, edge: E) -> E | None:
        return self._delegate.put(source, target, edge)

    def get(self, source: V, target: V, default: E | None = None) -> E | None:
        return self._delegate.get(source, target, default)

    def remove_edge(self, source: V, target: V) -> E | None:
        return self._delegate.remove_edge(source, target)

    def remove_vertex(self, vertex: V) -> bool:
        return self._delegate.remove_vertex(vertex)

    def remove_all(self, vertices: Collection[V]) -> None:
        self._delegate.remove_all(vertices)

    def contains_edge(self, source: V, target: V) -> bool:
        return self._delegate.contains_edge(source, target)

    def contains(self, vertex: object) -> bool:
        return self._delegate.contains(vertex)

    def vertices(self) -> Collection[V]:
        return self._delegate.vertices()

    def targets(self, source: V) -> Collection[V]:
        return self._delegate.targets(source)

    def vertex_count(self) -> int:
        return self._delegate.vertex_count()

    def out_degree(self, vertex: V) -> int:
        return self._delegate.out_degree(vertex)

    def edge_count(self) -> int:
        return self._delegate.edge_count()

    def reverse(self) -> Digraph[V, E]:
        return self._delegate.reverse()

    def subgraph(self, vertices: AbstractSet[V]) -> Digraph[V, E]:
        return self._delegate.subgraph(vertices)

    def new_vertex_map[T](self) -> MutableMapping[V, T]:
        return self._delegate.new_vertex_map()

    def is_acyclic(self) -> bool:
        return self._delegate.is_acyclic()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._delegate!r})"


def _read_only() -> NoReturn:
    msg = "This digraph is read-only"
    raise ReadOnlyDigraphError(msg)


class _ReadOnlyCursor[V](Iterator[V]):
    __slots__ = ("_delegate",)

    def __init__(self, delegate: Iterator[V]) -> None:
        self._delegate = delegate

    def __next__(self) -> V:
        return next(self._delegate)

    def remove(self) -> NoReturn:
        _read_only()


class _ReadOnlyView[V](Collection[V]):
    """A vertex or target view whose cursors refuse to remove."""

    __slots__ = ("_delegate",)

    def __init__(self, delegate: Collection[V]) -> None:
        self._delegate = delegate

    def __iter__(self) -> _ReadOnlyCursor[V]:
        return _ReadOnlyCursor(iter(self._delegate))

    def __len__(self) -> int:
        return len(self._delegate)

    def __contains__(self, item: object) -> bool:
        return item in self._delegate

    def __repr__(self) -> str:
        return repr(self._delegate)


class UnmodifiableDigraph[V, E](DigraphAdapter[V, E]):
    """Read-only view of a digraph.

    Queries are forwarded to the wrapped digraph, so the view reflects later
    changes made to it directly. Every mutating operation, including
    ``remove()`` on a cursor over ``vertices()`` or ``targets()``, raises
    ``ReadOnlyDigraphError`` without touching the wrapped digraph.

    Example:
        >>> from mapgraph import MapDigraph
        >>> view = UnmodifiableDigraph(MapDigraph())
        >>> view.add("a")
        Traceback (most recent call last):
            ...
        mapgraph._digraph.ReadOnlyDigraphError: This digraph is read-only

    """

    def add(self, vertex: V) -> NoReturn:  # noqa: ARG002
        _read_only()

    def put(self, source: V, target: V, edge: E) -> NoReturn:  # noqa: ARG002
        _read_only()

    def remove_edge(self, source: V, target: V) -> NoReturn:  # noqa: ARG002
        _read_only()

    def remove_vertex(self, vertex: V) -> NoReturn:  # noqa: ARG002
        _read_only()

    def remove_all(self, vertices: Collection[V]) -> NoReturn:  # noqa: ARG002
        _read_only()

    def vertices(self) -> Collection[V]:
        return _ReadOnlyView(self._delegate.vertices())

    def targets(self, source: V) -> Collection[V]:
        return _ReadOnlyView(self._delegate.targets(source))


def unmodifiable[V, E](digraph: Digraph[V, E]) -> Digraph[V, E]:
    """Wrap a digraph read-only, unless it already is."""
    if isinstance(digraph, UnmodifiableDigraph):
        return digraph
    return UnmodifiableDigraph(digraph)

