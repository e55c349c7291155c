"""Adjacency-map digraph: vertex -> (target -> edge), plus an edge counter."""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection, Iterator, Mapping, MutableMapping
from functools import partial
from typing import TYPE_CHECKING, Any, cast

from . import _algorithms
from ._digraph import Digraph, DigraphFactory
from ._maps import EMPTY_EDGE_MAP, EdgeMapFactory, VertexMapFactory, edge_map_factory, vertex_map_factory

if TYPE_CHECKING:
    from collections.abc import Set as AbstractSet

logger = logging.getLogger(__name__)

_NOTHING: Any = object()
_REPR_LIMIT = 1000


class _VertexCursor[V](Iterator[V]):
    """Iterator over the vertices of a MapDigraph that can remove the current one."""

    __slots__ = ("_current", "_digraph", "_expected", "_pending")

    def __init__(self, digraph: MapDigraph[V, Any]) -> None:
        self._digraph = digraph
        self._pending = iter(list(digraph._vertex_map))
        self._expected = digraph._vertex_modifications
        self._current: V = _NOTHING

    def __next__(self) -> V:
        self._digraph._check_vertices(self._expected)
        self._current = next(self._pending)
        return self._current

    def remove(self) -> None:
        """Remove the last returned vertex and all edges referencing it."""
        if self._current is _NOTHING:
            msg = "remove() must follow a call to next()"
            raise RuntimeError(msg)
        self._digraph._check_vertices(self._expected)
        self._digraph._detach(self._current)
        self._expected = self._digraph._vertex_modifications
        self._current = _NOTHING


class _TargetCursor[V](Iterator[V]):
    """Iterator over the targets of one source that can remove the current edge."""

    __slots__ = ("_current", "_digraph", "_expected", "_pending", "_source")

    def __init__(self, digraph: MapDigraph[V, Any], source: V) -> None:
        self._digraph = digraph
        self._source = source
        self._pending = iter(list(digraph._vertex_map.get(source, EMPTY_EDGE_MAP)))
        self._expected = digraph._edge_stamp(source)
        self._current: V = _NOTHING

    def __next__(self) -> V:
        self._digraph._check_targets(self._source, self._expected)
        self._current = next(self._pending)
        return self._current

    def remove(self) -> None:
        """Remove the edge from the source to the last returned target."""
        if self._current is _NOTHING:
            msg = "remove() must follow a call to next()"
            raise RuntimeError(msg)
        self._digraph._check_targets(self._source, self._expected)
        self._digraph.remove_edge(self._source, self._current)
        self._expected = self._digraph._edge_stamp(self._source)
        self._current = _NOTHING


class VertexView[V](Collection[V]):
    """Live view of the vertices of a MapDigraph.

    Every ``iter()`` starts a fresh cursor; ``cursor.remove()`` removes the
    current vertex exactly like ``MapDigraph.remove_vertex``.
    """

    __slots__ = ("_digraph",)

    def __init__(self, digraph: MapDigraph[V, Any]) -> None:
        self._digraph = digraph

    def __iter__(self) -> _VertexCursor[V]:
        return _VertexCursor(self._digraph)

    def __len__(self) -> int:
        return len(self._digraph._vertex_map)

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._digraph._vertex_map

    def __repr__(self) -> str:
        return f"[{', '.join(map(str, self._digraph._vertex_map))}]"


class TargetView[V](Collection[V]):
    """Live view of the out-neighbors of one source vertex.

    ``cursor.remove()`` removes the current edge exactly like
    ``MapDigraph.remove_edge``.
    """

    __slots__ = ("_digraph", "_source")

    def __init__(self, digraph: MapDigraph[V, Any], source: V) -> None:
        self._digraph = digraph
        self._source = source

    def _edges(self) -> Mapping[V, Any]:
        return self._digraph._vertex_map.get(self._source, EMPTY_EDGE_MAP)

    def __iter__(self) -> _TargetCursor[V]:
        return _TargetCursor(self._digraph, self._source)

    def __len__(self) -> int:
        return len(self._edges())

    def __contains__(self, target: object) -> bool:
        return target in self._edges()

    def __repr__(self) -> str:
        return f"[{', '.join(map(str, self._edges()))}]"


class MapDigraph[V, E](Digraph[V, E]):
    """Mutable digraph backed by a map of edge maps.

    Vertices are added automatically when they appear in an edge. Iteration
    order follows the backing maps: first insertion by default, or ascending
    key order for digraphs created with ``sorted_by``.

    Example:
        >>> g = MapDigraph()
        >>> g.put("a", "b", 1)
        >>> g.put("b", "c", 2)
        >>> g
        MapDigraph(a[b], b[c], c[])
        >>> g.edge_count()
        2

    """

    def __init__(
        self,
        vertex_map_factory: VertexMapFactory[V, E] | None = None,
        edge_map_factory: EdgeMapFactory[V, E] | None = None,
    ) -> None:
        self._vertex_map_factory: VertexMapFactory[V, E] = vertex_map_factory or _default_vertex_maps
        self._edge_map_factory: EdgeMapFactory[V, E] = edge_map_factory or _default_edge_maps
        self._vertex_map: MutableMapping[V, Mapping[V, E]] = self._vertex_map_factory()
        self._edge_count = 0
        # Cursors fail fast on these. The counter moves only when the vertex
        # key set changes; a source's stamp moves only when its targets change.
        self._vertex_modifications = 0
        self._edge_stamps: MutableMapping[V, int] = self.new_vertex_map()
        self._last_stamp = 0

    @classmethod
    def sorted_by(
        cls,
        key: Callable[[V], Any] | None = None,
        edge_key: Callable[[V], Any] | None = None,
    ) -> MapDigraph[V, E]:
        """Create a digraph whose vertices and targets iterate in sorted order.

        Args:
            key: Sort key for vertices. None means natural ordering.
            edge_key: Sort key for the targets of each vertex. Defaults to key.

        """
        return cls(
            vertex_map_factory(sort=True, key=key),
            edge_map_factory(sort=True, key=edge_key if edge_key is not None else key),
        )

    def _check_vertices(self, expected: int) -> None:
        if self._vertex_modifications != expected:
            msg = "digraph changed during iteration"
            raise RuntimeError(msg)

    def _check_targets(self, source: V, expected: int) -> None:
        if self._edge_stamp(source) != expected:
            msg = "digraph changed during iteration"
            raise RuntimeError(msg)

    def _edge_stamp(self, source: V) -> int:
        return self._edge_stamps.get(source, 0)

    def _touch(self, source: V) -> None:
        self._last_stamp += 1
        self._edge_stamps[source] = self._last_stamp

    def _detach(self, vertex: V) -> None:
        """Remove a present vertex, its own edges and every edge pointing to it."""
        edge_map = self._vertex_map.pop(vertex)
        self._edge_stamps.pop(vertex, None)
        self._edge_count -= len(edge_map)
        self._vertex_modifications += 1
        for source in self._vertex_map:
            self.remove_edge(source, vertex)
        logger.debug(f"Removed vertex {vertex!r}")

    def add(self, vertex: V) -> bool:
        if vertex in self._vertex_map:
            return False
        self._vertex_map[vertex] = EMPTY_EDGE_MAP
        self._vertex_modifications += 1
        return True

    def put(self, source: V, target: V, edge: E) -> E | None:
        edge_map = self._vertex_map.get(source)
        if not edge_map:
            if edge_map is None:
                self._vertex_modifications += 1
            # Never write into the shared empty placeholder
            edge_map = self._edge_map_factory(source)
            self._vertex_map[source] = edge_map
        edges = cast("MutableMapping[V, E]", edge_map)
        if target in edges:
            previous = edges[target]
            edges[target] = edge
            return previous
        edges[target] = edge
        self.add(target)
        self._edge_count += 1
        self._touch(source)
        return None

    def get(self, source: V, target: V, default: E | None = None) -> E | None:
        edge_map = self._vertex_map.get(source)
        if edge_map is None:
            return default
        return edge_map.get(target, default)

    def remove_edge(self, source: V, target: V) -> E | None:
        edge_map = self._vertex_map.get(source)
        if edge_map is None or target not in edge_map:
            return None
        previous = cast("MutableMapping[V, E]", edge_map).pop(target)
        self._edge_count -= 1
        self._touch(source)
        if not edge_map:
            self._vertex_map[source] = EMPTY_EDGE_MAP
        return previous

    def remove_vertex(self, vertex: V) -> bool:
        if vertex not in self._vertex_map:
            return False
        self._detach(vertex)
        return True

    def remove_all(self, vertices: Collection[V]) -> None:
        removed = 0
        for vertex in vertices:
            edge_map = self._vertex_map.pop(vertex, None)
            if edge_map is not None:
                self._edge_stamps.pop(vertex, None)
                self._edge_count -= len(edge_map)
                removed += 1
        if not removed:
            return
        self._vertex_modifications += 1
        # Edges never point outside the vertex map, so every target that is
        # no longer a vertex belongs to one of the removed vertices.
        for source, edge_map in self._vertex_map.items():
            dangling = [target for target in edge_map if target not in self._vertex_map]
            if not dangling:
                continue
            edges = cast("MutableMapping[V, E]", edge_map)
            for target in dangling:
                del edges[target]
            self._edge_count -= len(dangling)
            self._touch(source)
            if not edges:
                self._vertex_map[source] = EMPTY_EDGE_MAP
        logger.debug(f"Removed {removed} vertices in one pass")

    def contains_edge(self, source: V, target: V) -> bool:
        edge_map = self._vertex_map.get(source)
        if edge_map is None:
            return False
        return target in edge_map

    def contains(self, vertex: object) -> bool:
        return vertex in self._vertex_map

    def vertices(self) -> VertexView[V]:
        return VertexView(self)

    def targets(self, source: V) -> TargetView[V]:
        return TargetView(self, source)

    def vertex_count(self) -> int:
        return len(self._vertex_map)

    def out_degree(self, vertex: V) -> int:
        return len(self._vertex_map.get(vertex, EMPTY_EDGE_MAP))

    def edge_count(self) -> int:
        return self._edge_count

    def new_vertex_map[T](self) -> MutableMapping[V, T]:
        """Return an empty mapping ordered and keyed like this digraph's vertex map."""
        return cast("MutableMapping[V, T]", self._vertex_map_factory())

    def digraph_factory(self) -> DigraphFactory[MapDigraph[V, E]]:
        """Return a factory for empty digraphs sharing this digraph's map factories."""
        return partial(type(self), self._vertex_map_factory, self._edge_map_factory)

    def reverse(self) -> MapDigraph[V, E]:
        return _algorithms.reverse(self, self.digraph_factory())

    def subgraph(self, vertices: AbstractSet[V]) -> MapDigraph[V, E]:
        return _algorithms.subgraph(self, vertices, self.digraph_factory())

    def __repr__(self) -> str:
        parts: list[str] = []
        length = 0
        last = len(self._vertex_map) - 1
        for index, (vertex, edge_map) in enumerate(self._vertex_map.items()):
            part = f"{vertex}[{', '.join(map(str, edge_map))}]"
            parts.append(part)
            length += len(part) + 2
            if length > _REPR_LIMIT and index < last:
                parts.append("...")
                break
        return f"{type(self).__name__}({', '.join(parts)})"


_default_vertex_maps: VertexMapFactory[Any, Any] = vertex_map_factory()
_default_edge_maps: EdgeMapFactory[Any, Any] = edge_map_factory()
