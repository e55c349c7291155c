"""Structural algorithms over the digraph contract.

Every function here only uses the public ``Digraph`` operations, so it works
for any implementation and any backing-store ordering. Functions building a
new digraph take a factory for the result.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator, MutableMapping
    from collections.abc import Set as AbstractSet

    from ._digraph import Digraph, DigraphFactory

logger = logging.getLogger(__name__)

_ACTIVE = 1
_DONE = 2


def reverse[V, E, D: Digraph[Any, Any]](digraph: Digraph[V, E], factory: DigraphFactory[D]) -> D:
    """Build a digraph with the same vertices and every edge flipped.

    Args:
        digraph: The digraph to reverse. It is only read.
        factory: Creates the (empty) result digraph.

    Returns:
        A new digraph containing edge (t, s, e) for every edge (s, t, e).

    Example:
        >>> from mapgraph import MapDigraph
        >>> g = MapDigraph()
        >>> g.put("a", "b", 1)
        >>> reverse(g, MapDigraph)
        MapDigraph(a[], b[a])

    """
    result = factory()
    for source in digraph.vertices():
        result.add(source)
        for target in digraph.targets(source):
            result.put(target, source, digraph.get(source, target))
    return result


def subgraph[V, E, D: Digraph[Any, Any]](
    digraph: Digraph[V, E],
    vertices: AbstractSet[V],
    factory: DigraphFactory[D],
) -> D:
    """Build the subgraph induced by a set of vertices.

    Edges are kept only if both endpoints are in the vertex set. Vertices in
    the set that are not in the digraph are ignored. The result follows the
    source digraph's iteration order.

    Args:
        digraph: The digraph to extract from. It is only read.
        vertices: The vertices to keep.
        factory: Creates the (empty) result digraph.

    Returns:
        A new digraph containing only the specified vertices.

    """
    result = factory()
    for source in digraph.vertices():
        if source not in vertices:
            continue
        result.add(source)
        for target in digraph.targets(source):
            if target in vertices:
                result.put(source, target, digraph.get(source, target))
    return result


def is_acyclic(digraph: Digraph[Any, Any]) -> bool:
    """Check whether a digraph has no directed cycle.

    Depth-first search from every unvisited vertex. A vertex stays marked
    ``_ACTIVE`` while its descendants are explored; reaching an active
    vertex again is a back edge, i.e. a cycle. Self-loops are cycles.

    Marks live in ``digraph.new_vertex_map()``, so vertices of a key-ordered
    digraph need not be hashable.

    Returns:
        True if the digraph has no cycle, False otherwise.

    """
    marks: MutableMapping[Any, int] = digraph.new_vertex_map()
    for root in digraph.vertices():
        if root in marks:
            continue
        marks[root] = _ACTIVE
        stack: list[tuple[Any, Iterator[Any]]] = [(root, iter(digraph.targets(root)))]
        while stack:
            vertex, pending = stack[-1]
            for target in pending:
                mark = marks.get(target)
                if mark == _ACTIVE:
                    logger.debug(f"Back edge {vertex!r} -> {target!r} closes a cycle")
                    return False
                if mark is None:
                    marks[target] = _ACTIVE
                    stack.append((target, iter(digraph.targets(target))))
                    break
            else:
                marks[vertex] = _DONE
                stack.pop()
    return True


def topological_sort[V](digraph: Digraph[V, Any]) -> list[V]:
    """Sort the vertices so that every edge goes from earlier to later.

    Ties are broken by the digraph's own iteration order.

    Returns:
        List of all vertices in topological order.

    Raises:
        ValueError: If the digraph contains a cycle.

    Example:
        >>> from mapgraph import MapDigraph
        >>> g = MapDigraph().update([("a", "b", None), ("b", "c", None)])
        >>> topological_sort(g)
        ['a', 'b', 'c']

    """
    # Calculate in-degree for each vertex
    indegree: MutableMapping[V, int] = digraph.new_vertex_map()
    for vertex in digraph.vertices():
        indegree[vertex] = 0
    for source in digraph.vertices():
        for target in digraph.targets(source):
            indegree[target] += 1

    # Start with vertices that have no predecessors (in-degree 0)
    queue = deque([vertex for vertex, degree in indegree.items() if degree == 0])
    order: list[V] = []

    while queue:
        vertex = queue.popleft()
        order.append(vertex)
        for target in digraph.targets(vertex):
            indegree[target] -= 1
            if indegree[target] == 0:
                queue.append(target)

    if len(order) != len(indegree):
        msg = "Cycle detected in graph"
        raise ValueError(msg)

    return order


def is_equivalent(
    first: Digraph[Any, Any],
    second: Digraph[Any, Any],
    *,
    compare_edges: bool = True,
) -> bool:
    """Check whether two digraphs have the same vertices and edges.

    Iteration order is ignored, so digraphs with different backing stores
    can be equivalent.

    Args:
        first: A digraph.
        second: Another digraph.
        compare_edges: Also require equal payloads for every edge.

    """
    if first is second:
        return True
    if first.vertex_count() != second.vertex_count() or first.edge_count() != second.edge_count():
        return False
    for source in first.vertices():
        if not second.contains(source) or first.out_degree(source) != second.out_degree(source):
            return False
        for target in first.targets(source):
            if not second.contains_edge(source, target):
                return False
            if compare_edges and first.get(source, target) != second.get(source, target):
                return False
    return True
