"""Backing-store strategies for MapDigraph.

A digraph owns two levels of mappings: the vertex map (vertex -> edge map)
and one edge map per source vertex (target -> edge). Both are produced by
factories so the ordering strategy can be chosen per instance:

- insertion order: plain ``dict``
- key order: ``SortedMap``, ascending by a sort key
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Callable, Iterator, Mapping, MutableMapping
from types import MappingProxyType
from typing import Any, Protocol

# Shared edge map of every vertex without outgoing edges. Read-only.
EMPTY_EDGE_MAP: Mapping[Any, Any] = MappingProxyType({})


class VertexMapFactory[V, E](Protocol):
    """Creates the top-level vertex map of a digraph."""

    def __call__(self) -> MutableMapping[V, Mapping[V, E]]: ...


class EdgeMapFactory[V, E](Protocol):
    """Creates the edge map for one source vertex."""

    def __call__(self, source: V) -> MutableMapping[V, E]: ...


def _identity(value: Any) -> Any:
    return value


class SortedMap[K, V](MutableMapping[K, V]):
    """A mutable mapping iterated in ascending order of ``key(k)``.

    Keys that compare equivalent under the ordering (neither is less than
    the other) are treated as the same key, so keys need not be hashable.
    Lookups are O(log n); insertions and deletions are O(n).

    Example:
        >>> m = SortedMap(str.lower)
        >>> m["b"] = 2
        >>> m["A"] = 1
        >>> list(m)
        ['A', 'b']

    """

    __slots__ = ("_key", "_keys", "_values")

    def __init__(self, key: Callable[[K], Any] | None = None) -> None:
        self._key: Callable[[K], Any] = key if key is not None else _identity
        self._keys: list[K] = []
        self._values: list[V] = []

    def _locate(self, k: K) -> tuple[int, bool]:
        probe = self._key(k)
        index = bisect_left(self._keys, probe, key=self._key)
        found = index < len(self._keys) and not probe < self._key(self._keys[index])
        return index, found

    def __getitem__(self, k: K) -> V:
        index, found = self._locate(k)
        if not found:
            raise KeyError(k)
        return self._values[index]

    def __setitem__(self, k: K, value: V) -> None:
        index, found = self._locate(k)
        if found:
            self._values[index] = value
        else:
            self._keys.insert(index, k)
            self._values.insert(index, value)

    def __delitem__(self, k: K) -> None:
        index, found = self._locate(k)
        if not found:
            raise KeyError(k)
        del self._keys[index]
        del self._values[index]

    def __contains__(self, k: object) -> bool:
        return self._locate(k)[1]  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[K]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in zip(self._keys, self._values, strict=True))
        return f"SortedMap({{{items}}})"


def vertex_map_factory[V, E](
    *,
    sort: bool = False,
    key: Callable[[V], Any] | None = None,
) -> VertexMapFactory[V, E]:
    """Return a factory for vertex maps.

    Args:
        sort: Order vertices by ``key`` instead of by first insertion.
        key: Sort key for vertices. ``None`` means natural ordering.
            Ignored unless ``sort`` is true.

    """
    if not sort:
        return dict

    def create() -> MutableMapping[V, Mapping[V, E]]:
        return SortedMap(key)

    return create


def edge_map_factory[V, E](
    *,
    sort: bool = False,
    key: Callable[[V], Any] | None = None,
) -> EdgeMapFactory[V, E]:
    """Return a factory for per-source edge maps.

    Args:
        sort: Order targets by ``key`` instead of by first insertion.
        key: Sort key for target vertices. ``None`` means natural ordering.
            Ignored unless ``sort`` is true.

    """

    def create(source: V) -> MutableMapping[V, E]:  # noqa: ARG001
        if sort:
            return SortedMap(key)
        return {}

    return create
