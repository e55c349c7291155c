"""Mutable directed graphs backed by maps of edge maps."""

__all__ = [
    "EMPTY_EDGE_MAP",
    "Digraph",
    "DigraphAdapter",
    "DigraphFactory",
    "EdgeMapFactory",
    "MapDigraph",
    "ReadOnlyDigraphError",
    "SortedMap",
    "TargetView",
    "UnmodifiableDigraph",
    "VertexMapFactory",
    "VertexView",
    "edge_map_factory",
    "is_acyclic",
    "is_equivalent",
    "reverse",
    "subgraph",
    "topological_sort",
    "unmodifiable",
    "vertex_map_factory",
]

from ._adapter import DigraphAdapter, UnmodifiableDigraph, unmodifiable
from ._algorithms import is_acyclic, is_equivalent, reverse, subgraph, topological_sort
from ._digraph import Digraph, DigraphFactory, ReadOnlyDigraphError
from ._map_digraph import MapDigraph, TargetView, VertexView
from ._maps import EMPTY_EDGE_MAP, EdgeMapFactory, SortedMap, VertexMapFactory, edge_map_factory, vertex_map_factory
