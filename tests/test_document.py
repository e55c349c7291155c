"""Tests for reading graph documents."""

from pathlib import Path

import pytest

from mapgraph import MapDigraph
from mapgraph._cli.document import (
    DocumentError,
    EdgeEntry,
    GraphDocument,
    build_digraph,
    load_graph_document,
)

DOCUMENT = """
vertices = ["lonely", "a"]

[[edges]]
source = "a"
target = "b"
payload = 1

[[edges]]
source = "b"
target = "c"

[[edges]]
source = "c"
target = "a"
payload = { weight = 2.5, label = "back" }
"""


@pytest.fixture
def document_path(tmp_path: Path) -> Path:
    path = tmp_path / "graph.toml"
    path.write_text(DOCUMENT)
    return path


class TestLoadGraphDocument:
    def test_loads_vertices_and_edges(self, document_path: Path) -> None:
        document = load_graph_document(document_path)

        assert document.vertices == ["lonely", "a"]
        assert document.edges[0] == EdgeEntry(source="a", target="b", payload=1)
        assert document.edges[1].payload is None
        assert document.edges[2].payload == {"weight": 2.5, "label": "back"}

    def test_empty_document(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.toml"
        path.write_text("")

        assert load_graph_document(path) == GraphDocument()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DocumentError, match="not found"):
            load_graph_document(tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.toml"
        path.write_text("[[edges]\n")

        with pytest.raises(DocumentError, match="Invalid TOML"):
            load_graph_document(path)

    def test_edge_without_target(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text('[[edges]]\nsource = "a"\n')

        with pytest.raises(DocumentError, match="Invalid graph document"):
            load_graph_document(path)

    def test_unknown_keys_are_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text('nodes = ["a"]\n')

        with pytest.raises(DocumentError, match="Invalid graph document"):
            load_graph_document(path)


class TestBuildDigraph:
    def test_builds_through_factory(self, document_path: Path) -> None:
        digraph = build_digraph(load_graph_document(document_path), MapDigraph)

        assert list(digraph.vertices()) == ["lonely", "a", "b", "c"]
        assert digraph.edge_count() == 3
        assert digraph.get("a", "b") == 1
        assert digraph.contains_edge("b", "c")
        assert digraph.get("b", "c") is None
        assert not digraph.is_acyclic()

    def test_sorted_factory(self, document_path: Path) -> None:
        digraph = build_digraph(load_graph_document(document_path), MapDigraph.sorted_by)

        assert list(digraph.vertices()) == ["a", "b", "c", "lonely"]

    def test_later_edge_replaces_payload(self) -> None:
        document = GraphDocument(
            edges=[
                EdgeEntry(source="a", target="b", payload=1),
                EdgeEntry(source="a", target="b", payload=2),
            ],
        )

        digraph = build_digraph(document, MapDigraph)

        assert digraph.edge_count() == 1
        assert digraph.get("a", "b") == 2
