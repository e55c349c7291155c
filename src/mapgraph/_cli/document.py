"""Graph documents: TOML edge lists read by the CLI.

A document lists optional isolated vertices and a table per edge:

    vertices = ["lonely"]

    [[edges]]
    source = "a"
    target = "b"
    payload = 1

Documents are only ever read; the digraph is populated through the public
``add``/``put`` operations of a digraph created by a factory.
"""

from __future__ import annotations

import logging
import tomllib
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, ValidationError

if TYPE_CHECKING:
    from pathlib import Path

    from mapgraph import Digraph, DigraphFactory

logger = logging.getLogger(__name__)


class DocumentError(Exception):
    """Raised when a graph document cannot be read or is invalid."""


class EdgeEntry(BaseModel):
    """One edge of a graph document."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: str
    target: str
    payload: Any = None


class GraphDocument(BaseModel):
    """Vertices and edges of a graph document."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    vertices: list[str] = []
    edges: list[EdgeEntry] = []


def load_graph_document(path: Path) -> GraphDocument:
    """Read and validate a graph document.

    Args:
        path: Path to the TOML document.

    Returns:
        The validated GraphDocument.

    Raises:
        DocumentError: If the file is missing, is not valid TOML, or does not
            match the document layout.

    """
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError as e:
        msg = f"Graph document not found: {path}"
        raise DocumentError(msg) from e
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise DocumentError(msg) from e

    try:
        document = GraphDocument.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid graph document {path}: {e}"
        raise DocumentError(msg) from e

    logger.debug(f"Loaded {len(document.vertices)} vertices and {len(document.edges)} edges from {path}")
    return document


def build_digraph[D: Digraph[Any, Any]](document: GraphDocument, factory: DigraphFactory[D]) -> D:
    """Populate a new digraph from a document.

    Listed vertices are added first, in document order, then every edge is
    put. A later edge with the same source and target replaces the payload
    of an earlier one.
    """
    digraph = factory()
    for vertex in document.vertices:
        digraph.add(vertex)
    for entry in document.edges:
        digraph.put(entry.source, entry.target, entry.payload)
    return digraph
