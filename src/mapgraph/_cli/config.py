"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, get_args

type Ordering = Literal["insertion", "sorted"]

ORDERINGS: tuple[str, ...] = get_args(Ordering.__value__)


class ConfigError(Exception):
    """Error in mapgraph configuration."""


@dataclass(slots=True, frozen=True)
class MapgraphConfig:
    """Configuration loaded from pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    ordering: Ordering = "insertion"
    graph: Path | None = None
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def _parse_ordering(value: object) -> Ordering:
    if value not in ORDERINGS:
        msg = f"Invalid [tool.mapgraph].ordering {value!r}. Expected one of: {', '.join(ORDERINGS)}"
        raise ConfigError(msg)
    return value  # type: ignore[return-value]


def load_config(pyproject_path: Path) -> MapgraphConfig:
    """Load and validate [tool.mapgraph] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed MapgraphConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("mapgraph", {})

    if not section:
        # No [tool.mapgraph] section - return defaults
        return MapgraphConfig(project_root=project_root)

    ordering: Ordering = "insertion"
    if "ordering" in section:
        ordering = _parse_ordering(section["ordering"])

    graph_path: Path | None = None
    if "graph" in section:
        graph_value = section["graph"]
        if not isinstance(graph_value, str):
            msg = "Invalid [tool.mapgraph].graph: expected string path"
            raise ConfigError(msg)
        graph_path = Path(graph_value)
        if not graph_path.is_absolute():
            graph_path = project_root / graph_path

    return MapgraphConfig(ordering=ordering, graph=graph_path, project_root=project_root)


def get_config() -> MapgraphConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        MapgraphConfig (defaults if no pyproject.toml or no [tool.mapgraph] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return MapgraphConfig()
    return load_config(pyproject_path)
