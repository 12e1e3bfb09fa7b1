"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from enum import StrEnum, auto
from pathlib import Path


class ConfigError(Exception):
    """Error in toposorter configuration."""


class OutputFormat(StrEnum):
    """How the sorted order is written."""

    TEXT = auto()
    JSON = auto()
    TOML = auto()


@dataclass(slots=True, frozen=True)
class ToposorterConfig:
    """Configuration loaded from pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    graph: Path | None = None
    format: OutputFormat | None = None
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


def _parse_format(value: object) -> OutputFormat:
    if not isinstance(value, str):
        msg = "Invalid [tool.toposorter].format: expected string"
        raise ConfigError(msg)
    try:
        return OutputFormat(value.lower())
    except ValueError:
        choices = ", ".join(f"'{f}'" for f in OutputFormat)
        msg = f"Invalid [tool.toposorter].format '{value}'. Expected one of: {choices}"
        raise ConfigError(msg) from None


def load_config(pyproject_path: Path) -> ToposorterConfig:
    """Load and validate [tool.toposorter] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed ToposorterConfig

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

    tool_section = data.get("tool", {})
    if not isinstance(tool_section, dict):
        msg = "Invalid [tool]: expected a table"
        raise ConfigError(msg)

    section = tool_section.get("toposorter", {})
    if not isinstance(section, dict):
        msg = "Invalid [tool.toposorter]: expected a table"
        raise ConfigError(msg)

    if not section:
        return ToposorterConfig(project_root=project_root)

    graph_path: Path | None = None
    if "graph" in section:
        graph_value = section["graph"]
        if not isinstance(graph_value, str):
            msg = "Invalid [tool.toposorter].graph: expected string path"
            raise ConfigError(msg)
        graph_path = Path(graph_value)
        if not graph_path.is_absolute():
            graph_path = project_root / graph_path

    output_format: OutputFormat | None = None
    if "format" in section:
        output_format = _parse_format(section["format"])

    return ToposorterConfig(
        graph=graph_path,
        format=output_format,
        project_root=project_root,
    )


def get_config(start_dir: Path | None = None) -> ToposorterConfig:
    """Get config from pyproject.toml in start_dir (default: current directory) or its parents.

    Returns:
        ToposorterConfig (may be empty if no pyproject.toml or no [tool.toposorter] section)

    """
    pyproject_path = find_pyproject_toml(start_dir)
    if pyproject_path is None:
        return ToposorterConfig()
    return load_config(pyproject_path)
