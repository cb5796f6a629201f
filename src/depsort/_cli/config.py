"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path

from depsort._analysis import AnalyzerKind


class ConfigError(Exception):
    """Error in depsort configuration."""


@dataclass(slots=True, frozen=True)
class DepsortConfig:
    """Configuration loaded from the ``[tool.depsort]`` table of pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    strategy: AnalyzerKind | None = None
    graph: Path | None = None
    output: Path | None = None
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
            return None
        current = parent


def _parse_strategy(value: object) -> AnalyzerKind:
    if not isinstance(value, str):
        msg = "Invalid [tool.depsort].strategy: expected string"
        raise ConfigError(msg)
    try:
        return AnalyzerKind(value)
    except ValueError as e:
        choices = ", ".join(f"'{kind}'" for kind in AnalyzerKind)
        msg = f"Invalid [tool.depsort].strategy '{value}'. Expected one of: {choices}"
        raise ConfigError(msg) from e


def _parse_path(section: dict[str, object], key: str, project_root: Path) -> Path | None:
    if key not in section:
        return None
    value = section[key]
    if not isinstance(value, str):
        msg = f"Invalid [tool.depsort].{key}: expected string path"
        raise ConfigError(msg)
    path = Path(value)
    if not path.is_absolute():
        path = project_root / path
    return path


def load_config(pyproject_path: Path) -> DepsortConfig:
    """Load and validate [tool.depsort] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed DepsortConfig

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

    depsort_section = data.get("tool", {}).get("depsort", {})
    if not depsort_section:
        return DepsortConfig(project_root=project_root)

    if not isinstance(depsort_section, dict):
        msg = "Invalid [tool.depsort]: expected a table"
        raise ConfigError(msg)

    strategy: AnalyzerKind | None = None
    if "strategy" in depsort_section:
        strategy = _parse_strategy(depsort_section["strategy"])

    return DepsortConfig(
        strategy=strategy,
        graph=_parse_path(depsort_section, "graph", project_root),
        output=_parse_path(depsort_section, "output", project_root),
        project_root=project_root,
    )


def get_config() -> DepsortConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        DepsortConfig (may be empty if no pyproject.toml or no [tool.depsort] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return DepsortConfig()
    return load_config(pyproject_path)
