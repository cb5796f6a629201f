"""Reading graph documents from TOML and writing analysis reports."""

from __future__ import annotations

import logging
import tomllib
from datetime import date, datetime, time
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ._builder import DependencyMap
from ._errors import DependencyError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ._analysis import Analyzer

logger = logging.getLogger(__name__)


class GraphFileError(DependencyError):
    """A graph document could not be read or is malformed."""


# =============================================================================
# Graph Documents
# =============================================================================


class NodeEntry(BaseModel):
    """One ``[nodes.<key>]`` table of a graph document."""

    model_config = ConfigDict(extra="forbid")

    value: Any = None
    depends_on: list[str] = Field(default_factory=list)
    required_by: list[str] = Field(default_factory=list)


class GraphDocument(BaseModel):
    """A dependency graph declared in TOML.

    Example:
        A document where ``link`` runs after ``compile``::

            [nodes.compile]
            value = "cc -c main.c"

            [nodes.link]
            value = "cc main.o"
            depends_on = ["compile"]

    Nodes keep the order of their tables. ``value`` defaults to the key.

    """

    model_config = ConfigDict(extra="forbid")

    nodes: dict[str, NodeEntry] = Field(default_factory=dict)


def parse_graph_document(contents: Mapping[str, Any]) -> GraphDocument:
    """Validate parsed TOML contents as a graph document.

    Raises:
        GraphFileError: If the contents do not describe a graph.

    """
    try:
        return GraphDocument.model_validate(contents)
    except ValidationError as e:
        msg = f"Invalid graph document: {e}"
        raise GraphFileError(msg) from e


def load_graph_document(path: Path | str) -> GraphDocument:
    """Load a graph document from a TOML file.

    Raises:
        GraphFileError: If the file cannot be read, is not TOML, or is not a graph.

    """
    path = Path(path)
    try:
        with path.open("rb") as f:
            contents = tomllib.load(f)
    except OSError as e:
        msg = f"Cannot read graph file {path}: {e}"
        raise GraphFileError(msg) from e
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise GraphFileError(msg) from e

    document = parse_graph_document(contents)
    logger.debug(f"Loaded {len(document.nodes)} node(s) from {path}")
    return document


def build_dependency_map(document: GraphDocument) -> DependencyMap[str, Any]:
    """Declare every node and relation of ``document`` on a new ``DependencyMap``."""
    dependency_map: DependencyMap[str, Any] = DependencyMap()
    for key, entry in document.nodes.items():
        dependency_map.add(key, key if entry.value is None else entry.value)
    for key, entry in document.nodes.items():
        for dependency in entry.depends_on:
            dependency_map.add_dependency(key, dependency)
        for dependent in entry.required_by:
            dependency_map.add_dependent(key, dependent)
    return dependency_map


# =============================================================================
# Reports
# =============================================================================


_TOML_NATIVE = (str, int, float, bool, datetime, date, time)


def _serialize_value(value: Any) -> Any:
    """Convert a node value to something TOML can hold.

    Handles:
    - TOML-native scalars: returned as-is
    - Pydantic BaseModel: converted via model_dump()
    - dict: values serialized recursively, None entries dropped
    - list/tuple: items serialized recursively, None items dropped
    - Anything else (including a bare None): its ``str()``
    """
    if isinstance(value, _TOML_NATIVE):
        return value
    if isinstance(value, BaseModel):
        return _serialize_value(value.model_dump(mode="python"))
    if isinstance(value, dict):
        return {str(k): _serialize_value(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [_serialize_value(item) for item in value if item is not None]
    return str(value)


def report_to_dict(analyzer: Analyzer) -> dict[str, Any]:
    """Summarize the last run of ``analyzer`` as a TOML-ready dictionary.

    Returns:
        A dictionary with the structure:
        {
            "valid": bool,
            "maximum_depth": int,
            "order": [values...],
            "levels": [[values of depth 0], [values of depth 1], ...],
            "cycle": [values of unresolved nodes...],
        }

    """
    result = analyzer.result
    return {
        "valid": result.valid,
        "maximum_depth": result.maximum_depth,
        "order": [_serialize_value(value) for value in result.ordered_values],
        "levels": [[_serialize_value(value) for value in group] for group in analyzer.depth_groups()],
        "cycle": [_serialize_value(node.value) for node in result.cycle_nodes],
    }


def export_report_to_toml(analyzer: Analyzer, output_path: Path | str) -> None:
    """Write the report of the last run of ``analyzer`` to a TOML file."""
    output_path = Path(output_path)
    with output_path.open("wb") as f:
        tomli_w.dump(report_to_dict(analyzer), f)

    logger.debug(f"Exported report to {output_path}")
