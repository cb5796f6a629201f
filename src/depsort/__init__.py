"""Dependency ordering and circular dependency detection."""

__all__ = [
    "UNPLACED",
    "AnalysisResult",
    "Analyzer",
    "AnalyzerKind",
    "CycleError",
    "DependencyAnalyzer",
    "DependencyError",
    "DependencyMap",
    "DependencyNode",
    "GraphAnalyzer",
    "GraphDocument",
    "GraphFileError",
    "NodeEntry",
    "SelfDependencyError",
    "UnknownKeyError",
    "build_dependency_map",
    "create_analyzer",
    "export_report_to_toml",
    "load_graph_document",
    "parse_graph_document",
    "report_to_dict",
]

from ._analysis import (
    AnalysisResult,
    Analyzer,
    AnalyzerKind,
    DependencyAnalyzer,
    GraphAnalyzer,
    create_analyzer,
)
from ._builder import DependencyMap
from ._errors import CycleError, DependencyError, SelfDependencyError, UnknownKeyError
from ._io import (
    GraphDocument,
    GraphFileError,
    NodeEntry,
    build_dependency_map,
    export_report_to_toml,
    load_graph_document,
    parse_graph_document,
    report_to_dict,
)
from ._node import UNPLACED, DependencyNode
