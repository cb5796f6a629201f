"""Dependency analysis strategies.

Two strategies order the same ``DependencyNode`` graph behind one interface:

- DependencyAnalyzer: round-based depth propagation, leaves edges untouched
- GraphAnalyzer: Kahn's algorithm with a FIFO queue, consumes edges

Both return an ``AnalysisResult`` and share the accessors of ``Analyzer``.
"""

from enum import StrEnum

from ._base import Analyzer
from ._levels import DependencyAnalyzer
from ._queue import GraphAnalyzer
from ._result import AnalysisResult


class AnalyzerKind(StrEnum):
    """Available analysis strategies."""

    LEVELS = "levels"  # DependencyAnalyzer
    QUEUE = "queue"  # GraphAnalyzer


def create_analyzer(kind: AnalyzerKind | str = AnalyzerKind.LEVELS) -> Analyzer:
    """Create an analyzer for the given strategy.

    Raises:
        ValueError: If ``kind`` is not a known strategy.

    """
    match AnalyzerKind(kind):
        case AnalyzerKind.LEVELS:
            return DependencyAnalyzer()
        case AnalyzerKind.QUEUE:
            return GraphAnalyzer()


__all__ = [
    "AnalysisResult",
    "Analyzer",
    "AnalyzerKind",
    "DependencyAnalyzer",
    "GraphAnalyzer",
    "create_analyzer",
]
