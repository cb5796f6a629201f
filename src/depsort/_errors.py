"""Exception hierarchy for dependency analysis."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ._node import DependencyNode


class DependencyError(Exception):
    """Base class for all depsort errors."""


class SelfDependencyError(DependencyError, ValueError):
    """Raised when a node is made to depend on itself."""


class UnknownKeyError(DependencyError, KeyError):
    """Raised when a relation references a key that has no value."""

    def __init__(self, key: object) -> None:
        self.key = key
        super().__init__(f"Unknown key {key!r}: add a value for it before materializing nodes")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class CycleError(DependencyError):
    """Raised on request when an analysis could not order every node.

    The analyzers never raise this themselves; a cycle is a regular outcome.
    Call ``AnalysisResult.raise_for_cycle()`` to turn it into an exception.
    """

    def __init__(self, nodes: Sequence[DependencyNode]) -> None:
        self.nodes = list(nodes)
        super().__init__(f"Cycle detected: {len(self.nodes)} node(s) could not be ordered")
