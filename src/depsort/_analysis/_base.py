"""Common interface shared by the analysis strategies."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ._result import AnalysisResult

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from depsort._node import DependencyNode

logger = logging.getLogger(__name__)


class Analyzer[T](ABC):
    """Orders dependency nodes so every node follows all of its dependencies.

    Subclasses implement one strategy in ``_run``. This class owns the session
    state: every ``analyze`` call discards the previous result before running,
    and ``clear`` resets it explicitly.

    Example:
        >>> a, b = DependencyNode("a"), DependencyNode("b")
        >>> b.add_dependency(a)
        >>> analyzer = DependencyAnalyzer()
        >>> if analyzer.analyze([b, a]):
        ...     analyzer.ordered_values
        ['a', 'b']

    """

    def __init__(self) -> None:
        self._nodes: list[DependencyNode[T]] = []
        self._result: AnalysisResult[T] = AnalysisResult()

    def clear(self) -> None:
        """Discard the input and result of the last run."""
        self._nodes = []
        self._result = AnalysisResult()

    def analyze(self, nodes: Iterable[DependencyNode[T]]) -> AnalysisResult[T]:
        """Analyze ``nodes`` and order them by their dependencies.

        Nodes repeated in ``nodes`` are analyzed once, at their first position.
        Dependencies on nodes that are not part of ``nodes`` never resolve, so
        the depending nodes are reported with the cycle.

        Args:
            nodes: The nodes to order, in the order used to break ties.

        Returns:
            The analysis result, truthy if no circular dependency exists.

        """
        self.clear()
        node_list = list(dict.fromkeys(nodes))
        self._nodes = node_list

        logger.debug(f"{type(self).__name__}: analyzing {len(node_list)} node(s)")
        _warn_outside_dependencies(node_list)

        result = self._run(node_list)
        self._result = result

        if result.valid:
            logger.debug(
                f"{type(self).__name__}: ordered {len(result.ordered_nodes)} node(s), "
                f"maximum depth {result.maximum_depth}",
            )
        else:
            logger.warning(f"Circular dependency detected: {result.cycle_size} node(s) could not be ordered")
        return result

    @abstractmethod
    def _run(self, nodes: list[DependencyNode[T]]) -> AnalysisResult[T]:
        """Order ``nodes`` (already de-duplicated) and build the result."""

    @abstractmethod
    def depth_group_nodes(
        self,
        nodes: Sequence[DependencyNode[T]] | None = None,
    ) -> list[list[DependencyNode[T]]]:
        """Group nodes by depth; the n'th group holds the nodes of depth n.

        Args:
            nodes: Nodes to group, defaults to the ordered output.

        """

    def depth_groups(self, nodes: Sequence[DependencyNode[T]] | None = None) -> list[list[T | None]]:
        """Same as ``depth_group_nodes`` but with node values."""
        return [[node.value for node in group] for group in self.depth_group_nodes(nodes)]

    @property
    def result(self) -> AnalysisResult[T]:
        """The result of the last run."""
        return self._result

    @property
    def nodes(self) -> list[DependencyNode[T]]:
        """The nodes given to the last run."""
        return self._nodes

    @property
    def ordered_nodes(self) -> list[DependencyNode[T]]:
        return list(self._result.ordered_nodes)

    @property
    def ordered_values(self) -> list[T | None]:
        return self._result.ordered_values

    @property
    def cycle_nodes(self) -> list[DependencyNode[T]]:
        return list(self._result.cycle_nodes)

    @property
    def cycle_size(self) -> int:
        return self._result.cycle_size

    @property
    def maximum_depth(self) -> int:
        return self._result.maximum_depth

    def is_valid(self) -> bool:
        """Whether the last run ordered every node."""
        return self._result.valid

    def is_cyclic(self) -> bool:
        """Whether the last run found a circular dependency."""
        return not self._result.valid


def _warn_outside_dependencies[T](nodes: list[DependencyNode[T]]) -> None:
    members = set(nodes)
    for node in nodes:
        outside = [dependency for dependency in node.dependencies if dependency not in members]
        if outside:
            logger.warning(f"{node!r} depends on {len(outside)} node(s) outside the analyzed collection")
