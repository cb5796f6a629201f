"""Kahn's algorithm over an explicit FIFO queue, consuming the graph's edges."""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

from depsort._node import UNPLACED

from ._base import Analyzer
from ._result import AnalysisResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from depsort._node import DependencyNode

logger = logging.getLogger(__name__)


class GraphAnalyzer[T](Analyzer[T]):
    """Orders nodes by repeatedly removing nodes that have no dependencies left.

    Warning:
        Analysis is destructive. Once a node is output it is detached from all
        of its dependents, so after a run the input nodes have lost those
        edges. Analyzing the same nodes again treats every removed dependency
        as satisfied. Build a fresh graph (``DependencyMap.dependency_nodes``
        does) when the edges are still needed.

    The queue is processed in FIFO order, which hands out depths in
    non-decreasing order. A node becomes ready only once its last dependency
    has been removed, so its depth is one more than its deepest dependency.
    """

    def _run(self, nodes: list[DependencyNode[T]]) -> AnalysisResult[T]:
        depths: dict[DependencyNode[T], int] = dict.fromkeys(nodes, UNPLACED)
        ready: deque[DependencyNode[T]] = deque()

        for node in nodes:
            if not node.has_dependencies():
                depths[node] = 0
                ready.append(node)

        if nodes and not ready:
            logger.debug("No node is free of dependencies")
            return AnalysisResult(
                valid=False,
                cycle_nodes=tuple(nodes),
                maximum_depth=0,
                depths=depths,
            )

        ordered: list[DependencyNode[T]] = []
        indices: dict[DependencyNode[T], int] = {}
        while ready:
            node = ready.popleft()
            indices[node] = len(ordered)
            ordered.append(node)

            for dependent in node.clear_dependents():
                # Nodes outside the input are detached but never output
                if dependent not in depths:
                    continue
                if not dependent.has_dependencies():
                    depths[dependent] = depths[node] + 1
                    ready.append(dependent)

        maximum_depth = max((depths[node] for node in ordered), default=0)

        if len(ordered) != len(nodes):
            return AnalysisResult(
                valid=False,
                ordered_nodes=tuple(ordered),
                cycle_nodes=tuple(node for node in nodes if node not in indices),
                maximum_depth=maximum_depth,
                depths=depths,
                indices=indices,
            )

        return AnalysisResult(
            valid=True,
            ordered_nodes=tuple(ordered),
            maximum_depth=maximum_depth,
            depths=depths,
            indices=indices,
        )

    def depth_group_nodes(
        self,
        nodes: Sequence[DependencyNode[T]] | None = None,
    ) -> list[list[DependencyNode[T]]]:
        """Group nodes by depth, adding groups as deeper nodes are found.

        Only as many groups are created as the deepest grouped node needs.
        Unplaced nodes and nodes that were not part of the run are left out.

        Args:
            nodes: Nodes to group, defaults to the ordered output.

        Returns:
            A new list of groups.

        """
        if nodes is None:
            nodes = self._result.ordered_nodes

        groups: list[list[DependencyNode[T]]] = []
        for node in nodes:
            depth = self._result.depths.get(node, UNPLACED)
            if depth == UNPLACED:
                continue
            while len(groups) <= depth:
                groups.append([])
            groups[depth].append(node)
        return groups
