"""Round-based depth propagation that leaves the input graph untouched."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from depsort._node import UNPLACED

from ._base import Analyzer
from ._result import AnalysisResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from depsort._node import DependencyNode

logger = logging.getLogger(__name__)


class DependencyAnalyzer[T](Analyzer[T]):
    """Sorts nodes into dependency levels without modifying them.

    Nodes without dependencies are placed first at depth 0, in input order.
    Each following round scans the remaining nodes in order and places every
    node whose dependencies were all placed in earlier rounds, at one more than
    the deepest of them. Nodes placed in the same round keep their scan order.
    A round that places nothing ends the run: the nodes left over are reported
    as the cycle.

    Round ``n`` places exactly the nodes of depth ``n``, so the ordered output
    is sorted by depth and ``levels()`` concatenated gives it back. Level ``n``
    depends only on levels below ``n`` and can be processed as a batch once the
    previous ones are done.

    Running the analyzer twice on the same graph gives the same result.
    """

    def _run(self, nodes: list[DependencyNode[T]]) -> AnalysisResult[T]:
        depths: dict[DependencyNode[T], int] = {}
        indices: dict[DependencyNode[T], int] = {}
        ordered: list[DependencyNode[T]] = []
        remainder: list[DependencyNode[T]] = []
        maximum_depth = 0

        def place(node: DependencyNode[T], depth: int) -> None:
            depths[node] = depth
            indices[node] = len(ordered)
            ordered.append(node)

        for node in nodes:
            if node.has_dependencies():
                depths[node] = UNPLACED
                remainder.append(node)
            else:
                place(node, 0)

        # Every node waits on another one: the whole input is circular
        if nodes and not ordered:
            logger.debug("No node is free of dependencies")
            return AnalysisResult(
                valid=False,
                cycle_nodes=tuple(remainder),
                maximum_depth=maximum_depth,
                depths=depths,
            )

        rounds = 0
        while remainder:
            rounds += 1
            ready: list[DependencyNode[T]] = []
            waiting: list[DependencyNode[T]] = []

            # Readiness only sees nodes placed in earlier rounds
            for node in remainder:
                if all(depths.get(dependency, UNPLACED) != UNPLACED for dependency in node.dependencies):
                    ready.append(node)
                else:
                    waiting.append(node)

            if not ready:
                logger.debug(f"Round {rounds} placed no node, {len(waiting)} node(s) remain")
                return AnalysisResult(
                    valid=False,
                    ordered_nodes=tuple(ordered),
                    cycle_nodes=tuple(waiting),
                    maximum_depth=maximum_depth,
                    depths=depths,
                    indices=indices,
                )

            for node in ready:
                depth = max(depths[dependency] for dependency in node.dependencies) + 1
                place(node, depth)
                maximum_depth = max(maximum_depth, depth)

            remainder = waiting

        logger.debug(f"Placed all nodes in {rounds} round(s)")
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
        """Group nodes into one level per depth, 0 to ``maximum_depth`` inclusive.

        A level exists even when no node has its depth. Unplaced nodes and
        nodes that were not part of the run are left out.

        Args:
            nodes: Nodes to group, defaults to the ordered output.

        Returns:
            A new list of levels.

        """
        if nodes is None:
            nodes = self._result.ordered_nodes

        levels: list[list[DependencyNode[T]]] = [[] for _ in range(self._result.maximum_depth + 1)]
        for node in nodes:
            depth = self._result.depths.get(node, UNPLACED)
            if depth != UNPLACED:
                levels[depth].append(node)
        return levels

    def level_nodes(self) -> list[list[DependencyNode[T]]]:
        """Nodes of the ordered output, one list per depth."""
        return self.depth_group_nodes()

    def levels(self) -> list[list[T | None]]:
        """Values of the ordered output, one list per depth."""
        return self.depth_groups()
