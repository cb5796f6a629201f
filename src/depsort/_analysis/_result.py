"""Immutable outcome of a dependency analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from depsort._errors import CycleError
from depsort._node import UNPLACED

if TYPE_CHECKING:
    from collections.abc import Mapping

    from depsort._node import DependencyNode


@dataclass(frozen=True, slots=True)
class AnalysisResult[T]:
    """Result of ordering a collection of dependency nodes.

    Exactly one of two outcomes holds after a run: ``valid`` is True and
    ``ordered_nodes`` covers every input node, or ``valid`` is False and
    ``cycle_nodes`` holds the nodes that could not be ordered. The latter may
    include nodes that are not on a cycle themselves but depend on one.

    The result is truthy when valid, so it can stand in for the boolean
    returned by ``analyze``.

    Attributes:
        valid: Whether every input node was ordered.
        ordered_nodes: Placed nodes; each depends only on nodes before it.
        cycle_nodes: Input nodes that could not be placed.
        maximum_depth: Largest depth assigned to a placed node.
        depths: Depth of every input node, ``UNPLACED`` for unresolved ones.
        indices: Position of every placed node in ``ordered_nodes``.

    """

    valid: bool = False
    ordered_nodes: tuple[DependencyNode[T], ...] = ()
    cycle_nodes: tuple[DependencyNode[T], ...] = ()
    maximum_depth: int = UNPLACED
    depths: Mapping[DependencyNode[T], int] = field(default_factory=dict)
    indices: Mapping[DependencyNode[T], int] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.valid

    def __len__(self) -> int:
        return len(self.ordered_nodes)

    @property
    def ordered_values(self) -> list[T | None]:
        """Values of ``ordered_nodes``, index for index."""
        return [node.value for node in self.ordered_nodes]

    @property
    def cycle_size(self) -> int:
        return len(self.cycle_nodes)

    @property
    def is_cyclic(self) -> bool:
        return not self.valid

    def depth_of(self, node: DependencyNode[T]) -> int:
        """Get the depth assigned to ``node``.

        Raises:
            KeyError: If ``node`` was not part of the analyzed input.

        """
        return self.depths[node]

    def index_of(self, node: DependencyNode[T]) -> int:
        """Get the position of ``node`` in ``ordered_nodes``.

        Raises:
            KeyError: If ``node`` was not placed.

        """
        return self.indices[node]

    def raise_for_cycle(self) -> None:
        """Raise ``CycleError`` if the analysis left nodes unresolved."""
        if not self.valid:
            raise CycleError(self.cycle_nodes)
