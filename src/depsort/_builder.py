"""Key-based construction of dependency node graphs."""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import TYPE_CHECKING

from ._errors import SelfDependencyError, UnknownKeyError
from ._node import DependencyNode

if TYPE_CHECKING:
    from collections.abc import KeysView

logger = logging.getLogger(__name__)


class DependencyMap[K: Hashable, V]:
    """Builds ``DependencyNode`` graphs from keys instead of node instances.

    Values are registered per key with ``add``; relations are declared between
    keys in either direction and stored as "key depends on key". Nodes are only
    created by ``dependency_nodes`` / ``nodes_by_key``, and every call creates a
    fresh graph, so a graph consumed by ``GraphAnalyzer`` can be rebuilt.

    Example:
        >>> tasks = DependencyMap()
        >>> tasks.add("configure", "./configure")
        >>> tasks.add("compile", "make")
        >>> tasks.add_dependency("compile", "configure")
        >>> [node.value for node in tasks.dependency_nodes()]
        ['./configure', 'make']

    """

    def __init__(self) -> None:
        self._values: dict[K, V] = {}
        # key -> keys it depends on, insertion ordered
        self._dependencies: dict[K, dict[K, None]] = {}

    def add(self, key: K, value: V) -> None:
        """Register ``value`` under ``key``, replacing any previous value."""
        self._values[key] = value

    def add_dependency(self, key: K, dependency: K) -> None:
        """Declare that ``key`` depends on ``dependency``.

        Raises:
            SelfDependencyError: If both keys are equal.

        """
        if key == dependency:
            msg = f"Key {key!r} cannot depend on itself"
            raise SelfDependencyError(msg)
        self._dependencies.setdefault(key, {})[dependency] = None

    def add_dependent(self, key: K, dependent: K) -> None:
        """Declare that ``dependent`` depends on ``key``.

        Raises:
            SelfDependencyError: If both keys are equal.

        """
        self.add_dependency(dependent, key)

    def dependencies_of(self, key: K) -> list[K]:
        """Keys that ``key`` was declared to depend on."""
        return list(self._dependencies.get(key, {}))

    def keys(self) -> KeysView[K]:
        """Keys with a registered value, in registration order."""
        return self._values.keys()

    def nodes_by_key(self) -> dict[K, DependencyNode[V]]:
        """Create a new node per key and wire the declared relations.

        Returns:
            Mapping from key to its new node, in registration order.

        Raises:
            UnknownKeyError: If a relation references a key without a value.

        """
        nodes = {key: DependencyNode(value) for key, value in self._values.items()}

        edge_count = 0
        for key, dependencies in self._dependencies.items():
            if key not in nodes:
                raise UnknownKeyError(key)
            node = nodes[key]
            for dependency in dependencies:
                if dependency not in nodes:
                    raise UnknownKeyError(dependency)
                node.add_dependency(nodes[dependency])
                edge_count += 1

        logger.debug(f"Materialized {len(nodes)} node(s) with {edge_count} edge(s)")
        return nodes

    def dependency_nodes(self) -> list[DependencyNode[V]]:
        """Create a new node per key, in registration order, with relations wired."""
        return list(self.nodes_by_key().values())

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)
