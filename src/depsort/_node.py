"""Dependency node with mirrored dependency/dependent edges."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Set

from ._errors import SelfDependencyError

UNPLACED = -1
"""Depth reported for a node that the analysis could not place."""


class _NodeView[T](Set["DependencyNode[T]"]):
    """Read-only, insertion-ordered view over one edge direction of a node."""

    __slots__ = ("_edges",)

    def __init__(self, edges: dict[DependencyNode[T], None]) -> None:
        self._edges = edges

    @classmethod
    def _from_iterable(cls, it: Iterable[DependencyNode[T]]) -> _NodeView[T]:
        # Results of &, |, - and ^ get their own edge dict
        return cls(dict.fromkeys(it))

    def __contains__(self, node: object) -> bool:
        return node in self._edges

    def __iter__(self) -> Iterator[DependencyNode[T]]:
        return iter(self._edges)

    def __len__(self) -> int:
        return len(self._edges)

    def __repr__(self) -> str:
        return f"{{{', '.join(repr(n) for n in self._edges)}}}"


class DependencyNode[T]:
    """A value together with the nodes it depends on and the nodes depending on it.

    Edges are always mirrored: if ``a`` is in ``b.dependencies`` then ``b`` is
    in ``a.dependents``, and every mutation keeps both sides in sync.

    Nodes compare and hash by identity. Two nodes wrapping equal values are
    different nodes, so the caller decides whether values must be unique.

    Edge sets keep insertion order, which makes the analyzers deterministic for
    a fixed construction order.

    Attributes:
        value: The wrapped value, ``None`` for an empty node.

    Example:
        >>> compile_ = DependencyNode("compile")
        >>> link = DependencyNode("link")
        >>> link.add_dependency(compile_)
        >>> link in compile_.dependents
        True

    """

    __slots__ = ("_dependencies", "_dependents", "value")

    def __init__(self, value: T | None = None) -> None:
        self.value = value
        # dicts used as ordered sets
        self._dependencies: dict[DependencyNode[T], None] = {}
        self._dependents: dict[DependencyNode[T], None] = {}

    def __repr__(self) -> str:
        return f"DependencyNode({self.value!r})"

    @property
    def dependencies(self) -> Set[DependencyNode[T]]:
        """Nodes this node requires."""
        return _NodeView(self._dependencies)

    @property
    def dependents(self) -> Set[DependencyNode[T]]:
        """Nodes that require this node."""
        return _NodeView(self._dependents)

    def add_dependency(self, dependency: DependencyNode[T]) -> None:
        """Make this node depend on ``dependency``.

        Raises:
            SelfDependencyError: If ``dependency`` is this node.

        """
        if dependency is self:
            msg = f"{self!r} cannot depend on itself"
            raise SelfDependencyError(msg)
        self._dependencies[dependency] = None
        dependency._dependents[self] = None

    def add_dependent(self, dependent: DependencyNode[T]) -> None:
        """Make ``dependent`` depend on this node.

        Raises:
            SelfDependencyError: If ``dependent`` is this node.

        """
        if dependent is self:
            msg = f"{self!r} cannot depend on itself"
            raise SelfDependencyError(msg)
        self._dependents[dependent] = None
        dependent._dependencies[self] = None

    def remove_dependency(self, dependency: DependencyNode[T]) -> None:
        """Remove ``dependency`` and its mirrored edge. No-op if absent."""
        self._dependencies.pop(dependency, None)
        dependency._dependents.pop(self, None)

    def remove_dependent(self, dependent: DependencyNode[T]) -> None:
        """Remove ``dependent`` and its mirrored edge. No-op if absent."""
        self._dependents.pop(dependent, None)
        dependent._dependencies.pop(self, None)

    def clear_dependents(self) -> list[DependencyNode[T]]:
        """Detach this node from every dependent.

        Returns:
            The dependents that were detached, in the order they were added.

        """
        detached = list(self._dependents)
        for dependent in detached:
            dependent.remove_dependency(self)
        return detached

    def clear_dependencies(self) -> list[DependencyNode[T]]:
        """Detach this node from every dependency.

        Returns:
            The dependencies that were detached, in the order they were added.

        """
        detached = list(self._dependencies)
        for dependency in detached:
            dependency.remove_dependent(self)
        return detached

    def has_dependencies(self) -> bool:
        return bool(self._dependencies)

    def has_dependents(self) -> bool:
        return bool(self._dependents)
