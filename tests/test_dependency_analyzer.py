"""Tests for the array-based DependencyAnalyzer."""

import pytest

from depsort import UNPLACED, AnalysisResult, CycleError, DependencyAnalyzer, DependencyNode


def make_nodes(count: int = 5) -> list[DependencyNode[str]]:
    return [DependencyNode(f"value{i}") for i in range(count)]


@pytest.fixture
def diamond() -> list[DependencyNode[str]]:
    """0 -> 1, 2 -> 0, 1 -> 3, 1 -> 4 (arrow = depends on)."""
    nodes = make_nodes()
    nodes[0].add_dependency(nodes[1])
    nodes[2].add_dependency(nodes[0])
    nodes[1].add_dependency(nodes[3])
    nodes[1].add_dependency(nodes[4])
    return nodes


class TestValidGraphs:
    """Tests for graphs without cycles."""

    def test_diamond_order(self, diamond: list[DependencyNode[str]]) -> None:
        analyzer: DependencyAnalyzer[str] = DependencyAnalyzer()
        assert analyzer.analyze(diamond)

        assert analyzer.is_valid()
        assert not analyzer.is_cyclic()
        v0, v1, v2, v3, v4 = diamond
        assert analyzer.ordered_nodes == [v3, v4, v1, v0, v2]
        assert analyzer.ordered_values == ["value3", "value4", "value1", "value0", "value2"]

    def test_diamond_depths_and_indices(self, diamond: list[DependencyNode[str]]) -> None:
        result = DependencyAnalyzer().analyze(diamond)
        v0, v1, v2, v3, v4 = diamond

        assert [result.depth_of(n) for n in (v0, v1, v2, v3, v4)] == [2, 1, 3, 0, 0]
        assert [result.index_of(n) for n in (v3, v4, v1, v0, v2)] == [0, 1, 2, 3, 4]
        assert result.maximum_depth == 3
        assert result.cycle_size == 0
        assert result.cycle_nodes == ()

    def test_diamond_levels(self, diamond: list[DependencyNode[str]]) -> None:
        analyzer: DependencyAnalyzer[str] = DependencyAnalyzer()
        analyzer.analyze(diamond)
        v0, v1, v2, v3, v4 = diamond

        assert analyzer.level_nodes() == [[v3, v4], [v1], [v0], [v2]]
        assert analyzer.levels() == [["value3", "value4"], ["value1"], ["value0"], ["value2"]]

    def test_no_dependencies_keeps_input_order(self) -> None:
        nodes = make_nodes()
        analyzer: DependencyAnalyzer[str] = DependencyAnalyzer()
        analyzer.analyze(reversed(nodes))

        assert analyzer.ordered_nodes == list(reversed(nodes))
        assert analyzer.maximum_depth == 0
        assert analyzer.levels() == [[f"value{i}" for i in reversed(range(5))]]

    def test_same_round_keeps_scan_order(self) -> None:
        root, b, c, d = DependencyNode("root"), DependencyNode("b"), DependencyNode("c"), DependencyNode("d")
        for node in (b, c, d):
            node.add_dependency(root)

        analyzer: DependencyAnalyzer[str] = DependencyAnalyzer()
        analyzer.analyze([d, root, b, c])

        assert analyzer.ordered_values == ["root", "d", "b", "c"]

    def test_ordering_is_sorted_by_depth(self) -> None:
        # p depends on r, q depends on p, s depends on r; q is scanned before s
        r, p, q, s = DependencyNode("r"), DependencyNode("p"), DependencyNode("q"), DependencyNode("s")
        p.add_dependency(r)
        q.add_dependency(p)
        s.add_dependency(r)

        analyzer: DependencyAnalyzer[str] = DependencyAnalyzer()
        analyzer.analyze([r, p, q, s])

        assert analyzer.ordered_values == ["r", "p", "s", "q"]
        assert analyzer.levels() == [["r"], ["p", "s"], ["q"]]

    def test_depth_uses_deepest_dependency(self) -> None:
        a, b, c, d = DependencyNode("a"), DependencyNode("b"), DependencyNode("c"), DependencyNode("d")
        b.add_dependency(a)
        c.add_dependency(b)
        d.add_dependency(a)
        d.add_dependency(c)

        result = DependencyAnalyzer().analyze([d, c, b, a])

        assert result.depth_of(d) == 3
        assert result.ordered_values == ["a", "b", "c", "d"]

    def test_empty_input(self) -> None:
        analyzer: DependencyAnalyzer[str] = DependencyAnalyzer()
        result = analyzer.analyze([])

        assert result.valid
        assert result.ordered_nodes == ()
        assert result.maximum_depth == 0
        assert analyzer.cycle_size == 0
        assert analyzer.levels() == [[]]

    def test_levels_exist_for_every_depth(self, diamond: list[DependencyNode[str]]) -> None:
        analyzer: DependencyAnalyzer[str] = DependencyAnalyzer()
        analyzer.analyze(diamond)
        v0, v1, v2, v3, v4 = diamond

        # Grouping an explicit subset keeps the empty levels in between
        assert analyzer.depth_group_nodes([v2, v3]) == [[v3], [], [], [v2]]

    def test_grouping_skips_nodes_outside_the_run(self, diamond: list[DependencyNode[str]]) -> None:
        analyzer: DependencyAnalyzer[str] = DependencyAnalyzer()
        analyzer.analyze(diamond)
        stranger = DependencyNode("stranger")
        v3 = diamond[3]

        assert analyzer.depth_group_nodes([stranger, v3]) == [[v3], [], [], []]


class TestCyclicGraphs:
    """Tests for graphs with circular dependencies."""

    def test_wholly_circular(self) -> None:
        nodes = make_nodes()
        for i in range(5):
            nodes[i].add_dependency(nodes[(i + 1) % 5])

        analyzer: DependencyAnalyzer[str] = DependencyAnalyzer()
        result = analyzer.analyze(nodes)

        assert not result
        assert analyzer.is_cyclic()
        assert analyzer.cycle_nodes == nodes
        assert analyzer.cycle_size == 5
        assert analyzer.ordered_nodes == []
        assert all(result.depth_of(n) == UNPLACED for n in nodes)

    def test_interdependent_pair(self) -> None:
        nodes = make_nodes()
        nodes[0].add_dependency(nodes[1])
        nodes[1].add_dependency(nodes[0])

        analyzer: DependencyAnalyzer[str] = DependencyAnalyzer()
        result = analyzer.analyze(nodes)

        assert not result.valid
        assert analyzer.cycle_nodes == [nodes[0], nodes[1]]
        assert analyzer.ordered_nodes == nodes[2:]

    def test_partial_cycle_reports_dangling_dependent(self) -> None:
        nodes = make_nodes()
        nodes[0].add_dependency(nodes[1])
        nodes[1].add_dependency(nodes[2])
        nodes[2].add_dependency(nodes[0])
        nodes[3].add_dependency(nodes[1])

        analyzer: DependencyAnalyzer[str] = DependencyAnalyzer()
        result = analyzer.analyze(nodes)

        assert not result.valid
        assert analyzer.cycle_nodes == nodes[:4]
        assert analyzer.ordered_nodes == [nodes[4]]

    def test_cycle_after_placed_levels(self) -> None:
        a, b, c, d = DependencyNode("a"), DependencyNode("b"), DependencyNode("c"), DependencyNode("d")
        b.add_dependency(a)
        c.add_dependency(b)
        c.add_dependency(d)
        d.add_dependency(c)

        analyzer: DependencyAnalyzer[str] = DependencyAnalyzer()
        result = analyzer.analyze([a, b, c, d])

        assert not result.valid
        assert analyzer.ordered_values == ["a", "b"]
        assert analyzer.cycle_nodes == [c, d]
        assert analyzer.maximum_depth == 1
        assert analyzer.levels() == [["a"], ["b"]]

    def test_raise_for_cycle(self) -> None:
        a, b = DependencyNode("a"), DependencyNode("b")
        a.add_dependency(b)
        b.add_dependency(a)

        result = DependencyAnalyzer().analyze([a, b])

        with pytest.raises(CycleError, match="2 node") as exc_info:
            result.raise_for_cycle()
        assert exc_info.value.nodes == [a, b]

    def test_dependency_outside_input_never_resolves(self) -> None:
        inside, outside = DependencyNode("inside"), DependencyNode("outside")
        inside.add_dependency(outside)
        free = DependencyNode("free")

        analyzer: DependencyAnalyzer[str] = DependencyAnalyzer()
        result = analyzer.analyze([free, inside])

        assert not result.valid
        assert analyzer.cycle_nodes == [inside]


class TestSessionState:
    """Tests for resetting and re-running the analyzer."""

    def test_initial_state(self) -> None:
        analyzer: DependencyAnalyzer[str] = DependencyAnalyzer()
        assert not analyzer.is_valid()
        assert analyzer.ordered_nodes == []
        assert analyzer.maximum_depth == UNPLACED
        assert analyzer.levels() == []

    def test_analyze_is_idempotent(self, diamond: list[DependencyNode[str]]) -> None:
        analyzer: DependencyAnalyzer[str] = DependencyAnalyzer()
        first = analyzer.analyze(diamond)
        second = analyzer.analyze(diamond)

        assert first.ordered_nodes == second.ordered_nodes
        assert dict(first.depths) == dict(second.depths)
        assert dict(first.indices) == dict(second.indices)

    def test_analyze_leaves_edges_untouched(self, diamond: list[DependencyNode[str]]) -> None:
        edges_before = [list(n.dependencies) for n in diamond]
        DependencyAnalyzer().analyze(diamond)
        assert [list(n.dependencies) for n in diamond] == edges_before

    def test_new_run_discards_previous_result(self) -> None:
        a, b = DependencyNode("a"), DependencyNode("b")
        a.add_dependency(b)
        b.add_dependency(a)

        analyzer: DependencyAnalyzer[str] = DependencyAnalyzer()
        analyzer.analyze([a, b])
        assert analyzer.cycle_size == 2

        c = DependencyNode("c")
        analyzer.analyze([c])
        assert analyzer.is_valid()
        assert analyzer.cycle_nodes == []
        assert analyzer.ordered_nodes == [c]
        assert analyzer.nodes == [c]

    def test_clear(self, diamond: list[DependencyNode[str]]) -> None:
        analyzer: DependencyAnalyzer[str] = DependencyAnalyzer()
        analyzer.analyze(diamond)
        analyzer.clear()

        assert analyzer.result == AnalysisResult()
        assert analyzer.nodes == []
        assert not analyzer.is_valid()

    def test_duplicate_input_nodes_are_analyzed_once(self) -> None:
        a, b = DependencyNode("a"), DependencyNode("b")
        b.add_dependency(a)

        analyzer: DependencyAnalyzer[str] = DependencyAnalyzer()
        result = analyzer.analyze([b, a, b, a])

        assert result.valid
        assert analyzer.ordered_nodes == [a, b]
        assert analyzer.nodes == [b, a]

    def test_accepts_any_iterable(self) -> None:
        nodes = make_nodes(3)
        result = DependencyAnalyzer().analyze(n for n in nodes)
        assert result.ordered_nodes == tuple(nodes)
