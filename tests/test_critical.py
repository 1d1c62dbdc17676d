"""Tests for bridge and articulation point detection."""

import networkx as nx
import pytest

from netresilience.analysis import analyze_critical_structures, apply_analysis
from netresilience.core.exceptions import InvalidNodeReference
from netresilience.topology import (
    Graph,
    TopologyBuilder,
    count_components,
    to_networkx,
    toggle_edge,
)


def _linear(n: int) -> Graph:
    builder = TopologyBuilder()
    for i in range(n):
        builder.add_node(i, x=i, y=0)
    for i in range(n - 1):
        builder.add_link(i, i + 1)
    return builder.build()


class TestBasicShapes:
    """Test small graphs with known answers."""

    def test_path_graph(self, path_graph):
        """Test A-B-C: both links are bridges, B is the only articulation point."""
        result = analyze_critical_structures(path_graph)
        assert result.root == "A"
        assert result.bridge_keys() == {frozenset("AB"), frozenset("BC")}
        assert result.articulation_points == {"B"}

    def test_star_graph(self, star_graph):
        """Test the root case: the center has three DFS children."""
        result = analyze_critical_structures(star_graph)
        assert result.articulation_points == {"H"}
        assert len(result.bridges) == 3
        assert all("H" in pair for pair in result.bridge_keys())
        assert any("Root is an articulation point" in line for line in result.trace)

    def test_cycle_has_no_critical_structures(self, cycle_graph):
        """Test a cycle has no bridges and no articulation points."""
        result = analyze_critical_structures(cycle_graph)
        assert result.bridges == []
        assert result.articulation_points == set()
        assert any(line.startswith("Back edge") for line in result.trace)

    def test_empty_graph(self):
        """Test analysis of a graph without nodes."""
        result = analyze_critical_structures(Graph())
        assert result.root is None
        assert result.bridges == []
        assert result.trace == []

    def test_single_node(self):
        """Test one isolated node."""
        graph = TopologyBuilder().add_node("A").build()
        result = analyze_critical_structures(graph)
        assert result.articulation_points == set()
        assert result.trace == ["Visiting A"]

    def test_root_with_single_child_is_not_articulation_point(self, path_graph):
        """Test starting from an end of the path."""
        result = analyze_critical_structures(path_graph, start="C")
        assert "C" not in result.articulation_points
        assert result.articulation_points == {"B"}

    def test_unknown_start(self, path_graph):
        """Test an absent start node."""
        with pytest.raises(InvalidNodeReference):
            analyze_critical_structures(path_graph, start="Z")


class TestParallelLinks:
    """Test multigraph handling of the parent link."""

    def test_parallel_pair_is_not_a_bridge(self):
        """Test a doubled link: the second copy acts as a back edge."""
        graph = (
            TopologyBuilder()
            .add_node("A")
            .add_node("B")
            .add_node("C")
            .add_link("A", "B")
            .add_link("A", "B")
            .add_link("B", "C")
            .build()
        )
        result = analyze_critical_structures(graph)
        assert result.bridge_keys() == {frozenset("BC")}
        assert result.articulation_points == {"B"}

    def test_failed_parallel_copy_restores_bridge(self):
        """Test only active copies count."""
        graph = TopologyBuilder().add_node("A").add_node("B").add_link("A", "B").add_link("A", "B").build()
        assert analyze_critical_structures(graph).bridges == []

        broken = toggle_edge(graph, "A", "B")
        assert analyze_critical_structures(broken).bridge_keys() == {frozenset("AB")}


class TestTraversalScope:
    """Test behavior with failures and multiple components."""

    def test_only_start_component_is_analyzed(self):
        """Test nodes outside the start component are never visited."""
        graph = (
            TopologyBuilder()
            .add_node("A")
            .add_node("B")
            .add_node("X")
            .add_node("Y")
            .add_node("Z")
            .add_link("A", "B")
            .add_link("X", "Y")
            .add_link("Y", "Z")
            .build()
        )
        result = analyze_critical_structures(graph)
        assert result.bridge_keys() == {frozenset("AB")}
        assert result.articulation_points == set()
        assert not any("Y" in line for line in result.trace)

    def test_failed_link_ignored(self, cycle_graph):
        """Test a failed link turns the cycle into a path."""
        result = analyze_critical_structures(toggle_edge(cycle_graph, "D", "A"))
        assert len(result.bridges) == 3
        assert result.articulation_points == {"B", "C"}

    def test_deep_topology_without_recursion(self):
        """Test a chain longer than the default recursion limit."""
        graph = _linear(5000)
        result = analyze_critical_structures(graph)
        assert len(result.bridges) == 4999
        assert len(result.articulation_points) == 4998


class TestSampleTopology:
    """Test against NetworkX on the sample network."""

    def test_matches_networkx(self, sample):
        """Test bridges and articulation points agree with NetworkX."""
        result = analyze_critical_structures(sample)
        simple = nx.Graph(to_networkx(sample))
        assert result.bridge_keys() == {frozenset(b) for b in nx.bridges(simple)}
        assert result.articulation_points == set(nx.articulation_points(simple))

    def test_matches_networkx_with_failures(self, sample):
        """Test agreement after cutting the Mandaue loop."""
        broken = toggle_edge(sample, "5", "7")
        result = analyze_critical_structures(broken)
        simple = nx.Graph(to_networkx(broken))
        assert result.bridge_keys() == {frozenset(b) for b in nx.bridges(simple)}
        assert result.articulation_points == set(nx.articulation_points(simple))

    def test_removing_a_bridge_adds_one_component(self, sample):
        """Test each reported bridge splits exactly one component in two."""
        result = analyze_critical_structures(sample)
        before = count_components(sample)
        for u, v in result.bridges:
            assert count_components(toggle_edge(sample, u, v)) == before + 1

    def test_idempotent(self, sample):
        """Test repeated analysis gives the same answer."""
        first = analyze_critical_structures(sample)
        second = analyze_critical_structures(sample)
        assert first.bridge_keys() == second.bridge_keys()
        assert first.articulation_points == second.articulation_points
        assert first.trace == second.trace

    def test_trace_order(self, path_graph):
        """Test the trace records events in discovery order."""
        trace = analyze_critical_structures(path_graph).trace
        assert trace[0] == "Visiting A"
        assert trace.index("Exploring edge from A to B") < trace.index("Visiting B")
        assert trace.index("Found bridge: B - C") < trace.index("Found bridge: A - B")
        assert "Found articulation point: B" in trace


class TestApplyAnalysis:
    """Test annotating a graph copy with the results."""

    def test_annotations(self, path_graph):
        """Test flags are set on a copy."""
        result = analyze_critical_structures(path_graph)
        annotated = apply_analysis(path_graph, result)
        assert all(e.is_bridge for e in annotated.edges)
        assert [n.is_articulation_point for n in annotated.nodes] == [False, True, False]
        assert not any(e.is_bridge for e in path_graph.edges)

    def test_stale_annotations_cleared(self, cycle_graph):
        """Test previous flags do not survive a new run."""
        cycle_graph.edges[0].is_bridge = True
        cycle_graph.nodes[0].is_articulation_point = True
        annotated = apply_analysis(cycle_graph, analyze_critical_structures(cycle_graph))
        assert not any(e.is_bridge for e in annotated.edges)
        assert not any(n.is_articulation_point for n in annotated.nodes)
