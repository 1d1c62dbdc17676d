"""Tests for shortest path search."""

import pytest

from netresilience.analysis import find_shortest_path
from netresilience.core.exceptions import InvalidNodeReference
from netresilience.topology import TopologyBuilder, toggle_edge


def _is_active_link(graph, u, v) -> bool:
    return any(e.is_active and e.connects(u, v) for e in graph.edges)


class TestShortestPath:
    """Test BFS path finding."""

    def test_cycle_two_hops(self, cycle_graph):
        """Test A to C on a 4-cycle goes through B or D."""
        result = find_shortest_path(cycle_graph, "A", "C")
        assert result.found
        assert result.hops == 2
        assert result.path[0] == "A" and result.path[-1] == "C"
        assert result.path[1] in {"B", "D"}
        assert all(_is_active_link(cycle_graph, u, v) for u, v in result.edges())

    def test_same_node(self, cycle_graph):
        """Test a query to itself is a zero-hop path."""
        result = find_shortest_path(cycle_graph, "B", "B")
        assert result.path == ["B"]
        assert result.hops == 0
        assert result.edges() == []

    def test_detour_around_failure(self, cycle_graph):
        """Test a failed link forces the long way round."""
        broken = toggle_edge(cycle_graph, "A", "B")
        result = find_shortest_path(broken, "A", "B")
        assert result.path == ["A", "D", "C", "B"]
        assert result.hops == 3

    def test_not_found(self, path_graph):
        """Test no route across a failed bridge."""
        broken = toggle_edge(path_graph, "B", "C")
        result = find_shortest_path(broken, "A", "C")
        assert not result.found
        assert result.path == []
        assert result.hops is None
        assert result.trace[-1] == "No path exists from A to C"

    def test_invalid_nodes(self, path_graph):
        """Test unknown ids fail before searching."""
        with pytest.raises(InvalidNodeReference) as exc:
            find_shortest_path(path_graph, "A", "Z")
        assert exc.value.node_id == "Z"
        with pytest.raises(InvalidNodeReference):
            find_shortest_path(path_graph, "Q", "A")

    def test_stops_when_target_dequeued(self):
        """Test the search ends once the target is processed."""
        graph = (
            TopologyBuilder()
            .add_node("S")
            .add_node("T")
            .add_node("U")
            .add_node("W")
            .add_link("S", "T")
            .add_link("S", "U")
            .add_link("U", "W")
            .build()
        )
        result = find_shortest_path(graph, "S", "T")
        assert result.path == ["S", "T"]
        assert "Found target: T" in result.trace
        assert "Discovered W from U" not in result.trace
        assert "Visiting U" not in result.trace

    def test_path_has_no_repeats(self, sample):
        """Test paths across the sample network."""
        result = find_shortest_path(sample, "13", "6")
        assert result.found
        assert len(set(result.path)) == len(result.path)
        assert result.path == ["13", "12", "11", "1", "2", "3", "5", "6"]
        assert all(_is_active_link(sample, u, v) for u, v in result.edges())

    def test_input_not_modified(self, sample):
        """Test the snapshot is left untouched."""
        before = sample.copy()
        find_shortest_path(sample, "1", "9")
        assert sample == before

    def test_to_dict(self, path_graph):
        """Test result serialization."""
        data = find_shortest_path(path_graph, "A", "C").to_dict()
        assert data["found"] is True
        assert data["hops"] == 2
        assert data["path"] == ["A", "B", "C"]
