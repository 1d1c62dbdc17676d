"""Topology metrics over the links that are currently up, using NetworkX."""

from collections import Counter
from dataclasses import dataclass

import networkx as nx

from .builder import to_networkx
from .models import Graph


@dataclass
class TopologyMetrics:
    """Network topology metrics."""

    node_count: int
    edge_count: int
    active_edge_count: int
    failed_edge_count: int
    recovery_edge_count: int
    density: float
    average_degree: float
    connected_components: int
    largest_component_size: int
    diameter: int | None
    average_path_length: float | None
    kind_counts: dict[str, int]

    @property
    def is_connected(self) -> bool:
        return self.connected_components == 1

    def to_dict(self) -> dict:
        return {
            "node_count": self.node_count,
            "edge_count": self.edge_count,
            "active_edge_count": self.active_edge_count,
            "failed_edge_count": self.failed_edge_count,
            "recovery_edge_count": self.recovery_edge_count,
            "density": round(self.density, 4),
            "average_degree": round(self.average_degree, 2),
            "connected_components": self.connected_components,
            "largest_component_size": self.largest_component_size,
            "diameter": self.diameter,
            "average_path_length": (
                round(self.average_path_length, 2) if self.average_path_length else None
            ),
            "kind_counts": self.kind_counts,
        }

    def __str__(self) -> str:
        lines = [
            f"Nodes: {self.node_count}",
            f"Links: {self.edge_count} ({self.active_edge_count} up, {self.failed_edge_count} down)",
            f"Density: {self.density:.4f}",
            f"Average Degree: {self.average_degree:.2f}",
            f"Connected Components: {self.connected_components}",
        ]

        if self.recovery_edge_count:
            lines.append(f"Recovery Links: {self.recovery_edge_count}")
        if self.diameter:
            lines.append(f"Diameter: {self.diameter}")
        if self.average_path_length:
            lines.append(f"Average Path Length: {self.average_path_length:.2f}")
        if self.kind_counts:
            kinds = ", ".join(f"{k}={v}" for k, v in sorted(self.kind_counts.items()))
            lines.append(f"Sites: {kinds}")

        return "\n".join(lines)


def calculate_metrics(graph: Graph) -> TopologyMetrics:
    """
    Calculate topology metrics.

    Only active links count towards connectivity; parallel links count once
    for density and path lengths.

    Args:
        graph: Topology snapshot

    Returns:
        TopologyMetrics with all calculated metrics
    """
    if not graph.nodes:
        return TopologyMetrics(
            node_count=0,
            edge_count=len(graph.edges),
            active_edge_count=0,
            failed_edge_count=0,
            recovery_edge_count=0,
            density=0.0,
            average_degree=0.0,
            connected_components=0,
            largest_component_size=0,
            diameter=None,
            average_path_length=None,
            kind_counts={},
        )

    multigraph = to_networkx(graph)
    simple = nx.Graph(multigraph)
    node_count = simple.number_of_nodes()

    components = list(nx.connected_components(simple))
    num_components = len(components)

    diameter = None
    avg_path_length = None
    if num_components == 1 and node_count > 1:
        diameter = nx.diameter(simple)
        avg_path_length = nx.average_shortest_path_length(simple)

    return TopologyMetrics(
        node_count=node_count,
        edge_count=len(graph.edges),
        active_edge_count=len(graph.active_edges()),
        failed_edge_count=len(graph.failed_edges()),
        recovery_edge_count=len(graph.recovery_edges()),
        density=nx.density(simple),
        average_degree=sum(dict(multigraph.degree()).values()) / node_count,
        connected_components=num_components,
        largest_component_size=max(len(c) for c in components),
        diameter=diameter,
        average_path_length=avg_path_length,
        kind_counts=dict(Counter(n.kind.value for n in graph.nodes)),
    )


def count_components(graph: Graph) -> int:
    """Number of connected components over active links."""
    if not graph.nodes:
        return 0
    return nx.number_connected_components(to_networkx(graph))
