"""Topology module - data model, store operations, adjacency, metrics."""

from .adjacency import build_adjacency
from .builder import (
    TopologyBuilder,
    build_graph,
    clear_annotations,
    load_graph,
    reset_graph,
    save_graph,
    to_networkx,
    toggle_edge,
)
from .metrics import TopologyMetrics, calculate_metrics, count_components
from .models import Edge, Graph, Node, NodeId, NodeKind
from .sample import SAMPLE_TOPOLOGY, sample_graph

__all__ = [
    "Node",
    "Edge",
    "Graph",
    "NodeId",
    "NodeKind",
    "build_graph",
    "toggle_edge",
    "reset_graph",
    "clear_annotations",
    "load_graph",
    "save_graph",
    "to_networkx",
    "TopologyBuilder",
    "build_adjacency",
    "calculate_metrics",
    "count_components",
    "TopologyMetrics",
    "SAMPLE_TOPOLOGY",
    "sample_graph",
]
