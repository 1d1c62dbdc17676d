"""Network resilience toolkit - critical links, shortest paths and recovery planning."""

__version__ = "0.1.0"
__author__ = "Network Resilience Team"

from .analysis import (
    AnalysisResult,
    PathResult,
    RecoveryResult,
    analyze_critical_structures,
    apply_analysis,
    apply_recovery,
    find_shortest_path,
    plan_recovery,
)
from .core.exceptions import EmptyGraph, InvalidNodeReference, NetResilienceError
from .topology import (
    Edge,
    Graph,
    Node,
    NodeKind,
    build_adjacency,
    build_graph,
    reset_graph,
    toggle_edge,
)

__all__ = [
    "__version__",
    "__author__",
    "Node",
    "Edge",
    "Graph",
    "NodeKind",
    "build_graph",
    "toggle_edge",
    "reset_graph",
    "build_adjacency",
    "analyze_critical_structures",
    "apply_analysis",
    "AnalysisResult",
    "find_shortest_path",
    "PathResult",
    "plan_recovery",
    "apply_recovery",
    "RecoveryResult",
    "NetResilienceError",
    "InvalidNodeReference",
    "EmptyGraph",
]
