"""Analysis module - critical structures, shortest paths, recovery planning."""

from .critical import AnalysisResult, analyze_critical_structures, apply_analysis
from .paths import PathResult, find_shortest_path
from .recovery import RecoveryResult, apply_recovery, plan_recovery, reachable_from, select_hub

__all__ = [
    "analyze_critical_structures",
    "apply_analysis",
    "AnalysisResult",
    "find_shortest_path",
    "PathResult",
    "plan_recovery",
    "apply_recovery",
    "select_hub",
    "reachable_from",
    "RecoveryResult",
]
