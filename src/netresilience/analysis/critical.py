"""Bridge and articulation point detection.

A single depth-first traversal over the active links assigns each node a
discovery time and a low-link value (the smallest discovery time reachable
from its subtree through tree edges plus one back edge). From those:

- a tree edge ``(u, v)`` is a bridge when ``low[v] > disc[u]``;
- a non-root node ``u`` is an articulation point when some child ``v`` has
  ``low[v] >= disc[u]``;
- the root is an articulation point when it has more than one DFS child.

Only the component of the start node is traversed. The traversal keeps an
explicit stack of frames so deep topologies do not hit the recursion limit.
"""

import logging
from dataclasses import dataclass, field

from ..core.exceptions import InvalidNodeReference
from ..topology.adjacency import build_adjacency
from ..topology.builder import clear_annotations
from ..topology.models import Graph, NodeId

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """Critical structures found by one traversal."""

    root: NodeId | None
    bridges: list[tuple[NodeId, NodeId]] = field(default_factory=list)
    articulation_points: set[NodeId] = field(default_factory=set)
    trace: list[str] = field(default_factory=list)

    def bridge_keys(self) -> set[frozenset]:
        """Bridges as unordered endpoint pairs."""
        return {frozenset(b) for b in self.bridges}

    def is_bridge(self, u: NodeId, v: NodeId) -> bool:
        return frozenset((u, v)) in self.bridge_keys()

    def to_dict(self) -> dict:
        return {
            "root": self.root,
            "bridges": [{"source": u, "target": v} for u, v in self.bridges],
            "articulation_points": sorted(self.articulation_points, key=str),
            "trace": self.trace,
        }

    def __str__(self) -> str:
        lines = [
            f"Bridges: {len(self.bridges)}",
            f"Articulation Points: {len(self.articulation_points)}",
        ]
        for u, v in self.bridges:
            lines.append(f"  - bridge {u} - {v}")
        for node_id in sorted(self.articulation_points, key=str):
            lines.append(f"  - articulation point {node_id}")
        return "\n".join(lines)


@dataclass
class _Frame:
    node: NodeId
    parent: NodeId | None
    index: int = 0
    children: int = 0
    parent_link_skipped: bool = False


def analyze_critical_structures(graph: Graph, start: NodeId | None = None) -> AnalysisResult:
    """
    Find bridges and articulation points reachable from ``start``.

    Args:
        graph: Topology snapshot; it is not modified
        start: Traversal root, defaults to the first node of the graph

    Returns:
        AnalysisResult with bridges, articulation points and a trace

    Raises:
        InvalidNodeReference: If ``start`` is given but absent
    """
    if not graph.nodes:
        return AnalysisResult(root=None)

    if start is None:
        start = graph.nodes[0].id
    elif not graph.has_node(start):
        raise InvalidNodeReference(start, "traversal root")

    adjacency = build_adjacency(graph)
    labels = graph.labels()
    result = AnalysisResult(root=start)
    trace = result.trace

    discovery: dict[NodeId, int] = {}
    low: dict[NodeId, int] = {}
    counter = 0

    def visit(node: NodeId) -> None:
        nonlocal counter
        counter += 1
        discovery[node] = counter
        low[node] = counter
        trace.append(f"Visiting {labels[node]}")

    visit(start)
    stack = [_Frame(node=start, parent=None)]

    while stack:
        frame = stack[-1]
        u = frame.node
        neighbors = adjacency[u]

        if frame.index < len(neighbors):
            v = neighbors[frame.index]
            frame.index += 1

            if v not in discovery:
                frame.children += 1
                trace.append(f"Exploring edge from {labels[u]} to {labels[v]}")
                visit(v)
                stack.append(_Frame(node=v, parent=u))
            elif v == frame.parent and not frame.parent_link_skipped:
                # the tree edge itself; any further parallel link is a back edge
                frame.parent_link_skipped = True
            else:
                low[u] = min(low[u], discovery[v])
                trace.append(f"Back edge from {labels[u]} to {labels[v]}")
            continue

        stack.pop()
        if not stack:
            if frame.children > 1:
                trace.append(f"Root is an articulation point: {labels[u]}")
                result.articulation_points.add(u)
            continue

        parent = stack[-1]
        p = parent.node
        low[p] = min(low[p], low[u])

        if parent.parent is not None and low[u] >= discovery[p]:
            trace.append(f"Found articulation point: {labels[p]}")
            result.articulation_points.add(p)

        if low[u] > discovery[p]:
            trace.append(f"Found bridge: {labels[p]} - {labels[u]}")
            result.bridges.append((p, u))

    logger.debug(
        "Analyzed %d of %d nodes from %s: %d bridges, %d articulation points",
        len(discovery),
        len(graph.nodes),
        start,
        len(result.bridges),
        len(result.articulation_points),
    )
    return result


def apply_analysis(graph: Graph, result: AnalysisResult) -> Graph:
    """Copy of ``graph`` annotated with the bridges and articulation points found."""
    annotated = clear_annotations(graph)
    keys = result.bridge_keys()

    for edge in annotated.edges:
        if edge.is_active and edge.key in keys:
            edge.is_bridge = True
    for node in annotated.nodes:
        node.is_articulation_point = node.id in result.articulation_points

    return annotated
