"""Recovery planning: reconnect sites cut off from the hub."""

import logging
from collections import deque
from dataclasses import dataclass, field

from ..core.exceptions import EmptyGraph
from ..core.utils import euclidean_distance
from ..topology.adjacency import build_adjacency
from ..topology.models import Edge, Graph, NodeId, NodeKind

logger = logging.getLogger(__name__)


@dataclass
class RecoveryResult:
    """Recovery links proposed for one topology snapshot."""

    hub: NodeId
    recovery_edges: list[Edge] = field(default_factory=list)
    disconnected_nodes: list[NodeId] = field(default_factory=list)
    reachable_nodes: list[NodeId] = field(default_factory=list)
    trace: list[str] = field(default_factory=list)
    total_length: float = 0.0

    @property
    def needs_recovery(self) -> bool:
        return bool(self.disconnected_nodes)

    def disconnected_set(self) -> set[NodeId]:
        return set(self.disconnected_nodes)

    def to_dict(self) -> dict:
        return {
            "hub": self.hub,
            "disconnected_nodes": self.disconnected_nodes,
            "recovery_edges": [e.to_dict(include_derived=True) for e in self.recovery_edges],
            "total_length": round(self.total_length, 2),
            "trace": self.trace,
        }

    def __str__(self) -> str:
        if not self.needs_recovery:
            return f"All nodes reachable from hub {self.hub}"
        lines = [f"Disconnected from hub {self.hub}: {len(self.disconnected_nodes)}"]
        for edge in self.recovery_edges:
            lines.append(f"  - reconnect {edge.source} to {edge.target}")
        return "\n".join(lines)


def select_hub(graph: Graph, hub_id: NodeId | None = None) -> NodeId:
    """
    Pick the reference node for reachability.

    Uses ``hub_id`` when present in the graph, else the first hub site, else
    the first node.

    Raises:
        EmptyGraph: If the graph has no nodes
    """
    if not graph.nodes:
        raise EmptyGraph("Hub selection")

    if hub_id is not None:
        if graph.has_node(hub_id):
            return hub_id
        logger.warning("Hub %r not in topology, falling back to default hub", hub_id)

    for node in graph.nodes:
        if node.kind is NodeKind.HUB:
            return node.id
    return graph.nodes[0].id


def reachable_from(graph: Graph, start: NodeId) -> set[NodeId]:
    """Nodes reachable from ``start`` over active links, ``start`` included."""
    adjacency = build_adjacency(graph)
    visited = {start}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        for neighbor in adjacency[current]:
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)

    return visited


def plan_recovery(graph: Graph, hub_id: NodeId | None = None) -> RecoveryResult:
    """
    Propose links reconnecting every site cut off from the hub.

    Each disconnected site is linked to the geometrically nearest site that
    the hub still reaches. Candidates come only from the original reachable
    set, so one pass reconnects everything; the plan is a per-site greedy
    choice, not a minimum total length.

    Args:
        graph: Topology snapshot; it is not modified
        hub_id: Preferred hub, see ``select_hub``

    Returns:
        RecoveryResult with the proposed recovery links

    Raises:
        EmptyGraph: If the graph has no nodes
    """
    hub = select_hub(graph, hub_id)
    labels = graph.labels()

    result = RecoveryResult(hub=hub)
    trace = result.trace
    trace.append(f"Starting network recovery from {labels[hub]}")

    reached = reachable_from(graph, hub)
    reachable = [n for n in graph.nodes if n.id in reached]
    disconnected = [n for n in graph.nodes if n.id not in reached]
    result.reachable_nodes = [n.id for n in reachable]
    result.disconnected_nodes = [n.id for n in disconnected]

    if not disconnected:
        trace.append("All nodes are connected. No recovery needed.")
        return result

    trace.append(
        f"Found {len(disconnected)} disconnected nodes: "
        + ", ".join(n.label for n in disconnected)
    )

    for lost in disconnected:
        closest = reachable[0]
        best = euclidean_distance(lost.position, closest.position)
        for candidate in reachable[1:]:
            distance = euclidean_distance(lost.position, candidate.position)
            if distance < best:
                best = distance
                closest = candidate

        result.recovery_edges.append(
            Edge(source=lost.id, target=closest.id, is_active=True, is_recovery=True)
        )
        result.total_length += best
        trace.append(f"Reconnecting {lost.label} to {closest.label} ({best:.1f})")

    logger.debug(
        "Planned %d recovery links from hub %s (total length %.1f)",
        len(result.recovery_edges),
        hub,
        result.total_length,
    )
    return result


def apply_recovery(graph: Graph, result: RecoveryResult) -> Graph:
    """Copy of ``graph`` with the proposed recovery links added."""
    recovered = graph.copy()
    recovered.edges.extend(
        Edge(source=e.source, target=e.target, is_active=True, is_recovery=True)
        for e in result.recovery_edges
    )
    return recovered
