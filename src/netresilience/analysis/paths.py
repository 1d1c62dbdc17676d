"""Minimum-hop path search over active links."""

import logging
from collections import deque
from dataclasses import dataclass, field

from ..core.exceptions import InvalidNodeReference
from ..topology.adjacency import build_adjacency
from ..topology.models import Graph, NodeId

logger = logging.getLogger(__name__)


@dataclass
class PathResult:
    """Outcome of a shortest-path query. An empty ``path`` means no route exists."""

    source: NodeId
    target: NodeId
    path: list[NodeId] = field(default_factory=list)
    trace: list[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.path)

    @property
    def hops(self) -> int | None:
        return len(self.path) - 1 if self.path else None

    def edges(self) -> list[tuple[NodeId, NodeId]]:
        """Consecutive node pairs along the path."""
        return list(zip(self.path, self.path[1:]))

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "target": self.target,
            "found": self.found,
            "path": self.path,
            "hops": self.hops,
            "trace": self.trace,
        }

    def __str__(self) -> str:
        if not self.found:
            return f"No path from {self.source} to {self.target}"
        route = " -> ".join(str(n) for n in self.path)
        return f"{route} ({self.hops} hops)"


def find_shortest_path(graph: Graph, source: NodeId, target: NodeId) -> PathResult:
    """
    Breadth-first search for a minimum-hop route.

    The search stops when the target is dequeued.

    Args:
        graph: Topology snapshot; it is not modified
        source: Start node id
        target: Destination node id

    Returns:
        PathResult; ``found`` is False when no active route connects the pair

    Raises:
        InvalidNodeReference: If either id is absent from the graph
    """
    for node_id, role in ((source, "path source"), (target, "path target")):
        if not graph.has_node(node_id):
            raise InvalidNodeReference(node_id, role)

    adjacency = build_adjacency(graph)
    labels = graph.labels()
    result = PathResult(source=source, target=target)
    trace = result.trace

    visited = {source}
    previous: dict[NodeId, NodeId | None] = {source: None}
    queue = deque([source])
    trace.append(f"Starting BFS from {labels[source]}")

    while queue:
        current = queue.popleft()
        trace.append(f"Visiting {labels[current]}")

        if current == target:
            trace.append(f"Found target: {labels[target]}")
            break

        for neighbor in adjacency[current]:
            if neighbor not in visited:
                visited.add(neighbor)
                previous[neighbor] = current
                queue.append(neighbor)
                trace.append(f"Discovered {labels[neighbor]} from {labels[current]}")

    if target not in visited:
        trace.append(f"No path exists from {labels[source]} to {labels[target]}")
        logger.debug("No path between %s and %s", source, target)
        return result

    path: list[NodeId] = []
    node: NodeId | None = target
    while node is not None:
        path.append(node)
        node = previous[node]
    path.reverse()

    result.path = path
    trace.append("Shortest path: " + " → ".join(labels[n] for n in path))
    logger.debug("Path %s -> %s found with %d hops", source, target, len(path) - 1)
    return result
