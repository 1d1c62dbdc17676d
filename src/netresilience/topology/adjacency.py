"""Adjacency view over the links that are currently up."""

from .models import Graph, NodeId


def build_adjacency(graph: Graph) -> dict[NodeId, list[NodeId]]:
    """
    Map every node id to its neighbors over active links.

    Isolated nodes map to an empty list. Parallel links show up as repeated
    neighbors so that traversals can see each of them; a self-loop is listed
    once. Neighbor order follows the graph's edge order.
    """
    adjacency: dict[NodeId, list[NodeId]] = {node.id: [] for node in graph.nodes}

    for edge in graph.edges:
        if not edge.is_active:
            continue
        adjacency[edge.source].append(edge.target)
        if edge.source != edge.target:
            adjacency[edge.target].append(edge.source)

    return adjacency
