"""Topology store: graph construction, failure toggles, resets and file I/O."""

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace
from pathlib import Path

import networkx as nx

from ..core.exceptions import InvalidNodeReference, TopologyFileError, ValidationError
from .models import Edge, Graph, Node, NodeId, NodeKind

logger = logging.getLogger(__name__)


def _check_id(value: object, what: str) -> None:
    try:
        hash(value)
    except TypeError as e:
        raise ValidationError(
            f"Invalid {what}: {value!r}", "node ids must be strings or integers"
        ) from e


def _check_list(value: object, what: str) -> None:
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
        raise ValidationError(f"Invalid {what}", f"expected a list, got {type(value).__name__}")


def _node_from_spec(spec: Node | Mapping) -> Node:
    if isinstance(spec, Node):
        return replace(spec, is_articulation_point=False)
    if not isinstance(spec, Mapping) or "id" not in spec:
        raise ValidationError("Invalid node spec", f"expected a mapping with an 'id', got {spec!r}")
    _check_id(spec["id"], "node id")

    try:
        x = float(spec.get("x", 0.0))
        y = float(spec.get("y", 0.0))
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid position for node {spec['id']!r}", str(e)) from e

    return Node(
        id=spec["id"],
        label=str(spec.get("label", spec["id"])),
        x=x,
        y=y,
        kind=NodeKind.parse(spec.get("kind", spec.get("type", NodeKind.CITY))),
    )


def _edge_from_spec(spec: Edge | Mapping) -> Edge:
    if isinstance(spec, Edge):
        return replace(spec, is_bridge=False, is_recovery=False)
    if not isinstance(spec, Mapping) or "source" not in spec or "target" not in spec:
        raise ValidationError(
            "Invalid edge spec", f"expected a mapping with 'source' and 'target', got {spec!r}"
        )
    _check_id(spec["source"], "edge source")
    _check_id(spec["target"], "edge target")

    is_active = spec.get("isActive", True)
    if not isinstance(is_active, bool):
        raise ValidationError(
            f"Invalid isActive for edge {spec['source']!r}-{spec['target']!r}",
            f"expected true or false, got {is_active!r}",
        )
    return Edge(source=spec["source"], target=spec["target"], is_active=is_active)


def build_graph(nodes: Iterable[Node | Mapping], edges: Iterable[Edge | Mapping]) -> Graph:
    """
    Build a validated graph from node and edge specs.

    Specs may be ``Node``/``Edge`` instances or mappings in the persisted
    shape. Derived annotations are never taken from the input.

    Raises:
        ValidationError: On malformed specs or duplicate node ids
        InvalidNodeReference: If an edge endpoint names an absent node
    """
    _check_list(nodes, "node list")
    _check_list(edges, "edge list")
    graph_nodes = [_node_from_spec(spec) for spec in nodes]

    seen: set[NodeId] = set()
    for node in graph_nodes:
        if node.id in seen:
            raise ValidationError(f"Duplicate node id: {node.id!r}")
        seen.add(node.id)

    graph_edges = []
    for spec in edges:
        edge = _edge_from_spec(spec)
        for endpoint in (edge.source, edge.target):
            if endpoint not in seen:
                raise InvalidNodeReference(
                    endpoint, f"edge {edge.source!r}-{edge.target!r} references a missing node"
                )
        graph_edges.append(edge)

    logger.debug("Built graph with %d nodes and %d edges", len(graph_nodes), len(graph_edges))
    return Graph(nodes=graph_nodes, edges=graph_edges)


def clear_annotations(graph: Graph) -> Graph:
    """Copy of the graph with bridge and articulation point flags cleared."""
    result = graph.copy()
    for node in result.nodes:
        node.is_articulation_point = False
    for edge in result.edges:
        edge.is_bridge = False
    return result


def toggle_edge(graph: Graph, u: NodeId, v: NodeId) -> Graph:
    """
    Flip the failure state of the first link joining ``u`` and ``v``.

    Returns a new graph; derived annotations are cleared since the topology
    changed. If no link joins the pair, the copy is otherwise unchanged.
    """
    result = clear_annotations(graph)
    for edge in result.edges:
        if edge.connects(u, v):
            edge.is_active = not edge.is_active
            logger.debug(
                "Link %s-%s is now %s", edge.source, edge.target, "up" if edge.is_active else "down"
            )
            break
    else:
        logger.debug("No link between %s and %s to toggle", u, v)
    return result


def reset_graph(graph: Graph, original: Graph | None = None) -> Graph:
    """
    Restore a topology to its pristine state.

    Every link of ``original`` (or ``graph`` when omitted) is brought back up,
    all derived annotations are cleared and recovery links are dropped.
    """
    base = original if original is not None else graph
    result = clear_annotations(base)
    result.edges = [e for e in result.edges if not e.is_recovery]
    for edge in result.edges:
        edge.is_active = True
    return result


def load_graph(path: str | Path) -> Graph:
    """Load a topology from a JSON file."""
    path = Path(path)
    try:
        with open(path) as f:
            data = json.load(f)
    except OSError as e:
        raise TopologyFileError(f"Cannot read topology file: {path}", str(e)) from e
    except json.JSONDecodeError as e:
        raise TopologyFileError(f"Invalid JSON in topology file: {path}", str(e)) from e

    return Graph.from_dict(data)


def save_graph(graph: Graph, path: str | Path, include_derived: bool = False) -> str:
    """Save a topology to a JSON file and return the path written."""
    output_path = Path(path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(graph.to_dict(include_derived=include_derived), f, indent=2)
    except OSError as e:
        raise TopologyFileError(f"Cannot write topology file: {output_path}", str(e)) from e
    return str(output_path)


def to_networkx(graph: Graph, active_only: bool = True) -> nx.MultiGraph:
    """Convert to a NetworkX multigraph, keeping parallel links."""
    g = nx.MultiGraph()
    for node in graph.nodes:
        g.add_node(node.id, label=node.label, pos=node.position, kind=node.kind.value)
    for edge in graph.edges:
        if active_only and not edge.is_active:
            continue
        g.add_edge(edge.source, edge.target, active=edge.is_active, recovery=edge.is_recovery)
    return g


class TopologyBuilder:
    """Build telecom topology graphs incrementally."""

    def __init__(self):
        self.nodes: dict[NodeId, Node] = {}
        self.edges: list[Edge] = []

    def add_node(
        self,
        node_id: NodeId,
        label: str | None = None,
        x: float = 0.0,
        y: float = 0.0,
        kind: NodeKind | str = NodeKind.CITY,
    ) -> "TopologyBuilder":
        """Add a site to the topology."""
        if node_id in self.nodes:
            raise ValidationError(f"Duplicate node id: {node_id!r}")
        self.nodes[node_id] = Node(
            id=node_id,
            label=label if label is not None else str(node_id),
            x=x,
            y=y,
            kind=NodeKind.parse(kind),
        )
        return self

    def add_link(self, src: NodeId, dst: NodeId, active: bool = True) -> "TopologyBuilder":
        """Add a link between two sites."""
        self.edges.append(Edge(source=src, target=dst, is_active=active))
        return self

    def build(self) -> Graph:
        """Validate and return the graph."""
        return build_graph(self.nodes.values(), self.edges)
