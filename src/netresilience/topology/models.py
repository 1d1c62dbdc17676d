"""Telecom topology data model."""

from collections.abc import Hashable, Iterator
from dataclasses import dataclass, field, replace
from enum import Enum

from ..core.exceptions import ValidationError

NodeId = Hashable


class NodeKind(Enum):
    """Role of a site in the telecom network."""

    CITY = "city"
    BARANGAY = "barangay"
    HUB = "hub"

    @classmethod
    def parse(cls, value: "str | NodeKind") -> "NodeKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as e:
            choices = ", ".join(k.value for k in cls)
            raise ValidationError(f"Unknown node kind: {value}", f"Expected one of {choices}") from e


@dataclass
class Node:
    """A site in the network."""

    id: NodeId
    label: str
    x: float = 0.0
    y: float = 0.0
    kind: NodeKind = NodeKind.CITY
    is_articulation_point: bool = False

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self, include_derived: bool = False) -> dict:
        data = {
            "id": self.id,
            "label": self.label,
            "x": self.x,
            "y": self.y,
            "kind": self.kind.value,
        }
        if include_derived:
            data["isArticulationPoint"] = self.is_articulation_point
        return data


@dataclass
class Edge:
    """An undirected link between two sites."""

    source: NodeId
    target: NodeId
    is_active: bool = True
    is_bridge: bool = False
    is_recovery: bool = False

    @property
    def key(self) -> frozenset:
        """Unordered endpoint pair."""
        return frozenset((self.source, self.target))

    def connects(self, u: NodeId, v: NodeId) -> bool:
        return (self.source == u and self.target == v) or (self.source == v and self.target == u)

    def to_dict(self, include_derived: bool = False) -> dict:
        data = {
            "source": self.source,
            "target": self.target,
            "isActive": self.is_active,
        }
        if include_derived:
            data["isBridge"] = self.is_bridge
            data["isRecovery"] = self.is_recovery
        return data


@dataclass
class Graph:
    """Snapshot of the topology: ordered nodes and ordered edges."""

    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def node_ids(self) -> list[NodeId]:
        return [n.id for n in self.nodes]

    def has_node(self, node_id: NodeId) -> bool:
        return any(n.id == node_id for n in self.nodes)

    def get_node(self, node_id: NodeId) -> Node | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def label(self, node_id: NodeId) -> str:
        """Display name for a node, falling back to its id."""
        node = self.get_node(node_id)
        return node.label if node else str(node_id)

    def labels(self) -> dict[NodeId, str]:
        return {n.id: n.label for n in self.nodes}

    def active_edges(self) -> list[Edge]:
        return [e for e in self.edges if e.is_active]

    def failed_edges(self) -> list[Edge]:
        return [e for e in self.edges if not e.is_active]

    def recovery_edges(self) -> list[Edge]:
        return [e for e in self.edges if e.is_recovery]

    def copy(self) -> "Graph":
        """Copy with fresh node and edge objects."""
        return Graph(
            nodes=[replace(n) for n in self.nodes],
            edges=[replace(e) for e in self.edges],
        )

    def to_dict(self, include_derived: bool = False) -> dict:
        return {
            "nodes": [n.to_dict(include_derived) for n in self.nodes],
            "edges": [
                e.to_dict(include_derived)
                for e in self.edges
                if include_derived or not e.is_recovery
            ],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        """Build a graph from the persisted ``{"nodes": [...], "edges": [...]}`` shape."""
        from .builder import build_graph

        if not isinstance(data, dict):
            raise ValidationError("Topology must be a mapping", f"got {type(data).__name__}")
        nodes = data.get("nodes", [])
        edges = data.get("edges", [])
        for key, value in (("nodes", nodes), ("edges", edges)):
            if not isinstance(value, list):
                raise ValidationError(
                    f"Topology '{key}' must be a list", f"got {type(value).__name__}"
                )
        return build_graph(nodes, edges)
