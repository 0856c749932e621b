"""Graph data structures produced by the schema resolver.

Public API:
    NodeKind: Classification of a schema node.
    EdgeKind: Classification of a relationship between schemas.
    Direction: Edge traversal direction enum.
    GraphNode: Immutable node for one schema or one external reference.
    GraphEdge: Immutable edge connecting two nodes.
    SchemaGraph: Ordered, immutable collection of nodes and edges.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class NodeKind(Enum):
    """What a schema node represents."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ENUM = "enum"
    ONE_OF = "oneOf"
    ALL_OF = "allOf"
    ANY_OF = "anyOf"
    EXTERNAL = "external"


class EdgeKind(Enum):
    """How the source schema relates to the target schema."""

    PROPERTY = "property"
    REFERENCE = "reference"
    ARRAY_ITEMS = "array_items"
    COMPOSITION = "composition"
    EXTERNAL_REF = "external_ref"


class Direction(Enum):
    """Direction for edge traversal queries."""

    OUTGOING = "outgoing"
    INCOMING = "incoming"
    BOTH = "both"


def edge_id_for(source: str, target: str) -> str:
    """Deterministic edge identifier for an ordered node pair."""
    return f"{source}->{target}"


def _name_list(data: dict[str, Any], key: str) -> tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return ()
    if not isinstance(value, list):
        raise TypeError(f"'{key}' must be a list, got {type(value).__name__}")
    return tuple(str(v) for v in value)


@dataclass(frozen=True)
class GraphNode:
    """An immutable node in the schema graph.

    Attributes:
        id: Unique identifier. The schema name for internal schemas,
            ``"<fileName>#<schemaName>"`` for external references.
        label: Display name.
        kind: Node classification.
        description: Schema description, if any.
        property_names: Immediate property keys in document order.
        required_names: Names listed under ``required``.
        is_external: True for nodes standing in for external references.
        external_file_path: Referenced file name (external nodes only).
    """

    id: str
    label: str
    kind: NodeKind = NodeKind.OBJECT
    description: str | None = None
    property_names: tuple[str, ...] = ()
    required_names: tuple[str, ...] = ()
    is_external: bool = False
    external_file_path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "kind": self.kind.value,
            "description": self.description,
            "propertyNames": list(self.property_names),
            "requiredNames": list(self.required_names),
            "isExternal": self.is_external,
            "externalFilePath": self.external_file_path,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GraphNode:
        """Rebuild a node from ``to_dict`` output.

        Raises:
            KeyError: If ``id`` or ``label`` is missing.
            TypeError: If ``propertyNames`` or ``requiredNames`` is not a list.
            ValueError: If ``kind`` is not a known node kind.
        """
        return cls(
            id=str(data["id"]),
            label=str(data["label"]),
            kind=NodeKind(data.get("kind", NodeKind.OBJECT.value)),
            description=data.get("description"),
            property_names=_name_list(data, "propertyNames"),
            required_names=_name_list(data, "requiredNames"),
            is_external=bool(data.get("isExternal", False)),
            external_file_path=data.get("externalFilePath"),
        )


@dataclass(frozen=True)
class GraphEdge:
    """An immutable directed edge in the schema graph.

    Attributes:
        id: ``"<source>-><target>"``; unique within a graph.
        source: Node ID of the schema holding the reference.
        target: Node ID of the referenced schema. May name a schema that
            has no node (a reference to an undefined schema).
        label: Where the relationship originates, e.g. ``"owner"``,
            ``"items"``, ``"allOf[2]"`` or ``"address.country"``.
        kind: Edge classification.
    """

    id: str
    source: str
    target: str
    label: str
    kind: EdgeKind

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "label": self.label,
            "kind": self.kind.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GraphEdge:
        source = str(data["source"])
        target = str(data["target"])
        return cls(
            id=str(data.get("id") or edge_id_for(source, target)),
            source=source,
            target=target,
            label=str(data.get("label", "")),
            kind=EdgeKind(data["kind"]),
        )


@dataclass(frozen=True)
class SchemaGraph:
    """Resolved schema graph, nodes and edges in insertion order.

    Attributes:
        nodes: One node per schema and per distinct external reference.
        edges: One edge per distinct source/target pair.
    """

    nodes: tuple[GraphNode, ...] = ()
    edges: tuple[GraphEdge, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.nodes and not self.edges

    def get_node(self, node_id: str) -> GraphNode | None:
        """Fetch a node by ID, or None if not present."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def get_edge(self, edge_id: str) -> GraphEdge | None:
        """Fetch an edge by ID, or None if not present."""
        for edge in self.edges:
            if edge.id == edge_id:
                return edge
        return None

    def to_dict(self) -> dict[str, Any]:
        """Export to a JSON-serializable dict for renderers and caches."""
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SchemaGraph:
        """Rebuild a graph from ``to_dict`` output.

        Raises:
            TypeError: If the payload is not a dict of lists of dicts.
            KeyError: If a node or edge lacks a mandatory field.
            ValueError: If a node or edge kind is unknown.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected a dict, got {type(data).__name__}")
        nodes = data.get("nodes", [])
        edges = data.get("edges", [])
        if not isinstance(nodes, list) or not isinstance(edges, list):
            raise TypeError("'nodes' and 'edges' must be lists")
        return cls(
            nodes=tuple(GraphNode.from_dict(n) for n in nodes),
            edges=tuple(GraphEdge.from_dict(e) for e in edges),
        )


__all__ = [
    "NodeKind",
    "EdgeKind",
    "Direction",
    "GraphNode",
    "GraphEdge",
    "SchemaGraph",
    "edge_id_for",
]
