"""Schema graph data types and graph-database export.

Public API:
    NodeKind: Schema node classification.
    EdgeKind: Relationship classification.
    Direction: Edge traversal direction.
    GraphNode: Immutable graph node.
    GraphEdge: Immutable graph edge.
    SchemaGraph: Ordered node/edge container.
    KuzuSchemaGraphStore: Kuzu-backed store for resolved graphs.
"""

from __future__ import annotations

from .kuzu_store import KuzuSchemaGraphStore
from .types import Direction, EdgeKind, GraphEdge, GraphNode, NodeKind, SchemaGraph

__all__ = [
    "NodeKind",
    "EdgeKind",
    "Direction",
    "GraphNode",
    "GraphEdge",
    "SchemaGraph",
    "KuzuSchemaGraphStore",
]
