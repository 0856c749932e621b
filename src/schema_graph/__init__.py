"""openapi-schema-graph: Turn OpenAPI component schemas into a relationship graph."""

__version__ = "0.1.0"

from .cache import STORAGE_KEY, GraphCache
from .exceptions import DocumentParseError, SchemaGraphError
from .graph import (
    Direction,
    EdgeKind,
    GraphEdge,
    GraphNode,
    KuzuSchemaGraphStore,
    NodeKind,
    SchemaGraph,
)
from .loader import load_document, load_schema_graph, parse_schema_graph
from .refs import external_node_id, is_external_ref, parse_ref, ref_target_id
from .resolver import GraphBuilder, SchemaGraphResolver, resolve
from .upload import parse_schema_upload

__all__ = [
    # Resolver
    "resolve",
    "SchemaGraphResolver",
    "GraphBuilder",
    # Graph types
    "NodeKind",
    "EdgeKind",
    "Direction",
    "GraphNode",
    "GraphEdge",
    "SchemaGraph",
    # References
    "is_external_ref",
    "parse_ref",
    "external_node_id",
    "ref_target_id",
    # Loading and upload
    "load_document",
    "parse_schema_graph",
    "load_schema_graph",
    "parse_schema_upload",
    # Storage
    "GraphCache",
    "STORAGE_KEY",
    "KuzuSchemaGraphStore",
    # Exceptions
    "SchemaGraphError",
    "DocumentParseError",
]
