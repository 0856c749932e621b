"""Schema graph resolver: OpenAPI ``components.schemas`` -> SchemaGraph.

The resolver walks every schema definition, creates one node per schema and
one per distinct external ``$ref``, then extracts the relationships between
them. Each ``$ref`` yields exactly one edge to its immediate target; chains
are not followed.

Public API:
    GraphBuilder: Per-call accumulator with idempotent upserts.
    SchemaGraphResolver: Four-pass resolver.
    resolve: Convenience wrapper around SchemaGraphResolver.
"""

from __future__ import annotations

import logging
from typing import Any

from .graph.types import (
    EdgeKind,
    GraphEdge,
    GraphNode,
    NodeKind,
    SchemaGraph,
    edge_id_for,
)
from .refs import get_ref, is_external_ref, parse_ref, ref_target_id

logger = logging.getLogger(__name__)

COMPOSITION_KEYWORDS = ("allOf", "oneOf", "anyOf")

_COMPOSITION_KINDS = {
    "allOf": NodeKind.ALL_OF,
    "oneOf": NodeKind.ONE_OF,
    "anyOf": NodeKind.ANY_OF,
}

_TYPE_KINDS = {
    "object": NodeKind.OBJECT,
    "array": NodeKind.ARRAY,
    "string": NodeKind.STRING,
    "number": NodeKind.NUMBER,
    "integer": NodeKind.NUMBER,
    "boolean": NodeKind.BOOLEAN,
}


def _as_mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _string_names(value: Any) -> tuple[str, ...]:
    return tuple(str(v) for v in _as_list(value))


class GraphBuilder:
    """Accumulates nodes and edges for a single resolution.

    Both collections are keyed by ID and keep insertion order. Upserts are
    idempotent: the first entry for an ID wins and later ones are dropped.
    """

    def __init__(self) -> None:
        self._nodes: dict[str, GraphNode] = {}
        self._edges: dict[str, GraphEdge] = {}

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def upsert_node(self, node: GraphNode) -> bool:
        """Add *node* unless its ID is taken. Returns True if added."""
        if node.id in self._nodes:
            return False
        self._nodes[node.id] = node
        return True

    def upsert_edge(
        self,
        source: str,
        target: str,
        label: str,
        kind: EdgeKind,
    ) -> bool:
        """Add a ``source -> target`` edge unless one exists. Returns True if added."""
        eid = edge_id_for(source, target)
        if eid in self._edges:
            logger.debug("Dropping duplicate edge %s (label %r)", eid, label)
            return False
        self._edges[eid] = GraphEdge(
            id=eid, source=source, target=target, label=label, kind=kind
        )
        return True

    def build(self) -> SchemaGraph:
        return SchemaGraph(
            nodes=tuple(self._nodes.values()),
            edges=tuple(self._edges.values()),
        )


class SchemaGraphResolver:
    """Converts a parsed OpenAPI document into a SchemaGraph.

    The resolver holds no state between calls; every ``resolve`` builds a
    fresh GraphBuilder and passes it explicitly through the passes, so one
    instance may be shared between threads.
    """

    def resolve(self, document: Any) -> SchemaGraph:
        """Resolve the ``components.schemas`` section of *document*.

        Args:
            document: Deserialized YAML/JSON tree. Anything without a
                ``components.schemas`` mapping yields an empty graph.

        Returns:
            The resolved graph. The input is never mutated.
        """
        schemas = self.schema_collection(document)
        builder = GraphBuilder()
        if not schemas:
            return builder.build()

        for name, definition in schemas.items():
            self._create_schema_node(builder, str(name), definition)

        external_refs: dict[str, None] = {}
        for definition in schemas.values():
            self._collect_external_refs(definition, external_refs)
        for ref in external_refs:
            self._create_external_node(builder, ref)

        for name, definition in schemas.items():
            self._extract_relationships(builder, str(name), definition)

        graph = builder.build()
        logger.debug(
            "Resolved %d schemas into %d nodes and %d edges (%d external refs)",
            len(schemas),
            len(graph.nodes),
            len(graph.edges),
            len(external_refs),
        )
        return graph

    @staticmethod
    def schema_collection(document: Any) -> dict[str, Any]:
        """Return ``document["components"]["schemas"]`` or an empty dict."""
        components = _as_mapping(_as_mapping(document).get("components"))
        return _as_mapping(components.get("schemas"))

    @staticmethod
    def classify(definition: Any) -> NodeKind:
        """Node kind by precedence: enum, allOf, oneOf, anyOf, array, type."""
        schema = _as_mapping(definition)
        if schema.get("enum") is not None:
            return NodeKind.ENUM
        for keyword in COMPOSITION_KEYWORDS:
            if schema.get(keyword) is not None:
                return _COMPOSITION_KINDS[keyword]

        schema_type = schema.get("type")
        if isinstance(schema_type, list):
            # OpenAPI 3.1 type unions, e.g. ["string", "null"]
            schema_type = next((t for t in schema_type if t != "null"), None)
        if isinstance(schema_type, str):
            return _TYPE_KINDS.get(schema_type, NodeKind.OBJECT)
        return NodeKind.OBJECT

    # ── pass 1: schema nodes ──────────────────────────────────

    def _create_schema_node(
        self, builder: GraphBuilder, name: str, definition: Any
    ) -> None:
        if get_ref(definition) is not None:
            logger.debug("Schema %s is a bare $ref; no node created", name)
            return

        schema = _as_mapping(definition)
        description = schema.get("description")
        builder.upsert_node(
            GraphNode(
                id=name,
                label=name,
                kind=self.classify(schema),
                description=description if isinstance(description, str) else None,
                property_names=tuple(str(k) for k in _as_mapping(schema.get("properties"))),
                required_names=_string_names(schema.get("required")),
            )
        )

    # ── pass 2: external references ───────────────────────────

    def _collect_external_refs(self, definition: Any, found: dict[str, None]) -> None:
        """Depth-first collection of external refs, in first-seen order.

        Uses an explicit stack so nesting depth is not bounded by the
        interpreter's recursion limit.
        """
        stack: list[Any] = [definition]
        while stack:
            schema = _as_mapping(stack.pop())
            ref = get_ref(schema)
            if ref is not None and is_external_ref(ref):
                found.setdefault(ref, None)

            children: list[Any] = list(_as_mapping(schema.get("properties")).values())
            if "items" in schema:
                children.append(schema["items"])
            for keyword in COMPOSITION_KEYWORDS:
                children.extend(_as_list(schema.get(keyword)))
            # Reversed so children are visited in document order.
            stack.extend(reversed(children))

    def _create_external_node(self, builder: GraphBuilder, ref: str) -> None:
        file_name, schema_name = parse_ref(ref)
        builder.upsert_node(
            GraphNode(
                id=f"{file_name}#{schema_name}",
                label=schema_name,
                kind=NodeKind.EXTERNAL,
                description=f"External schema from {file_name}",
                is_external=True,
                external_file_path=file_name,
            )
        )

    # ── pass 3: relationships ─────────────────────────────────

    def _extract_relationships(
        self, builder: GraphBuilder, name: str, definition: Any
    ) -> None:
        ref = get_ref(definition)
        if ref is not None:
            kind = EdgeKind.EXTERNAL_REF if is_external_ref(ref) else EdgeKind.REFERENCE
            builder.upsert_edge(name, ref_target_id(ref), "$ref", kind)
            return

        schema = _as_mapping(definition)
        for prop_name, prop_schema in _as_mapping(schema.get("properties")).items():
            prop_ref = get_ref(prop_schema)
            if prop_ref is not None:
                builder.upsert_edge(
                    name, ref_target_id(prop_ref), str(prop_name), EdgeKind.PROPERTY
                )
            else:
                self._extract_nested(builder, name, prop_schema, str(prop_name))

        items = schema.get("items")
        if isinstance(items, dict):
            items_ref = get_ref(items)
            if items_ref is not None:
                builder.upsert_edge(
                    name, ref_target_id(items_ref), "items", EdgeKind.ARRAY_ITEMS
                )
            else:
                self._extract_nested(builder, name, items, "items")

        for keyword in COMPOSITION_KEYWORDS:
            self._extract_composition(builder, name, schema.get(keyword), keyword)

    def _extract_composition(
        self,
        builder: GraphBuilder,
        name: str,
        branches: Any,
        keyword: str,
    ) -> None:
        # Only direct references are captured; inline branches are not walked.
        for index, branch in enumerate(_as_list(branches)):
            ref = get_ref(branch)
            if ref is not None:
                builder.upsert_edge(
                    name, ref_target_id(ref), f"{keyword}[{index}]", EdgeKind.COMPOSITION
                )

    def _extract_nested(
        self,
        builder: GraphBuilder,
        parent: str,
        definition: Any,
        context: str,
    ) -> None:
        """Walk an inline schema, labelling edges with their dotted path."""
        stack: list[tuple[Any, str]] = [(definition, context)]
        while stack:
            current, label = stack.pop()
            ref = get_ref(current)
            if ref is not None:
                builder.upsert_edge(parent, ref_target_id(ref), label, EdgeKind.REFERENCE)
                continue

            schema = _as_mapping(current)
            children = [
                (prop_schema, f"{label}.{prop_name}")
                for prop_name, prop_schema in _as_mapping(schema.get("properties")).items()
            ]
            if "items" in schema:
                children.append((schema["items"], f"{label}[]"))
            stack.extend(reversed(children))


_default_resolver = SchemaGraphResolver()


def resolve(document: Any) -> SchemaGraph:
    """Resolve *document* into a SchemaGraph (see SchemaGraphResolver.resolve)."""
    return _default_resolver.resolve(document)


__all__ = ["GraphBuilder", "SchemaGraphResolver", "resolve", "COMPOSITION_KEYWORDS"]
