"""KuzuSchemaGraphStore -- persist a SchemaGraph into an embedded Kuzu database.

Storing the resolved graph lets callers query schema relationships with
Cypher: neighbours of a schema, or everything reachable from it.

Public API:
    KuzuSchemaGraphStore: Kuzu-backed store for resolved schema graphs.
"""

from __future__ import annotations

import json
import logging
import uuid
from collections import deque
from pathlib import Path
from typing import Any

import kuzu

from .types import Direction, EdgeKind, GraphEdge, GraphNode, NodeKind, SchemaGraph

logger = logging.getLogger(__name__)

NODE_TABLE = "SchemaNode"
REL_TABLE = "SchemaEdge"

_NODE_COLUMNS = (
    "n.node_id, n.label, n.kind, n.description, n.property_names, "
    "n.required_names, n.is_external, n.external_file_path"
)


class KuzuSchemaGraphStore:
    """Kuzu graph database holding one resolved schema graph.

    Edges whose target has no node (references to undefined schemas) are
    kept by storing the target as a placeholder row. Placeholders are
    never returned as nodes.

    Args:
        db_path: Filesystem path for the Kuzu database.
        store_id: Optional human-readable identifier; auto-generated if None.
    """

    # ── construction / lifecycle ──────────────────────────────

    def __init__(self, db_path: Path | str, store_id: str | None = None) -> None:
        self._db_path = Path(db_path)
        self._store_id = store_id or f"kuzu-{uuid.uuid4().hex[:8]}"
        self._db = kuzu.Database(str(self._db_path))
        self._conn = kuzu.Connection(self._db)
        self._ensure_schema()

    @property
    def store_id(self) -> str:
        return self._store_id

    def close(self) -> None:
        """Release Kuzu resources."""
        self._conn = None  # type: ignore[assignment]
        self._db = None  # type: ignore[assignment]

    def _ensure_schema(self) -> None:
        self._conn.execute(
            f"CREATE NODE TABLE IF NOT EXISTS {NODE_TABLE}("
            "node_id STRING, label STRING, kind STRING, description STRING, "
            "property_names STRING, required_names STRING, is_external BOOLEAN, "
            "external_file_path STRING, placeholder BOOLEAN, seq INT64, "
            "PRIMARY KEY(node_id))"
        )
        self._conn.execute(
            f"CREATE REL TABLE IF NOT EXISTS {REL_TABLE}("
            f"FROM {NODE_TABLE} TO {NODE_TABLE}, "
            "edge_id STRING, label STRING, kind STRING, seq INT64)"
        )

    # ── whole-graph operations ────────────────────────────────

    def save_graph(self, graph: SchemaGraph) -> None:
        """Replace the stored graph with *graph*.

        The delete and all inserts run in one transaction; on failure the
        previously stored graph is left untouched.
        """
        self._conn.execute("BEGIN TRANSACTION")
        try:
            placeholders = self._write_graph(graph)
        except Exception:
            self._conn.execute("ROLLBACK")
            raise
        self._conn.execute("COMMIT")

        logger.debug(
            "Stored %d nodes, %d edges (%d placeholders) in %s",
            len(graph.nodes),
            len(graph.edges),
            placeholders,
            self._store_id,
        )

    def _write_graph(self, graph: SchemaGraph) -> int:
        """Delete the stored graph and insert *graph*. Returns the placeholder count."""
        self._conn.execute(f"MATCH (n:{NODE_TABLE}) DETACH DELETE n")

        known: set[str] = set()
        for seq, node in enumerate(graph.nodes):
            self._insert_node(node, seq, placeholder=False)
            known.add(node.id)

        placeholders = 0
        for seq, edge in enumerate(graph.edges):
            for endpoint in (edge.source, edge.target):
                if endpoint not in known:
                    self._insert_node(
                        GraphNode(id=endpoint, label=endpoint), -1, placeholder=True
                    )
                    known.add(endpoint)
                    placeholders += 1
            self._conn.execute(
                f"MATCH (a:{NODE_TABLE}), (b:{NODE_TABLE}) "
                "WHERE a.node_id = $sid AND b.node_id = $tid "
                f"CREATE (a)-[:{REL_TABLE} {{edge_id: $eid, label: $label, "
                "kind: $kind, seq: $seq}]->(b)",
                {
                    "sid": edge.source,
                    "tid": edge.target,
                    "eid": edge.id,
                    "label": edge.label,
                    "kind": edge.kind.value,
                    "seq": seq,
                },
            )
        return placeholders

    def load_graph(self) -> SchemaGraph:
        """Return the stored graph in its original order."""
        result = self._conn.execute(
            f"MATCH (n:{NODE_TABLE}) WHERE n.placeholder = false "
            f"RETURN {_NODE_COLUMNS} ORDER BY n.seq"
        )
        nodes: list[GraphNode] = []
        while result.has_next():
            nodes.append(self._row_to_node(result.get_next()))

        result = self._conn.execute(
            f"MATCH (a:{NODE_TABLE})-[r:{REL_TABLE}]->(b:{NODE_TABLE}) "
            "RETURN r.edge_id, a.node_id, b.node_id, r.label, r.kind ORDER BY r.seq"
        )
        edges: list[GraphEdge] = []
        while result.has_next():
            edges.append(self._row_to_edge(result.get_next()))

        return SchemaGraph(nodes=tuple(nodes), edges=tuple(edges))

    # ── queries ───────────────────────────────────────────────

    def get_node(self, node_id: str) -> GraphNode | None:
        """Fetch a stored schema node by ID, or None."""
        result = self._conn.execute(
            f"MATCH (n:{NODE_TABLE}) WHERE n.node_id = $nid AND n.placeholder = false "
            f"RETURN {_NODE_COLUMNS}",
            {"nid": node_id},
        )
        if not result.has_next():
            return None
        return self._row_to_node(result.get_next())

    def query_neighbors(
        self,
        node_id: str,
        direction: Direction = Direction.OUTGOING,
    ) -> list[GraphEdge]:
        """Return the edges leaving and/or entering *node_id*, in graph order."""
        found: dict[str, tuple[int, GraphEdge]] = {}

        if direction in (Direction.OUTGOING, Direction.BOTH):
            for seq, edge in self._query_edges("a.node_id = $nid", node_id):
                found[edge.id] = (seq, edge)
        if direction in (Direction.INCOMING, Direction.BOTH):
            for seq, edge in self._query_edges("b.node_id = $nid", node_id):
                found[edge.id] = (seq, edge)

        return [edge for _, edge in sorted(found.values(), key=lambda pair: pair[0])]

    def traverse(self, start_id: str, max_hops: int = 3) -> SchemaGraph:
        """BFS along outgoing edges from *start_id* up to *max_hops* hops.

        Returns:
            Sub-graph of the visited schema nodes and the edges traversed.
            Empty if *start_id* is not stored.
        """
        start_node = self.get_node(start_id)
        if start_node is None:
            return SchemaGraph()

        visited: set[str] = {start_id}
        nodes: list[GraphNode] = [start_node]
        edges: list[GraphEdge] = []
        queue: deque[tuple[str, int]] = deque([(start_id, 0)])

        while queue:
            current_id, depth = queue.popleft()
            if depth >= max_hops:
                continue
            for edge in self.query_neighbors(current_id, Direction.OUTGOING):
                edges.append(edge)
                if edge.target in visited:
                    continue
                visited.add(edge.target)
                neighbor = self.get_node(edge.target)
                if neighbor is not None:
                    nodes.append(neighbor)
                queue.append((edge.target, depth + 1))

        return SchemaGraph(nodes=tuple(nodes), edges=tuple(edges))

    # ── internal helpers ──────────────────────────────────────

    def _insert_node(self, node: GraphNode, seq: int, placeholder: bool) -> None:
        self._conn.execute(
            f"CREATE (:{NODE_TABLE} {{node_id: $nid, label: $label, kind: $kind, "
            "description: $description, property_names: $props, "
            "required_names: $required, is_external: $is_external, "
            "external_file_path: $file_path, placeholder: $placeholder, seq: $seq})",
            {
                "nid": node.id,
                "label": node.label,
                "kind": node.kind.value,
                "description": node.description or "",
                "props": json.dumps(list(node.property_names)),
                "required": json.dumps(list(node.required_names)),
                "is_external": node.is_external,
                "file_path": node.external_file_path or "",
                "placeholder": placeholder,
                "seq": seq,
            },
        )

    def _query_edges(self, where: str, node_id: str) -> list[tuple[int, GraphEdge]]:
        result = self._conn.execute(
            f"MATCH (a:{NODE_TABLE})-[r:{REL_TABLE}]->(b:{NODE_TABLE}) WHERE {where} "
            "RETURN r.edge_id, a.node_id, b.node_id, r.label, r.kind, r.seq",
            {"nid": node_id},
        )
        pairs: list[tuple[int, GraphEdge]] = []
        while result.has_next():
            row = result.get_next()
            pairs.append((int(row[5]), self._row_to_edge(row)))
        return pairs

    @staticmethod
    def _row_to_node(row: list[Any]) -> GraphNode:
        """Convert a Kuzu result row (see _NODE_COLUMNS) to a GraphNode."""
        return GraphNode(
            id=str(row[0]),
            label=str(row[1]),
            kind=NodeKind(row[2]),
            description=row[3] or None,
            property_names=tuple(json.loads(row[4] or "[]")),
            required_names=tuple(json.loads(row[5] or "[]")),
            is_external=bool(row[6]),
            external_file_path=row[7] or None,
        )

    @staticmethod
    def _row_to_edge(row: list[Any]) -> GraphEdge:
        return GraphEdge(
            id=str(row[0]),
            source=str(row[1]),
            target=str(row[2]),
            label=str(row[3]),
            kind=EdgeKind(row[4]),
        )


__all__ = ["KuzuSchemaGraphStore"]
