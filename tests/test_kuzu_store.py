"""Tests for KuzuSchemaGraphStore.

Test categories:
- TestSaveLoad: round trip, ordering, replacement, rollback, placeholders
- TestQueries: get_node, query_neighbors in/out/both
- TestTraversal: BFS hop limits and missing start nodes

All tests use real Kuzu databases via tmp_path.
"""

from __future__ import annotations

import pytest

from schema_graph import (
    Direction,
    EdgeKind,
    KuzuSchemaGraphStore,
    SchemaGraph,
    parse_schema_graph,
)


# ── fixtures ──────────────────────────────────────────────────


@pytest.fixture
def store(tmp_path):
    """Create a fresh store for each test."""
    s = KuzuSchemaGraphStore(db_path=tmp_path / "schema_graph_db", store_id="test-store")
    yield s
    s.close()


@pytest.fixture
def petstore_graph(petstore_yaml):
    return parse_schema_graph(petstore_yaml)


@pytest.fixture
def populated_store(store, petstore_graph):
    """Store holding the petstore graph.

    Graph structure:
        PetAlias --$ref--> Pet --oneOf--> Cat --owner--> common.yml#User
        Zoo --items--> Pet --oneOf--> Dog --address.country--> Country
    """
    store.save_graph(petstore_graph)
    return store


# ── TestSaveLoad ──────────────────────────────────────────────


class TestSaveLoad:
    def test_store_id(self, store):
        assert store.store_id == "test-store"

    def test_empty_store(self, store):
        assert store.load_graph() == SchemaGraph()

    def test_round_trip(self, populated_store, petstore_graph):
        assert populated_store.load_graph() == petstore_graph

    def test_placeholders_not_returned(self, populated_store):
        # PetAlias has no node but is the source of an edge.
        graph = populated_store.load_graph()
        assert graph.get_node("PetAlias") is None
        assert graph.get_edge("PetAlias->Pet") is not None
        assert populated_store.get_node("PetAlias") is None

    def test_save_replaces(self, populated_store):
        replacement = parse_schema_graph(
            "components: {schemas: {A: {properties: {b: {$ref: '#/components/schemas/B'}}}}}"
        )
        populated_store.save_graph(replacement)
        assert populated_store.load_graph() == replacement

    def test_failed_save_keeps_previous_graph(
        self, populated_store, petstore_graph, monkeypatch
    ):
        replacement = parse_schema_graph(
            "components: {schemas: {A: {properties: {b: {$ref: '#/components/schemas/B'}}}}}"
        )
        original_insert = populated_store._insert_node
        calls = []

        def failing_insert(node, seq, placeholder):
            calls.append(node.id)
            if len(calls) == 2:
                raise RuntimeError("simulated write failure")
            original_insert(node, seq, placeholder=placeholder)

        monkeypatch.setattr(populated_store, "_insert_node", failing_insert)
        with pytest.raises(RuntimeError, match="simulated write failure"):
            populated_store.save_graph(replacement)
        assert populated_store.load_graph() == petstore_graph

        monkeypatch.undo()
        populated_store.save_graph(replacement)
        assert populated_store.load_graph() == replacement

    def test_dangling_target(self, store):
        graph = parse_schema_graph(
            "components: {schemas: {Zoo: {type: array, items: {$ref: '#/components/schemas/Animal'}}}}"
        )
        store.save_graph(graph)
        loaded = store.load_graph()
        assert [n.id for n in loaded.nodes] == ["Zoo"]
        assert [(e.source, e.target, e.kind) for e in loaded.edges] == [
            ("Zoo", "Animal", EdgeKind.ARRAY_ITEMS)
        ]


# ── TestQueries ───────────────────────────────────────────────


class TestQueries:
    def test_get_node(self, populated_store, petstore_graph):
        assert populated_store.get_node("Cat") == petstore_graph.get_node("Cat")
        external = populated_store.get_node("common.yml#User")
        assert external.is_external
        assert external.external_file_path == "common.yml"

    def test_get_missing_node(self, populated_store):
        assert populated_store.get_node("Nope") is None

    def test_outgoing(self, populated_store):
        edges = populated_store.query_neighbors("Pet")
        assert [(e.target, e.label) for e in edges] == [("Cat", "oneOf[0]"), ("Dog", "oneOf[1]")]

    def test_incoming(self, populated_store):
        edges = populated_store.query_neighbors("Pet", Direction.INCOMING)
        assert [e.source for e in edges] == ["Zoo", "PetAlias"]

    def test_both(self, populated_store):
        edges = populated_store.query_neighbors("Pet", Direction.BOTH)
        assert [e.id for e in edges] == ["Pet->Cat", "Pet->Dog", "Zoo->Pet", "PetAlias->Pet"]

    def test_no_neighbors(self, populated_store):
        assert populated_store.query_neighbors("Country") == []


# ── TestTraversal ─────────────────────────────────────────────


class TestTraversal:
    def test_full_reach(self, populated_store):
        sub = populated_store.traverse("Zoo")
        assert [n.id for n in sub.nodes] == [
            "Zoo", "Pet", "Cat", "Dog", "common.yml#User", "Country",
        ]
        assert [e.id for e in sub.edges] == [
            "Zoo->Pet", "Pet->Cat", "Pet->Dog", "Cat->common.yml#User", "Dog->Country",
        ]

    def test_two_hops(self, populated_store):
        sub = populated_store.traverse("Zoo", max_hops=2)
        assert [n.id for n in sub.nodes] == ["Zoo", "Pet", "Cat", "Dog"]
        assert [e.id for e in sub.edges] == ["Zoo->Pet", "Pet->Cat", "Pet->Dog"]

    def test_one_hop(self, populated_store):
        sub = populated_store.traverse("Pet", max_hops=1)
        assert [n.id for n in sub.nodes] == ["Pet", "Cat", "Dog"]

    def test_missing_start(self, populated_store):
        assert populated_store.traverse("PetAlias") == SchemaGraph()
