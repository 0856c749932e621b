"""Basic usage example for openapi-schema-graph."""

import sys
import tempfile
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


from schema_graph import (
    Direction,
    GraphCache,
    KuzuSchemaGraphStore,
    parse_schema_graph,
    parse_schema_upload,
)

DOCUMENT = """\
openapi: 3.0.3
info: {title: Shop, version: 1.0.0}
paths: {}
components:
  schemas:
    Order:
      type: object
      required: [id]
      properties:
        id: {type: integer}
        owner:
          $ref: 'common.yml#/components/schemas/User'
        lines:
          type: array
          items:
            $ref: '#/components/schemas/OrderLine'
        shipping:
          type: object
          properties:
            address:
              $ref: '#/components/schemas/Address'
    OrderLine:
      allOf:
        - $ref: '#/components/schemas/Product'
        - type: object
          properties:
            quantity: {type: integer}
    Product:
      type: object
      properties:
        name: {type: string}
    Address:
      type: object
    Status:
      type: string
      enum: [open, shipped, closed]
"""


def main():
    print("=" * 60)
    print("openapi-schema-graph - Basic Usage Example")
    print("=" * 60)

    # 1. Resolve a document
    print("\n1. Resolving schemas...")
    graph = parse_schema_graph(DOCUMENT)
    for node in graph.nodes:
        print(f"   Node: {node.id:<20} {node.kind.value}")
    for edge in graph.edges:
        print(f"   Edge: {edge.id:<28} {edge.kind.value:<12} {edge.label}")

    # 2. Upload boundary
    print("\n2. Handling uploads...")
    print(f"   Missing file: {parse_schema_upload({})}")
    print(f"   Broken file:  {parse_schema_upload({'file': b'components: [oops'})}")

    with tempfile.TemporaryDirectory() as tmp:
        # 3. Cache the last graph
        print("\n3. Caching the graph...")
        with GraphCache(Path(tmp) / "cache") as cache:
            cache.save(graph)
            restored = cache.load()
            print(f"   Restored {len(restored.nodes)} nodes, {len(restored.edges)} edges")

        # 4. Query relationships in Kuzu
        print("\n4. Querying with Kuzu...")
        store = KuzuSchemaGraphStore(Path(tmp) / "graph_db")
        store.save_graph(graph)
        for edge in store.query_neighbors("Order", Direction.OUTGOING):
            print(f"   Order --{edge.label}--> {edge.target}")
        reachable = store.traverse("Order", max_hops=2)
        print(f"   Reachable from Order: {[n.id for n in reachable.nodes]}")
        store.close()

    print("\n" + "=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
