"""Command line entry point: print the schema graph of an OpenAPI file as JSON."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .cache import GraphCache
from .exceptions import DocumentParseError
from .loader import load_schema_graph


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schema-graph",
        description="Resolve the component schemas of an OpenAPI document into a graph.",
    )
    parser.add_argument("path", type=Path, help="OpenAPI document (YAML or JSON)")
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation")
    parser.add_argument(
        "--cache-dir",
        type=Path,
        default=None,
        help="Also store the graph in a cache under this directory",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        graph = load_schema_graph(args.path)
    except (FileNotFoundError, DocumentParseError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.cache_dir is not None:
        with GraphCache(args.cache_dir) as cache:
            cache.save(graph)

    print(json.dumps(graph.to_dict(), indent=args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
