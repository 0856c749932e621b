"""Document loading: YAML/JSON text -> generic tree -> SchemaGraph.

JSON is accepted through the YAML parser, since every JSON document is
also valid YAML.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .exceptions import DocumentParseError
from .graph.types import SchemaGraph
from .resolver import resolve

logger = logging.getLogger(__name__)


def load_document(content: str | bytes) -> Any:
    """Deserialize YAML or JSON text into a generic tree.

    Args:
        content: Document text, or UTF-8 encoded bytes.

    Returns:
        The parsed tree. Empty input yields None.

    Raises:
        DocumentParseError: If the bytes are not UTF-8 or the text is not
            valid YAML/JSON. The message is the underlying error's.
    """
    if isinstance(content, (bytes, bytearray, memoryview)):
        try:
            content = bytes(content).decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise DocumentParseError(str(e)) from e

    try:
        return yaml.safe_load(content)
    except (yaml.YAMLError, RecursionError) as e:
        # RecursionError: nesting deeper than the YAML composer can handle.
        raise DocumentParseError(str(e)) from e


def parse_schema_graph(content: str | bytes) -> SchemaGraph:
    """Parse document text and resolve its schemas into a graph."""
    document = load_document(content)
    return resolve(document)


def load_schema_graph(path: Path | str) -> SchemaGraph:
    """Read an OpenAPI file from disk and resolve it.

    Raises:
        FileNotFoundError: If *path* does not exist.
        DocumentParseError: If the file cannot be deserialized.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Document not found: {path}")

    logger.debug("Loading OpenAPI document from %s", file_path)
    return parse_schema_graph(file_path.read_bytes())


__all__ = ["load_document", "parse_schema_graph", "load_schema_graph"]
