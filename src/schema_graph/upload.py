"""Upload boundary: a multipart form field in, a graph or an error out.

Failures are reported as ``{"error": message}`` dicts rather than raised,
so callers can hand the message straight to the user.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .exceptions import SchemaGraphError
from .graph.types import SchemaGraph
from .loader import parse_schema_graph

logger = logging.getLogger(__name__)

ACCEPTED_EXTENSIONS = (".yaml", ".yml")
NO_FILE_MESSAGE = "No file uploaded"


def _read_upload(value: Any) -> bytes | str | None:
    """Return the uploaded content, or None if *value* is not a file."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    read = getattr(value, "read", None)
    if callable(read):
        data = read()
        if isinstance(data, (bytes, bytearray, memoryview)):
            return bytes(data)
        if isinstance(data, str):
            return data
    return None


def parse_schema_upload(
    form: Mapping[str, Any],
    field: str = "file",
) -> SchemaGraph | dict[str, str]:
    """Resolve the OpenAPI document uploaded in *form[field]*.

    Args:
        form: Multipart form fields. The file may be raw bytes or any
            file-like object with a ``read()`` method.
        field: Name of the form field holding the file.

    Returns:
        The resolved SchemaGraph, or ``{"error": message}`` when no file was
        supplied or it could not be read or parsed. A closed or exhausted
        file object (``ValueError`` from ``read()``) is a read failure.
    """
    value = form.get(field)
    # A plain string is a regular form value, not a file.
    if value is None or isinstance(value, str):
        return {"error": NO_FILE_MESSAGE}

    try:
        content = _read_upload(value)
        if content is None:
            return {"error": NO_FILE_MESSAGE}
        return parse_schema_graph(content)
    except (OSError, ValueError, SchemaGraphError) as e:
        logger.warning("Failed to parse uploaded document: %s", e)
        return {"error": str(e)}


__all__ = ["ACCEPTED_EXTENSIONS", "NO_FILE_MESSAGE", "parse_schema_upload"]
