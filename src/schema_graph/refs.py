"""Helpers for classifying and resolving ``$ref`` pointers.

None of these functions raise for malformed reference strings; missing
segments fall back to the raw text.
"""

from __future__ import annotations

from typing import Any

LOCAL_REF_PREFIX = "#/"
UNKNOWN_SCHEMA = "Unknown"


def get_ref(schema: Any) -> str | None:
    """Return the ``$ref`` of a schema mapping, or None.

    A schema carrying a ``$ref`` is treated as a pure reference even when
    other keys sit beside it (``{"$ref": ..., "description": ...}``); those
    keys are ignored, as OpenAPI 3.0 prescribes for reference objects.
    """
    if not isinstance(schema, dict):
        return None
    ref = schema.get("$ref")
    if isinstance(ref, str) and ref:
        return ref
    return None


def is_external_ref(ref: str) -> bool:
    """True if *ref* points outside the current document."""
    return not ref.startswith(LOCAL_REF_PREFIX)


def _last_segment(path: str) -> str:
    return path.rsplit("/", 1)[-1] or path


def parse_ref(ref: str) -> tuple[str, str]:
    """Split an external ref into ``(file_name, schema_name)``.

    ``"../common.yml#/components/schemas/User"`` gives
    ``("common.yml", "User")``. A ref without ``#`` names a whole file and
    gets the schema name ``"Unknown"``.
    """
    if "#" not in ref:
        return ref, UNKNOWN_SCHEMA
    file_path, fragment = ref.split("#", 1)
    return _last_segment(file_path), _last_segment(fragment)


def external_node_id(ref: str) -> str:
    file_name, schema_name = parse_ref(ref)
    return f"{file_name}#{schema_name}"


def ref_target_id(ref: str) -> str:
    """Node ID an edge for *ref* points at."""
    if is_external_ref(ref):
        return external_node_id(ref)
    # "#/components/schemas/Pet" -> "Pet"
    return _last_segment(ref)


__all__ = [
    "LOCAL_REF_PREFIX",
    "UNKNOWN_SCHEMA",
    "get_ref",
    "is_external_ref",
    "parse_ref",
    "external_node_id",
    "ref_target_id",
]
