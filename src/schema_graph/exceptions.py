"""Custom exceptions for openapi-schema-graph."""


class SchemaGraphError(Exception):
    """Base exception for schema graph operations."""


class DocumentParseError(SchemaGraphError):
    """Raised when document text cannot be deserialized.

    The message is the underlying parser's message, unchanged, so it can be
    shown to the user as-is.
    """
