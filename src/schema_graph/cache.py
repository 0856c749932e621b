"""Cache for the last successfully resolved graph.

The graph is stored as a JSON blob under a single fixed key. There is no
versioning or expiry; unreadable entries are treated as a cache miss.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import threading
from pathlib import Path

from .graph.types import SchemaGraph

logger = logging.getLogger(__name__)

STORAGE_KEY = "schema-graph-data"


class GraphCache:
    """SQLite-backed key-value cache holding one SchemaGraph.

    Attributes:
        storage_path: Directory holding the cache database.
        db_path: Path of the SQLite database file.
    """

    def __init__(self, storage_path: Path | None = None):
        """Initialize the cache.

        Args:
            storage_path: Cache directory (defaults to ~/.schema_graph/cache)

        Raises:
            PermissionError: If storage_path cannot be created
        """
        if storage_path is None:
            storage_path = Path.home() / ".schema_graph" / "cache"
        self.storage_path = Path(storage_path)

        try:
            self.storage_path.mkdir(parents=True, exist_ok=True)
        except PermissionError as e:
            raise PermissionError(f"Cannot create cache directory: {storage_path}") from e

        self.db_path = self.storage_path / "graph_cache.db"
        self._lock = threading.Lock()
        self._connection = sqlite3.connect(
            str(self.db_path),
            check_same_thread=False,
            timeout=10.0,
        )
        self._connection.execute("""
            CREATE TABLE IF NOT EXISTS cache (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        """)
        self._connection.commit()

    def save(self, graph: SchemaGraph | None) -> None:
        """Store *graph*, or clear the entry when there is no graph to keep."""
        if graph is None or graph.is_empty:
            self.clear()
            return

        payload = json.dumps(graph.to_dict())
        with self._lock:
            self._connection.execute(
                "INSERT OR REPLACE INTO cache (key, value) VALUES (?, ?)",
                (STORAGE_KEY, payload),
            )
            self._connection.commit()

    def load(self) -> SchemaGraph | None:
        """Return the cached graph, or None if absent or unreadable."""
        with self._lock:
            row = self._connection.execute(
                "SELECT value FROM cache WHERE key = ?", (STORAGE_KEY,)
            ).fetchone()
        if row is None:
            return None

        try:
            return SchemaGraph.from_dict(json.loads(row[0]))
        except (ValueError, KeyError, TypeError) as e:
            logger.debug("Ignoring unreadable cached graph: %s", e)
            return None

    def clear(self) -> None:
        with self._lock:
            self._connection.execute("DELETE FROM cache WHERE key = ?", (STORAGE_KEY,))
            self._connection.commit()

    def close(self) -> None:
        """Close the database connection."""
        if self._connection:
            self._connection.close()
            self._connection = None

    def __enter__(self) -> GraphCache:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


__all__ = ["GraphCache", "STORAGE_KEY"]
