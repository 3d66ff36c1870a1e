"""TTL key/value cache backed by SQLite.

Reads and writes are not transactional across requests: two concurrent
misses on the same key both fetch and both write, and the last write wins.
Payloads are deterministic for a given key within a TTL window.
"""

import json
import logging
import sqlite3
from typing import Any, Protocol

from destinations.models.common import epoch_seconds
from destinations.storage import cache_repo

logger = logging.getLogger(__name__)


class Cache(Protocol):
    def get(self, key: str) -> Any | None: ...

    def get_stale(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any, timestamp: float | None = None) -> None: ...


class SqliteCache:
    def __init__(self, conn: sqlite3.Connection, ttl_seconds: float):
        self.conn = conn
        self.ttl_seconds = ttl_seconds

    def get(self, key: str, now: float | None = None) -> Any | None:
        """Return the cached value if it is younger than the TTL."""
        entry = cache_repo.get_entry(self.conn, key)
        if entry is None:
            return None
        if now is None:
            now = epoch_seconds()
        if now - entry["stored_at"] >= self.ttl_seconds:
            logger.debug("Cache expired for %s", key)
            return None
        return _decode(entry["value_json"], key)

    def get_stale(self, key: str) -> Any | None:
        """Return the cached value regardless of age."""
        entry = cache_repo.get_entry(self.conn, key)
        if entry is None:
            return None
        return _decode(entry["value_json"], key)

    def set(self, key: str, value: Any, timestamp: float | None = None) -> None:
        if timestamp is None:
            timestamp = epoch_seconds()
        cache_repo.upsert_entry(self.conn, key, json.dumps(value), timestamp)

    def purge_expired(self, now: float | None = None) -> int:
        if now is None:
            now = epoch_seconds()
        return cache_repo.delete_older_than(self.conn, now - self.ttl_seconds)

    def count(self) -> int:
        return cache_repo.count_entries(self.conn)

    def close(self) -> None:
        self.conn.close()


class NullCache:
    """Cache that never stores anything. Used when caching is disabled."""

    def get(self, key: str) -> Any | None:
        return None

    def get_stale(self, key: str) -> Any | None:
        return None

    def set(self, key: str, value: Any, timestamp: float | None = None) -> None:
        return None

    def purge_expired(self, now: float | None = None) -> int:
        return 0

    def count(self) -> int:
        return 0

    def close(self) -> None:
        return None


def _decode(value_json: str, key: str) -> Any | None:
    try:
        return json.loads(value_json)
    except json.JSONDecodeError:
        logger.warning("Discarding undecodable cache entry %s", key)
        return None
