"""Repository for raw cache rows."""

import sqlite3


def get_entry(conn: sqlite3.Connection, key: str) -> dict | None:
    """Get a cache row (value_json, stored_at) by key."""
    row = conn.execute(
        "SELECT key, value_json, stored_at FROM cache_entries WHERE key = ?", (key,)
    ).fetchone()
    if row is None:
        return None
    return dict(row)


def upsert_entry(
    conn: sqlite3.Connection, key: str, value_json: str, stored_at: float
) -> None:
    """Insert or replace a cache row. Last write wins."""
    conn.execute(
        "INSERT INTO cache_entries (key, value_json, stored_at) VALUES (?, ?, ?) "
        "ON CONFLICT(key) DO UPDATE SET value_json = excluded.value_json, "
        "stored_at = excluded.stored_at",
        (key, value_json, stored_at),
    )
    conn.commit()


def delete_older_than(conn: sqlite3.Connection, cutoff: float) -> int:
    """Delete rows stored at or before ``cutoff``. Returns the number removed."""
    cursor = conn.execute("DELETE FROM cache_entries WHERE stored_at <= ?", (cutoff,))
    conn.commit()
    return cursor.rowcount


def count_entries(conn: sqlite3.Connection) -> int:
    return conn.execute("SELECT COUNT(*) FROM cache_entries").fetchone()[0]
