"""Initial schema: key/value cache entries with store timestamps."""

import sqlite3

DDL = [
    """
    CREATE TABLE IF NOT EXISTS cache_entries (
        key TEXT PRIMARY KEY,
        value_json TEXT NOT NULL,
        stored_at REAL NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_cache_entries_stored_at ON cache_entries(stored_at)",
]


def up(conn: sqlite3.Connection) -> None:
    for stmt in DDL:
        conn.execute(stmt)
    conn.commit()
