"""Database schema for the SQLite persistence port."""

SCHEMA = """
-- Key-value table: one row per persisted record
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""
