"""Database schema definitions for imported recipes."""

import sqlite3

DDL = """
CREATE TABLE IF NOT EXISTS recipe(
    id                INTEGER PRIMARY KEY,
    title             TEXT NOT NULL,
    recipe_key        TEXT,
    source            TEXT,
    yield_text        TEXT,
    prep_time_minutes INTEGER,
    cook_time_minutes INTEGER,
    tags              TEXT,
    categories        TEXT,
    nutrition         TEXT,
    ingredients       TEXT NOT NULL,
    steps             TEXT NOT NULL,
    html              TEXT,
    embedding         BLOB
);
"""


def create_schema(conn: sqlite3.Connection) -> None:
    """Create the database schema for imported recipes.

    Args:
        conn: SQLite database connection
    """
    conn.executescript(DDL)
