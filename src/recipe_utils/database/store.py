"""SQLite-backed recipe store with brute-force embedding search."""

import json
import logging
import sqlite3
from typing import Any, Dict, Optional, Sequence

import numpy as np

from recipe_utils.similarity.duplicates import (
    DISTANCE_FUNCTIONS,
    NearestRecipe,
    RecipeStore,
)

logger = logging.getLogger(__name__)

JSON_COLUMNS = ("tags", "categories", "nutrition", "ingredients", "steps")
RECIPE_COLUMNS = (
    "title",
    "recipe_key",
    "source",
    "yield_text",
    "prep_time_minutes",
    "cook_time_minutes",
    "tags",
    "categories",
    "nutrition",
    "ingredients",
    "steps",
    "html",
)


def encode_embedding(vector: Optional[Sequence[float]]) -> Optional[bytes]:
    """Pack an embedding as float32 bytes for a BLOB column."""
    if vector is None or len(vector) == 0:
        return None
    return np.asarray(vector, dtype=np.float32).tobytes()


def decode_embedding(blob: Optional[bytes]) -> Optional[np.ndarray]:
    if not blob:
        return None
    return np.frombuffer(blob, dtype=np.float32)


def insert_recipe(
    cur: sqlite3.Cursor,
    record: Dict[str, Any],
    embedding: Optional[Sequence[float]] = None,
) -> int:
    """Insert an imported recipe and return its ID.

    Args:
        cur: Database cursor
        record: Column values keyed by RECIPE_COLUMNS; list and dict values
            of JSON columns are serialized.
        embedding: Optional embedding vector

    Returns:
        Integer ID of the new recipe
    """
    values = []
    for column in RECIPE_COLUMNS:
        value = record.get(column)
        if column in JSON_COLUMNS:
            if column in ("ingredients", "steps"):
                value = json.dumps(value or [])
            else:
                value = json.dumps(value) if value else None
        values.append(value)

    placeholders = ", ".join("?" for _ in range(len(RECIPE_COLUMNS) + 1))
    cur.execute(
        f"INSERT INTO recipe ({', '.join(RECIPE_COLUMNS)}, embedding) "
        f"VALUES ({placeholders})",
        (*values, encode_embedding(embedding)),
    )
    return cur.lastrowid


def _casefold(text: Optional[str]) -> Optional[str]:
    return text.casefold() if isinstance(text, str) else text


class SQLiteRecipeStore(RecipeStore):
    """RecipeStore over the ``recipe`` table.

    Nearest-neighbour search loads every stored embedding and compares them
    with numpy; embeddings of a different dimension than the query are
    ignored.

    Attributes:
        conn: SQLite connection with the recipe schema created
        metric: "euclidean" or "cosine"
    """

    def __init__(self, conn: sqlite3.Connection, metric: str = "euclidean"):
        if metric not in DISTANCE_FUNCTIONS:
            raise ValueError(f"Unknown distance metric: {metric}")
        self.conn = conn
        self.metric = metric
        self.conn.create_function("casefold", 1, _casefold, deterministic=True)

    def nearest_by_embedding(self, vector: Sequence[float]) -> Optional[NearestRecipe]:
        query = np.asarray(vector, dtype=np.float32)
        cursor = self.conn.execute(
            "SELECT id, title, embedding FROM recipe WHERE embedding IS NOT NULL"
        )

        ids, titles, rows = [], [], []
        for recipe_id, title, blob in cursor.fetchall():
            embedding = decode_embedding(blob)
            if embedding is None or embedding.shape != query.shape:
                continue
            ids.append(recipe_id)
            titles.append(title)
            rows.append(embedding)

        if not rows:
            return None

        distances = DISTANCE_FUNCTIONS[self.metric](query, np.vstack(rows))
        best = int(np.argmin(distances))
        return NearestRecipe(ids[best], titles[best], float(distances[best]))

    def find_by_exact_title(self, title: str) -> Optional[int]:
        """Return the first recipe whose title matches ignoring case.

        SQLite's LOWER and NOCASE only fold ASCII, so titles are compared with
        ``str.casefold`` ("CRÈME BRÛLÉE" matches "Crème Brûlée").
        """
        row = self.conn.execute(
            "SELECT id FROM recipe WHERE casefold(title) = ? ORDER BY id LIMIT 1",
            (title.casefold(),),
        ).fetchone()
        return row[0] if row else None

    def count(self) -> int:
        return self.conn.execute("SELECT COUNT(*) FROM recipe").fetchone()[0]
