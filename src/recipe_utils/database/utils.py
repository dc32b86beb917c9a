"""Database utility functions for recipe databases."""

import contextlib
import json
import logging
import pathlib
import sqlite3
from typing import Generator, Union

import pandas as pd

logger = logging.getLogger(__name__)

INGREDIENT_COLUMNS = [
    "ingredient",
    "quantity",
    "quantity_float",
    "unit",
    "quantity_ml",
    "quantity_g",
    "notes",
    "category",
]


def get_connection(db_path: Union[str, pathlib.Path]) -> sqlite3.Connection:
    """Get a SQLite database connection with foreign keys enabled.

    Parent directories of a file path are created if missing.

    Args:
        db_path: Path to the SQLite database file

    Returns:
        SQLite connection with foreign keys enabled
    """
    if str(db_path) != ":memory:":
        pathlib.Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path)
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextlib.contextmanager
def transaction(conn: sqlite3.Connection) -> Generator[sqlite3.Cursor, None, None]:
    """Context manager for database transactions.

    Args:
        conn: SQLite database connection

    Yields:
        Database cursor for executing queries

    Example:
        with transaction(conn) as cur:
            cur.execute("INSERT INTO recipe(title, ingredients, steps) VALUES (?, ?, ?)",
                        ("Soup", "[]", "[]"))
    """
    cur = conn.cursor()
    try:
        yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise


def get_recipe_ingredient_data(conn: sqlite3.Connection) -> pd.DataFrame:
    """Get one row per stored recipe ingredient with its normalized amounts.

    Args:
        conn: SQLite connection with the recipe schema created

    Returns:
        DataFrame with columns: recipe_id, recipe_title, ingredient, quantity,
        quantity_float, unit, quantity_ml, quantity_g, notes, category
    """
    recipes = pd.read_sql_query(
        "SELECT id AS recipe_id, title AS recipe_title, ingredients FROM recipe ORDER BY id",
        conn,
    )
    logger.info(f"Found {len(recipes)} recipes")

    rows = []
    for recipe in recipes.itertuples(index=False):
        for ingredient in json.loads(recipe.ingredients or "[]"):
            rows.append(
                {
                    "recipe_id": recipe.recipe_id,
                    "recipe_title": recipe.recipe_title,
                    **{column: ingredient.get(column) for column in INGREDIENT_COLUMNS},
                }
            )

    return pd.DataFrame(rows, columns=["recipe_id", "recipe_title", *INGREDIENT_COLUMNS])
