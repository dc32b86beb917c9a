"""Database utilities for imported recipe storage."""

from .schema import DDL, create_schema
from .store import (
    SQLiteRecipeStore,
    decode_embedding,
    encode_embedding,
    insert_recipe,
)
from .utils import (
    get_connection,
    get_recipe_ingredient_data,
    transaction,
)

__all__ = [
    "DDL",
    "create_schema",
    "get_connection",
    "transaction",
    "get_recipe_ingredient_data",
    "SQLiteRecipeStore",
    "insert_recipe",
    "encode_embedding",
    "decode_embedding",
]
