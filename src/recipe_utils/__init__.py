"""Recipe Utils - Utilities for recipe import, normalization and shopping lists."""

__version__ = "0.1.0"

from . import database, ingredients, recipes, scraping, shopping, similarity

__all__ = ["database", "ingredients", "recipes", "scraping", "shopping", "similarity"]
