"""Recipe parsing and import utilities."""

from .durations import (
    extract_cooking_time_from_instructions,
    parse_iso_duration,
    parse_servings,
)
from .importer import ImportSummary, RecipeImporter, normalize_recipe_ingredients
from .parsing import Recipe, extract_schema_org_recipe, parse_recipe_html

__all__ = [
    "Recipe",
    "parse_recipe_html",
    "extract_schema_org_recipe",
    "parse_iso_duration",
    "parse_servings",
    "extract_cooking_time_from_instructions",
    "ImportSummary",
    "RecipeImporter",
    "normalize_recipe_ingredients",
]
