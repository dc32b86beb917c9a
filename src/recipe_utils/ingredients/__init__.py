"""Ingredient parsing and normalization utilities."""

from .models import IngredientLine, UnitSpec
from .parsing import normalize_ingredient_line, parse_quantity
from .units import (
    UNIT_LOOKUP,
    UNIT_SPECS,
    canonical_unit,
    convert,
    normalize_unit,
)

__all__ = [
    "parse_quantity",
    "normalize_ingredient_line",
    "normalize_unit",
    "canonical_unit",
    "convert",
    "IngredientLine",
    "UnitSpec",
    "UNIT_LOOKUP",
    "UNIT_SPECS",
]
