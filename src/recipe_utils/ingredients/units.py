"""Unit synonym table and metric conversion for recipe ingredients."""

from typing import Dict, Optional

from recipe_utils.ingredients.models import UnitSpec

# Canonical unit -> accepted spellings (matched case-insensitively)
UNIT_MAP = {
    # Volume
    "tsp": ["tsp", "tsps", "teaspoon", "teaspoons"],
    "tbsp": ["tbsp", "tbsps", "tbs", "tablespoon", "tablespoons"],
    "cup": ["cup", "cups"],
    "ml": ["ml", "milliliter", "milliliters", "millilitre", "millilitres"],
    "l": ["l", "liter", "liters", "litre", "litres"],
    "pinch": ["pinch", "pinches"],
    # Weight
    "oz": ["oz", "ounce", "ounces"],
    "lb": ["lb", "lbs", "pound", "pounds"],
    "g": ["g", "gram", "grams"],
    "kg": ["kg", "kgs", "kilogram", "kilograms"],
    # Count
    "clove": ["clove", "cloves"],
    "piece": ["piece", "pieces"],
    "can": ["can", "cans"],
}

# Create reverse mapping for lookup
UNIT_LOOKUP = {v: k for k, vs in UNIT_MAP.items() for v in vs}

# Conversion factors to the base units (ml for volume, g for weight).
# Count units carry neither factor.
UNIT_SPECS: Dict[str, UnitSpec] = {
    "tsp": UnitSpec("tsp", to_ml=4.92892),
    "tbsp": UnitSpec("tbsp", to_ml=14.7868),
    "cup": UnitSpec("cup", to_ml=240.0),
    "ml": UnitSpec("ml", to_ml=1.0),
    "l": UnitSpec("l", to_ml=1000.0),
    "pinch": UnitSpec("pinch", to_ml=0.36),
    "oz": UnitSpec("oz", to_g=28.3495),
    "lb": UnitSpec("lb", to_g=453.592),
    "g": UnitSpec("g", to_g=1.0),
    "kg": UnitSpec("kg", to_g=1000.0),
    "clove": UnitSpec("clove"),
    "piece": UnitSpec("piece"),
    "can": UnitSpec("can"),
}


def normalize_unit(unit: str) -> str:
    """Normalize unit names to their canonical key.

    Args:
        unit: Raw unit string

    Returns:
        Canonical unit key, or the cleaned input if the unit is unknown

    Examples:
        >>> normalize_unit("Tablespoons")
        'tbsp'
        >>> normalize_unit("lbs.")
        'lb'
    """
    unit = unit.strip().lower().strip(".")
    return UNIT_LOOKUP.get(unit, unit)


def canonical_unit(raw_unit: Optional[str]) -> Optional[UnitSpec]:
    """Look up the UnitSpec for a raw unit token, or None if it is unknown."""
    if not raw_unit:
        return None
    return UNIT_SPECS.get(normalize_unit(raw_unit))


def convert(quantity: Optional[float], unit: Optional[UnitSpec]) -> Dict[str, float]:
    """Convert an amount to milliliters or grams.

    Args:
        quantity: Numeric amount
        unit: Unit of the amount

    Returns:
        ``{"ml": ...}`` for volume units, ``{"g": ...}`` for weight units and
        an empty dict for count units or missing input. Values are rounded to
        two decimal places.

    Examples:
        >>> convert(2, UNIT_SPECS["tbsp"])
        {'ml': 29.57}
        >>> convert(1, UNIT_SPECS["clove"])
        {}
    """
    if quantity is None or unit is None:
        return {}

    result = {}
    if unit.to_ml is not None:
        result["ml"] = round(quantity * unit.to_ml, 2)
    if unit.to_g is not None:
        result["g"] = round(quantity * unit.to_g, 2)
    return result
