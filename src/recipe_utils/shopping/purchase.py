"""Convert recipe measurements to quantities a shopper can buy.

Recipe amounts are converted to fluid ounces (volume) or ounces (weight) and
rounded up to the package sizes stores actually sell. Rounding never goes
down: under-buying is the failure mode to avoid.
"""

import dataclasses
import logging
import math
import re
from typing import Dict, Optional, Sequence, Tuple

from recipe_utils.ingredients.number_utils import replace_unicode_fractions

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class PurchaseQuantity:
    quantity: str
    unit: str
    display_text: str


@dataclasses.dataclass(frozen=True)
class PackageSize:
    sizes: Tuple[float, ...]
    unit: str


# Common package sizes per ingredient type, ascending
PACKAGE_SIZES: Dict[str, PackageSize] = {
    # Dry goods, sold in bags
    "flour": PackageSize((1, 2, 5), "lb"),
    "sugar": PackageSize((1, 2, 4, 5), "lb"),
    "rice": PackageSize((1, 2, 5, 10), "lb"),
    "pasta": PackageSize((1, 2), "lb"),
    # Small jars
    "spice": PackageSize((0.5, 1, 2, 4), "oz"),
    # Bottles
    "oil": PackageSize((8, 16, 32), "fl oz"),
    "vinegar": PackageSize((8, 16, 32), "fl oz"),
    # Cans
    "canned": PackageSize((8, 15, 28), "oz"),
    # Quart cartons
    "stock": PackageSize((32,), "fl oz"),
    "broth": PackageSize((32,), "fl oz"),
    # 4-stick packs
    "butter": PackageSize((1,), "lb"),
    # Sold by the piece or pound
    "produce": PackageSize((1,), "lb"),
}

STOCK_CONTAINER_FL_OZ = 32

# Recipe unit -> fluid ounces
VOLUME_FACTORS: Dict[str, float] = {
    "cup": 8,
    "cups": 8,
    "tablespoon": 0.5,
    "tablespoons": 0.5,
    "tbsp": 0.5,
    "tsp": 0.1667,
    "teaspoon": 0.1667,
    "teaspoons": 0.1667,
    "fluid ounce": 1,
    "fluid ounces": 1,
    "fl oz": 1,
    "pint": 16,
    "pints": 16,
    "pt": 16,
    "quart": 32,
    "quarts": 32,
    "qt": 32,
    "gallon": 128,
    "gallons": 128,
    "gal": 128,
}

# Recipe unit -> ounces
WEIGHT_FACTORS: Dict[str, float] = {
    "ounce": 1,
    "ounces": 1,
    "oz": 1,
    "pound": 16,
    "pounds": 16,
    "lb": 16,
    "lbs": 16,
    "gram": 0.0353,
    "grams": 0.0353,
    "g": 0.0353,
    "kilogram": 35.274,
    "kilograms": 35.274,
    "kg": 35.274,
}

# Package unit -> ounces, for expressing a weight in the package's unit
_OUNCES_PER_PACKAGE_UNIT = {"oz": 1, "fl oz": 1, "lb": 16}

COUNT_UNITS = {"piece", "pieces", "item", "items"}

# Checked in order; the first matching pattern names the package type
_PACKAGE_CATEGORY_RULES: Tuple[Tuple[re.Pattern, str], ...] = (
    (re.compile(r"flour|oats|oatmeal|quinoa|couscous|barley"), "flour"),
    (re.compile(r"sugar"), "sugar"),
    (re.compile(r"rice"), "rice"),
    (re.compile(r"pasta|spaghetti|penne|macaroni|noodle"), "pasta"),
    (
        re.compile(
            r"spice|pepper|\bsalt\b|cumin|coriander|paprika|turmeric|curry"
            r"|garlic powder|onion powder"
        ),
        "spice",
    ),
    (re.compile(r"\boil\b|\boils\b"), "oil"),
    (re.compile(r"vinegar|balsamic"), "vinegar"),
    (re.compile(r"stock|broth|bouillon"), "stock"),
    (re.compile(r"butter|margarine"), "butter"),
    (re.compile(r"\bcan(?:s|ned)?\b|tomato|bean|chickpea"), "canned"),
)

_MIXED_NUMBER = re.compile(r"^(\d+)(?:\s+|\s*-\s*)(\d+)\s*/\s*(\d+)$")
_SIMPLE_FRACTION = re.compile(r"^(\d+)\s*/\s*(\d+)$")
_RANGE = re.compile(
    r"^(\d+(?:\.\d+)?(?:\s*/\s*\d+)?)\s*(?:to|-|–|or)\s*(\d+(?:\.\d+)?(?:\s*/\s*\d+)?)$",
    re.IGNORECASE,
)
_LEADING_NUMBER = re.compile(r"^\d*\.?\d+")


def parse_purchase_quantity(quantity: Optional[str]) -> float:
    """Parse a shopping list quantity, taking the upper end of ranges.

    Args:
        quantity: Text such as "1 1/2", "1/4", "2 to 3" or "1.5".

    Returns:
        The numeric amount, 0.0 when missing or unreadable.

    Examples:
        >>> parse_purchase_quantity("1 1/2")
        1.5
        >>> parse_purchase_quantity("2 to 3")
        3.0
    """
    if not quantity:
        return 0.0
    text = replace_unicode_fractions(quantity).strip()
    if not text:
        return 0.0

    match = _MIXED_NUMBER.match(text)
    if match:
        whole, numerator, denominator = (int(group) for group in match.groups())
        if denominator and numerator < denominator:
            return whole + numerator / denominator

    match = _SIMPLE_FRACTION.match(text)
    if match:
        numerator, denominator = (int(group) for group in match.groups())
        return numerator / denominator if denominator else 0.0

    match = _RANGE.match(text)
    if match:
        return parse_purchase_quantity(match.group(2))

    match = _LEADING_NUMBER.match(text)
    if match:
        return float(match.group(0))
    return 0.0


def get_package_category(ingredient_name: Optional[str]) -> str:
    """Pick the PACKAGE_SIZES entry for an ingredient; "produce" by default."""
    name = (ingredient_name or "").lower()
    for pattern, category in _PACKAGE_CATEGORY_RULES:
        if pattern.search(name):
            return category
    return "produce"


def round_up_to_package_size(amount: float, sizes: Sequence[float]) -> float:
    """Return the smallest size >= amount, or the largest size if none is.

    Examples:
        >>> round_up_to_package_size(8, [8, 16, 32])
        8
        >>> round_up_to_package_size(17, [8, 16, 32])
        32
    """
    ordered = sorted(sizes)
    for size in ordered:
        if amount <= size:
            return size
    return ordered[-1]


def _format_amount(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def _package(amount: float, unit: str) -> PurchaseQuantity:
    text = _format_amount(amount)
    return PurchaseQuantity(quantity=text, unit=unit, display_text=f"{text} {unit}")


def to_purchase_quantity(
    recipe_quantity: Optional[str],
    recipe_unit: Optional[str],
    ingredient_name: str,
) -> Optional[PurchaseQuantity]:
    """Convert a recipe measurement into a store-buyable amount.

    Args:
        recipe_quantity: Quantity text from the recipe or list ("2", "1 1/2").
        recipe_unit: Unit text ("tbsp", "cups", "g", ...).
        ingredient_name: Used to look up the package sizes.

    Returns:
        A PurchaseQuantity, or None when the quantity is zero and no unit was
        given. Units that cannot be converted are passed through unchanged.

    Examples:
        >>> to_purchase_quantity("2", "tbsp", "olive oil")
        PurchaseQuantity(quantity='8', unit='fl oz', display_text='8 fl oz')
    """
    category = get_package_category(ingredient_name)
    package = PACKAGE_SIZES.get(category, PACKAGE_SIZES["produce"])

    if not recipe_quantity and not recipe_unit:
        # Nothing specified, buy one package
        return _package(1, package.unit)

    amount = parse_purchase_quantity(recipe_quantity)
    if amount == 0 and not recipe_unit:
        return None

    unit = (recipe_unit or "").strip().lower()

    if unit in VOLUME_FACTORS:
        fl_oz = amount * VOLUME_FACTORS[unit]
        if category in ("stock", "broth"):
            containers = max(1, math.ceil(fl_oz / STOCK_CONTAINER_FL_OZ))
            label = "container" if containers == 1 else "containers"
            return PurchaseQuantity(
                quantity=str(containers),
                unit="container",
                display_text=(
                    f"{containers} {label} ({STOCK_CONTAINER_FL_OZ} fl oz each)"
                ),
            )
        if category in ("oil", "vinegar"):
            return _package(round_up_to_package_size(fl_oz, package.sizes), package.unit)
    elif unit in WEIGHT_FACTORS:
        ounces = amount * WEIGHT_FACTORS[unit]
        in_package_unit = ounces / _OUNCES_PER_PACKAGE_UNIT.get(package.unit, 1)
        return _package(
            round_up_to_package_size(in_package_unit, package.sizes), package.unit
        )

    # Items sold by count ("2 eggs", "1 onion")
    if not unit or unit in COUNT_UNITS:
        count = math.ceil(amount or 1)
        count_unit = unit or "piece"
        return PurchaseQuantity(
            quantity=str(count), unit=count_unit, display_text=f"{count} {count_unit}"
        )

    logger.debug(f"No package conversion for {recipe_quantity!r} {recipe_unit!r}")
    quantity = recipe_quantity or "1"
    unit_text = recipe_unit or package.unit
    return PurchaseQuantity(
        quantity=quantity, unit=unit_text, display_text=f"{quantity} {unit_text}"
    )
