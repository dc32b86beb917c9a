"""Ingredient quantity parsing and line normalization."""

import logging
import re
from typing import Optional

from recipe_utils.ingredients.models import IngredientLine
from recipe_utils.ingredients.number_utils import (
    _is_fraction,
    _is_number,
    _parse_fraction,
    replace_numeric_hyphens,
    replace_unicode_fractions,
)
from recipe_utils.ingredients.units import UNIT_LOOKUP, canonical_unit, convert

logger = logging.getLogger(__name__)

# --- Constants ---

# Longest spellings first so "tablespoons" wins over "tablespoon"
_UNIT_ALTERNATION = "|".join(
    re.escape(unit) for unit in sorted(UNIT_LOOKUP, key=len, reverse=True)
)

# quantity? unit? rest, anchored over the whole trimmed line. A unit token must
# not run into further letters, so "large" is not read as "l".
INGREDIENT_LINE_PATTERN = re.compile(
    r"^(?P<quantity>[\d\s/.¼-¾⅐-⅞-]+)?"
    r"\s*(?:(?P<unit>" + _UNIT_ALTERNATION + r")(?![a-z]))?"
    r"\.?\s*(?P<rest>.*)$",
    re.IGNORECASE | re.DOTALL,
)

_HAS_DIGIT = re.compile(r"[\d¼-¾⅐-⅞]")

# --- Functions ---


def parse_quantity(text: Optional[str]) -> Optional[float]:
    """Parse a free-form quantity string into a number.

    Unicode fraction glyphs become "a/b", hyphens between numbers become
    spaces, and every whitespace-separated token that reads as a fraction or
    a plain number is summed. Tokens that do not parse are skipped.

    Ranges are not special-cased here: "1 to 2" sums to 3.0. The purchase
    path has its own upper-bound range handling.

    Args:
        text: Quantity text such as "1 1/2", "1-1/2", "½" or "2.5".

    Returns:
        The summed value, or None when the input is empty or no token parsed.
        A literal "0" returns 0.0.

    Examples:
        >>> parse_quantity("1 1/2")
        1.5
        >>> parse_quantity("½")
        0.5
        >>> parse_quantity("abc") is None
        True
    """
    if text is None or not text.strip():
        return None

    text = replace_numeric_hyphens(replace_unicode_fractions(text))

    total = 0.0
    matched = False
    for token in text.split():
        if _is_fraction(token):
            try:
                value = float(_parse_fraction(token))
            except ZeroDivisionError:
                continue
        elif _is_number(token):
            value = float(token)
        else:
            continue
        if value < 0:
            continue
        total += value
        matched = True

    return total if matched else None


def normalize_ingredient_line(raw: Optional[str]) -> IngredientLine:
    """Split a raw ingredient line into quantity, unit, name and notes.

    This is a heuristic, not a grammar: only known unit tokens are recognised,
    so "2 large eggs, beaten" yields no unit and the name "large eggs".

    Args:
        raw: Ingredient text, e.g. "1 1/2 cups finely chopped onions, divided".

    Returns:
        An IngredientLine. Text after the first comma becomes ``notes``.
        ``quantity_ml``/``quantity_g`` are filled only when both a numeric
        quantity and a convertible unit were found.
    """
    line = (raw or "").strip()

    match = INGREDIENT_LINE_PATTERN.match(line)
    if not match:
        return IngredientLine(
            raw=line,
            quantity=None,
            quantity_float=None,
            unit=None,
            ingredient_name=line,
            notes=None,
        )

    quantity_text = (match.group("quantity") or "").strip()
    if not _HAS_DIGIT.search(quantity_text):
        quantity_text = None

    unit_token = match.group("unit")
    unit = canonical_unit(unit_token.lower()) if unit_token else None

    rest = match.group("rest").strip()
    name, _, notes = rest.partition(",")

    quantity_float = parse_quantity(quantity_text)
    converted = convert(quantity_float, unit)

    logger.debug(f"Normalized '{line}': qty={quantity_float} unit={unit_token}")

    return IngredientLine(
        raw=line,
        quantity=quantity_text,
        quantity_float=quantity_float,
        unit=unit,
        ingredient_name=name.strip(),
        notes=notes.strip() or None,
        quantity_ml=converted.get("ml"),
        quantity_g=converted.get("g"),
    )
