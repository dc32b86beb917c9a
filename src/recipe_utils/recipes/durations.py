"""Cooking time and yield parsing."""

import re
from typing import Any, Optional

_ISO_DURATION = re.compile(
    r"^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?)?$", re.IGNORECASE
)
_MINUTES_TEXT = re.compile(r"(\d+)\s*(?:min|minutes?)\b", re.IGNORECASE)

_TIME_UNIT = r"(hour|hr|minute|min)s?"
_RANGE = r"(\d+(?:\.\d+)?)\s*(?:-\s*(\d+(?:\.\d+)?)\s*)?"
COOKING_TIME_PATTERNS = [
    # "bake for 30 minutes", "simmer about 45 min"
    re.compile(
        r"(?:bake|cook|roast|grill|simmer|boil|fry|saut[eé]|steam|microwave|heat|warm)"
        r"(?:\s+(?:for|about|approximately))?\s+" + _RANGE + _TIME_UNIT,
        re.IGNORECASE,
    ),
    # "30 minutes at 350", "1 hour or until"
    re.compile(_RANGE + _TIME_UNIT + r"\s+(?:at|or|until)", re.IGNORECASE),
    # "for 30-45 minutes"
    re.compile(r"for\s+" + _RANGE + _TIME_UNIT, re.IGNORECASE),
]

MAX_COOKING_MINUTES = 24 * 60


def parse_iso_duration(value: Any) -> Optional[int]:
    """Convert an ISO-8601 duration such as "PT1H20M" to minutes.

    Seconds of 30 or more round up one minute. Strings like "45 minutes"
    are accepted as a fallback and plain numbers are taken as minutes.

    Returns:
        Minutes, or None when nothing could be read.

    Examples:
        >>> parse_iso_duration("PT1H20M")
        80
        >>> parse_iso_duration("PT45S")
        1
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    match = _ISO_DURATION.match(text)
    if match and any(match.groups()):
        days, hours, minutes, seconds = (int(group or 0) for group in match.groups())
        return days * 1440 + hours * 60 + minutes + (1 if seconds >= 30 else 0)

    match = _MINUTES_TEXT.search(text)
    if match:
        return int(match.group(1))
    return None


def extract_cooking_time_from_instructions(instructions: Optional[str]) -> Optional[int]:
    """Find the longest cooking time mentioned in instruction text.

    Ranges count by their upper end ("30-45 minutes" -> 45). Times over 24
    hours are ignored.
    """
    if not instructions:
        return None

    found = []
    for pattern in COOKING_TIME_PATTERNS:
        for match in pattern.finditer(instructions):
            value = float(match.group(2) or match.group(1))
            unit = match.group(3).lower()
            minutes = value * 60 if unit.startswith("h") else value
            if 0 < minutes <= MAX_COOKING_MINUTES:
                found.append(minutes)

    if not found:
        return None
    return int(round(max(found)))


def parse_servings(recipe_yield: Any) -> Optional[int]:
    """Read a serving count from a yield value like "Serves 6" or ["4", "4 servings"]."""
    if isinstance(recipe_yield, list):
        recipe_yield = recipe_yield[0] if recipe_yield else None
    if isinstance(recipe_yield, bool) or recipe_yield is None:
        return None
    if isinstance(recipe_yield, (int, float)):
        return int(recipe_yield)
    match = re.search(r"\d+", str(recipe_yield))
    return int(match.group(0)) if match else None
