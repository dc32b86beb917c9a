import math
import re
from decimal import Decimal

# Every vulgar fraction glyph the ingredient line pattern accepts (¼-¾, ⅐-⅞)
UNICODE_FRACTIONS = {
    "¼": "1/4",
    "½": "1/2",
    "¾": "3/4",
    "⅐": "1/7",
    "⅑": "1/9",
    "⅒": "1/10",
    "⅓": "1/3",
    "⅔": "2/3",
    "⅕": "1/5",
    "⅖": "2/5",
    "⅗": "3/5",
    "⅘": "4/5",
    "⅙": "1/6",
    "⅚": "5/6",
    "⅛": "1/8",
    "⅜": "3/8",
    "⅝": "5/8",
    "⅞": "7/8",
}

# Hyphen or en dash between two digits, e.g. "1-1/2"
_NUMERIC_HYPHEN = re.compile(r"(?<=\d)\s*[-–]\s*(?=\d)")


def _is_number(text: str) -> bool:
    """Check if a string represents a finite number (int or float)."""
    try:
        return math.isfinite(float(text))
    except ValueError:
        return False


def _is_fraction(text: str) -> bool:
    """Check if a string represents a valid fraction (e.g., '1/2')."""
    if "/" not in text:
        return False
    parts = text.split("/")
    return len(parts) == 2 and all(_is_number(part) for part in parts)


def _parse_fraction(text: str) -> Decimal:
    """Parse a fraction string (e.g., '1/2') into a Decimal."""
    if "/" not in text:
        raise ValueError(f"Not a fraction: {text}")

    numerator_str, denominator_str = text.split("/")
    numerator = Decimal(numerator_str)
    denominator = Decimal(denominator_str)

    if denominator == 0:
        raise ZeroDivisionError("Division by zero in fraction")

    return numerator / denominator


def replace_unicode_fractions(text: str) -> str:
    """Replace fraction glyphs with "a/b" text.

    A glyph glued to a whole number ("1½") gets a separating space so it reads
    as a mixed number rather than "11/2".
    """
    for glyph, ascii_fraction in UNICODE_FRACTIONS.items():
        text = text.replace(glyph, f" {ascii_fraction}")
    return text.strip()


def replace_numeric_hyphens(text: str) -> str:
    """Turn hyphens between numbers into spaces ("1-1/2" -> "1 1/2")."""
    return _NUMERIC_HYPHEN.sub(" ", text)
