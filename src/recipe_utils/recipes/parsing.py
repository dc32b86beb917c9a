"""Recipe parsing utilities."""

import dataclasses
import json
import logging
import re
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from recipe_utils.recipes.durations import (
    extract_cooking_time_from_instructions,
    parse_iso_duration,
    parse_servings,
)

logger = logging.getLogger(__name__)

_CALORIES_LINE = re.compile(r"^Calories\s*:?\s*(\d+)", re.IGNORECASE)


@dataclasses.dataclass
class Recipe:
    """Dataclass for holding parsed recipe data."""

    title: str
    ingredients: List[str]
    steps: List[str]
    description: Optional[str] = None
    recipe_key: Optional[str] = None
    source: Optional[str] = None
    image_url: Optional[str] = None
    cuisine: Optional[str] = None
    yield_text: Optional[str] = None
    servings: Optional[int] = None
    prep_minutes: Optional[int] = None
    cook_minutes: Optional[int] = None
    tags: List[str] = dataclasses.field(default_factory=list)
    categories: List[str] = dataclasses.field(default_factory=list)
    nutrition: Dict[str, Any] = dataclasses.field(default_factory=dict)
    html: Optional[str] = None


def _clean_text(text: Optional[str]) -> str:
    return re.sub(r"\s+", " ", text or "").strip()


def _to_number(value: str):
    try:
        number = float(value)
    except (TypeError, ValueError):
        return value
    return int(number) if number.is_integer() else number


def _meta_or_text(block, selector: str) -> Optional[str]:
    tag = block.select_one(selector)
    if tag is None:
        return None
    return tag.get("content") or _clean_text(tag.get_text(" ")) or None


def _parse_recipe_block(block) -> Recipe:
    title_tag = block.select_one('h2[itemprop="name"]') or block.find("h2")
    title = _clean_text(title_tag.get_text(" ")) if title_tag else ""

    tags = [
        text
        for text in (_clean_text(li.get_text(" ")) for li in block.select(".tags-ul li"))
        if text
    ]

    categories = []
    for tag in block.select('[itemprop="recipeCategory"]'):
        value = tag.get("content") or _clean_text(tag.get_text(" "))
        if value:
            categories.append(value)

    nutrition: Dict[str, Any] = {}
    for tag in block.find_all(["div", "p"]):
        match = _CALORIES_LINE.match(_clean_text(tag.get_text(" ")))
        if match:
            nutrition["calories"] = int(match.group(1))
    for meta in block.select('meta[itemprop^="recipeNut"]'):
        name = meta.get("itemprop", "")[len("recipeNut") :].lower()
        content = meta.get("content") or _clean_text(meta.get_text(" "))
        if name:
            nutrition[name] = _to_number(content)

    ingredients = [
        text
        for text in (
            _clean_text(tag.get_text(" "))
            for tag in block.select(".recipe-ingredients p, .recipe-ingredients li")
        )
        if text
    ]

    steps = [
        text
        for text in (
            _clean_text(tag.get_text(" "))
            for tag in block.select(
                '[itemprop="recipeDirections"] p, [itemprop="recipeDirections"] li'
            )
        )
        if text
    ]

    yield_text = _meta_or_text(block, '[itemprop="recipeYield"]')

    source_link = block.select_one('[itemprop="recipeSource"] a')
    if source_link is not None and source_link.get("href"):
        source = source_link["href"]
    else:
        source = _meta_or_text(block, '[itemprop="recipeSource"]')

    return Recipe(
        title=title,
        ingredients=ingredients,
        steps=steps,
        recipe_key=_meta_or_text(block, 'meta[itemprop="recipeId"]'),
        source=source,
        yield_text=yield_text,
        servings=parse_servings(yield_text),
        prep_minutes=parse_iso_duration(_meta_or_text(block, '[itemprop="prepTime"]')),
        cook_minutes=parse_iso_duration(_meta_or_text(block, '[itemprop="cookTime"]')),
        tags=tags,
        categories=categories,
        nutrition=nutrition,
        html=str(block),
    )


def parse_recipe_html(html: str) -> List[Recipe]:
    """Parse a recipe export page into recipes.

    Every ``.recipe-details`` block on the page becomes one Recipe; blocks
    without a title are skipped.

    Args:
        html: Raw HTML content of an exported recipe collection.

    Returns:
        Parsed recipes in page order.
    """
    soup = BeautifulSoup(html, "lxml")

    recipes = []
    for block in soup.select(".recipe-details"):
        recipe = _parse_recipe_block(block)
        if not recipe.title:
            logger.warning("Skipping recipe block without a title")
            continue
        recipes.append(recipe)
    return recipes


def _find_recipe_node(node: Any) -> Optional[Dict[str, Any]]:
    """Locate a schema.org Recipe directly, inside @graph, or in a list."""
    if isinstance(node, list):
        for item in node:
            found = _find_recipe_node(item)
            if found:
                return found
        return None
    if not isinstance(node, dict):
        return None

    node_type = node.get("@type")
    types = node_type if isinstance(node_type, list) else [node_type]
    if any(isinstance(t, str) and t.lower() == "recipe" for t in types):
        return node

    return _find_recipe_node(node.get("@graph"))


def _text_of(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return _clean_text(value) or None
    if isinstance(value, list):
        joined = ", ".join(v for v in value if isinstance(v, str) and v.strip())
        return joined or None
    return None


def _text_list(value: Any) -> List[str]:
    values = value if isinstance(value, list) else [value]
    return [_clean_text(v) for v in values if isinstance(v, str) and v.strip()]


def _instruction_steps(value: Any) -> List[str]:
    if isinstance(value, str):
        return [line.strip() for line in value.splitlines() if line.strip()]
    if isinstance(value, list):
        steps = []
        for item in value:
            steps.extend(_instruction_steps(item))
        return steps
    if isinstance(value, dict):
        # HowToSection nests its steps
        if "itemListElement" in value:
            return _instruction_steps(value["itemListElement"])
        text = value.get("text") or value.get("name")
        return _instruction_steps(text) if text else []
    return []


def _ingredient_lines(value: Any) -> List[str]:
    if not isinstance(value, list):
        value = [value] if value else []
    lines = []
    for item in value:
        if isinstance(item, dict):
            item = item.get("text") or item.get("name")
        text = _clean_text(item) if isinstance(item, str) else ""
        if text:
            lines.append(text)
    return lines


def _image_url(value: Any, base_url: Optional[str]) -> Optional[str]:
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, dict):
        value = value.get("url")
    if not isinstance(value, str) or not value:
        return None
    return urljoin(base_url, value) if base_url else value


def _json_ld_blocks(soup: BeautifulSoup) -> List[Any]:
    blocks = []
    for script in soup.find_all("script", type="application/ld+json"):
        raw = (script.string or script.get_text() or "").strip()
        # Some sites wrap JSON-LD in HTML comments
        raw = re.sub(r"^<!--|-->$", "", raw).strip()
        if not raw:
            continue
        try:
            blocks.append(json.loads(raw))
        except json.JSONDecodeError as e:
            logger.debug(f"Skipping invalid JSON-LD block: {e}")
    return blocks


def extract_schema_org_recipe(html: str, url: Optional[str] = None) -> Optional[Recipe]:
    """Extract the first schema.org Recipe from a page's JSON-LD.

    Args:
        html: Raw HTML of a recipe page.
        url: Page URL, used as source and to resolve relative image URLs.

    Returns:
        A Recipe or None if the page has no named JSON-LD recipe.
    """
    soup = BeautifulSoup(html, "lxml")

    for block in _json_ld_blocks(soup):
        node = _find_recipe_node(block)
        if not node:
            continue
        title = _text_of(node.get("name"))
        if not title:
            continue

        steps = _instruction_steps(node.get("recipeInstructions"))
        cook_minutes = (
            parse_iso_duration(node.get("totalTime"))
            or parse_iso_duration(node.get("cookTime"))
            or parse_iso_duration(node.get("prepTime"))
            or extract_cooking_time_from_instructions("\n".join(steps))
        )
        recipe_yield = node.get("recipeYield")
        if isinstance(recipe_yield, (int, float)):
            yield_text = str(recipe_yield)
        else:
            yield_text = _text_of(recipe_yield)

        return Recipe(
            title=title,
            ingredients=_ingredient_lines(node.get("recipeIngredient")),
            steps=steps,
            description=_text_of(node.get("description")),
            source=url or node.get("url"),
            image_url=_image_url(node.get("image"), url),
            cuisine=_text_of(node.get("recipeCuisine")),
            yield_text=yield_text,
            servings=parse_servings(recipe_yield),
            prep_minutes=parse_iso_duration(node.get("prepTime")),
            cook_minutes=cook_minutes,
            categories=_text_list(node.get("recipeCategory")),
        )

    return None
