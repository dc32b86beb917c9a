"""Import parsed recipes into the recipe database, skipping duplicates."""

import dataclasses
import logging
import sqlite3
from typing import Any, Dict, Iterable, List, Optional

from tqdm import tqdm

from recipe_utils.config import Settings
from recipe_utils.database import SQLiteRecipeStore, insert_recipe, transaction
from recipe_utils.ingredients import normalize_ingredient_line
from recipe_utils.recipes.parsing import (
    Recipe,
    extract_schema_org_recipe,
    parse_recipe_html,
)
from recipe_utils.scraping import PoliteSession
from recipe_utils.shopping import classify
from recipe_utils.similarity import (
    DEFAULT_DUPLICATE_THRESHOLD,
    BedrockEmbeddingProvider,
    build_embedding_text,
    find_duplicate,
)

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class ImportSummary:
    total_found: int = 0
    inserted: int = 0
    duplicates: int = 0
    inserted_records: List[Dict[str, Any]] = dataclasses.field(default_factory=list)


def normalize_recipe_ingredients(lines: Iterable[str]) -> List[Dict[str, Any]]:
    """Normalize raw ingredient lines into stored ingredient records.

    Each record is the normalized line plus its grocery category.

    Example:
        >>> normalize_recipe_ingredients(["2 cups milk"])[0]["category"]
        'Dairy & Eggs'
    """
    records = []
    for line in lines:
        if not line or not line.strip():
            continue
        parsed = normalize_ingredient_line(line)
        record = parsed.to_dict()
        record["category"] = classify(None, parsed.ingredient_name).value
        records.append(record)
    return records


def _recipe_record(recipe: Recipe, ingredients: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "title": recipe.title,
        "recipe_key": recipe.recipe_key,
        "source": recipe.source,
        "yield_text": recipe.yield_text,
        "prep_time_minutes": recipe.prep_minutes,
        "cook_time_minutes": recipe.cook_minutes,
        "tags": recipe.tags,
        "categories": recipe.categories,
        "nutrition": recipe.nutrition,
        "ingredients": ingredients,
        "steps": recipe.steps,
        "html": recipe.html,
    }


class RecipeImporter:
    """Normalize, de-duplicate and store parsed recipes.

    Attributes:
        conn: SQLite connection with the recipe schema created
        embedder: Object with ``embed(text) -> list | None``; None disables
            embeddings so duplicates are found by title alone
        threshold: Maximum embedding distance treated as a duplicate
        store: Duplicate lookups against ``conn``
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        embedder=None,
        threshold: float = DEFAULT_DUPLICATE_THRESHOLD,
        metric: str = "euclidean",
    ):
        self.conn = conn
        self.embedder = embedder
        self.threshold = threshold
        self.store = SQLiteRecipeStore(conn, metric=metric)

    @classmethod
    def from_settings(
        cls, conn: sqlite3.Connection, settings: Settings, use_embeddings: bool = True
    ) -> "RecipeImporter":
        embedder = BedrockEmbeddingProvider.from_settings(settings) if use_embeddings else None
        return cls(
            conn,
            embedder=embedder,
            threshold=settings.duplicate_distance_threshold,
            metric=settings.distance_metric,
        )

    def _embed(self, recipe: Recipe) -> Optional[List[float]]:
        if self.embedder is None:
            return None
        text = build_embedding_text(recipe.title, recipe.ingredients, recipe.steps)
        return self.embedder.embed(text)

    def import_recipes(self, recipes: Iterable[Recipe], progress: bool = False) -> ImportSummary:
        """Store every recipe that is not already in the database.

        Recipes earlier in the same batch count as stored, so a batch holding
        the same recipe twice inserts it once. All inserts share a single
        transaction.

        Args:
            recipes: Parsed recipes
            progress: Show a tqdm progress bar

        Returns:
            Counts of recipes found, inserted and skipped as duplicates, plus
            the inserted rows with their new ids.
        """
        recipes = list(recipes)
        summary = ImportSummary(total_found=len(recipes))

        with transaction(self.conn) as cur:
            for recipe in tqdm(recipes, desc="Importing recipes", disable=not progress):
                embedding = self._embed(recipe)
                check = find_duplicate(embedding, recipe.title, self.store, self.threshold)
                if check.is_duplicate:
                    summary.duplicates += 1
                    logger.info(
                        f"Skipping '{recipe.title}': duplicate of recipe {check.matched_id} "
                        f"({check.reason})"
                    )
                    continue

                record = _recipe_record(recipe, normalize_recipe_ingredients(recipe.ingredients))
                record["id"] = insert_recipe(cur, record, embedding)
                summary.inserted += 1
                summary.inserted_records.append(record)

        logger.info(
            f"Imported {summary.inserted} of {summary.total_found} recipes "
            f"({summary.duplicates} duplicates)"
        )
        return summary

    def import_html(self, html: str, progress: bool = False) -> ImportSummary:
        """Import every ``.recipe-details`` block of an exported HTML page."""
        return self.import_recipes(parse_recipe_html(html), progress=progress)

    def import_url(self, url: str, session: Optional[PoliteSession] = None) -> ImportSummary:
        """Fetch a recipe page and import its schema.org recipe.

        Raises:
            ValueError: If the page carries no schema.org recipe
        """
        session = session or PoliteSession.for_url(url)
        response = session.get(url)
        recipe = extract_schema_org_recipe(response.text, url=url)
        if recipe is None:
            raise ValueError(f"No schema.org recipe found at {url}")
        return self.import_recipes([recipe])
