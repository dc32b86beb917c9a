"""Import exported HTML recipe files into a SQLite database."""

import argparse
import logging
import pathlib

from tqdm import tqdm

from recipe_utils.config import Settings, configure_logging
from recipe_utils.database import create_schema, get_connection
from recipe_utils.recipes import RecipeImporter, parse_recipe_html

logger = logging.getLogger(__name__)


def parse_args(argv=None, settings: Settings = None) -> argparse.Namespace:
    settings = settings or Settings.from_env()
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "html_files", nargs="+", type=pathlib.Path, help="Exported recipe HTML files"
    )
    parser.add_argument("--db", default=settings.db_path, help="SQLite database path")
    parser.add_argument(
        "--threshold",
        type=float,
        default=settings.duplicate_distance_threshold,
        help="Embedding distance below which a recipe counts as a duplicate",
    )
    parser.add_argument(
        "--no-embeddings",
        action="store_true",
        help="Skip Bedrock embeddings and detect duplicates by title only",
    )
    parser.add_argument("--log-level", default=settings.log_level)
    return parser.parse_args(argv)


def main(argv=None):
    settings = Settings.from_env()
    args = parse_args(argv, settings)
    configure_logging(args.log_level)

    conn = get_connection(args.db)
    create_schema(conn)

    importer = RecipeImporter.from_settings(
        conn, settings, use_embeddings=not args.no_embeddings
    )
    importer.threshold = args.threshold

    recipes = []
    for file_path in tqdm(args.html_files, desc="Parsing files"):
        if not file_path.exists():
            logger.warning(f"Skipping missing file {file_path}")
            continue
        html = file_path.read_text(encoding="utf-8")
        found = parse_recipe_html(html)
        logger.info(f"Found {len(found)} recipes in {file_path}")
        recipes.extend(found)

    summary = importer.import_recipes(recipes, progress=True)
    conn.close()

    print(
        f"Found {summary.total_found} recipes: inserted {summary.inserted}, "
        f"skipped {summary.duplicates} duplicates"
    )
    return summary


if __name__ == "__main__":
    main()
