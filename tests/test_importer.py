import json

import pytest

from recipe_utils.config import Settings
from recipe_utils.database import create_schema, get_connection
from recipe_utils.recipes import (
    Recipe,
    RecipeImporter,
    normalize_recipe_ingredients,
)


class FakeEmbedder:
    """Embeds by looking the recipe title up in a table."""

    def __init__(self, vectors):
        self.vectors = vectors
        self.texts = []

    def embed(self, text):
        self.texts.append(text)
        return self.vectors.get(text.split("\n", 1)[0])


@pytest.fixture
def temp_db(tmp_path):
    conn = get_connection(tmp_path / "test_recipes.db")
    create_schema(conn)
    yield conn
    conn.close()


def _recipe(title, ingredients=("2 cups milk",), steps=("Stir.",)):
    return Recipe(title=title, ingredients=list(ingredients), steps=list(steps))


def test_normalize_recipe_ingredients():
    records = normalize_recipe_ingredients(
        ["1 1/2 cups finely chopped onions, divided", "", "2 cups chicken broth"]
    )

    assert len(records) == 2
    assert records[0]["ingredient"] == "finely chopped onions"
    assert records[0]["quantity_ml"] == 360.0
    assert records[0]["category"] == "Produce"
    assert records[1]["category"] == "Pantry & Canned Goods"


def test_import_recipes_inserts_and_skips_duplicates(temp_db):
    embedder = FakeEmbedder(
        {
            "Pancakes": [0.0, 0.0],
            "Flapjacks": [0.01, 0.0],
            "Chili": [1.0, 1.0],
        }
    )
    importer = RecipeImporter(temp_db, embedder=embedder)

    summary = importer.import_recipes(
        [_recipe("Pancakes"), _recipe("Flapjacks"), _recipe("Chili"), _recipe("chili")]
    )

    assert summary.total_found == 4
    assert summary.inserted == 2
    assert summary.duplicates == 2
    assert [record["title"] for record in summary.inserted_records] == ["Pancakes", "Chili"]
    assert embedder.texts[0] == "Pancakes\n2 cups milk\nStir."

    row = temp_db.execute(
        "SELECT ingredients, embedding FROM recipe WHERE id = ?",
        (summary.inserted_records[0]["id"],),
    ).fetchone()
    ingredients = json.loads(row[0])
    assert ingredients[0]["unit"] == "cup"
    assert ingredients[0]["category"] == "Dairy & Eggs"
    assert row[1] is not None


def test_import_recipes_without_embeddings_uses_titles(temp_db):
    importer = RecipeImporter(temp_db)

    first = importer.import_recipes([_recipe("Pad Thai")])
    second = importer.import_recipes([_recipe("PAD THAI"), _recipe("Green Curry")])

    assert first.inserted == 1
    assert second.inserted == 1
    assert second.duplicates == 1
    assert importer.store.count() == 2


def test_import_recipes_embedding_failure_falls_back_to_title(temp_db, mocker):
    embedder = mocker.Mock()
    embedder.embed.return_value = None
    importer = RecipeImporter(temp_db, embedder=embedder)

    summary = importer.import_recipes([_recipe("Soup"), _recipe("Soup")])

    assert summary.inserted == 1
    assert summary.duplicates == 1


def test_import_html(temp_db):
    html = """
    <div class="recipe-details">
      <h2 itemprop="name">Lemonade</h2>
      <div class="recipe-ingredients"><p>1 cup lemon juice</p></div>
      <div itemprop="recipeDirections"><p>Mix.</p></div>
    </div>
    """
    summary = RecipeImporter(temp_db).import_html(html)

    assert summary.inserted == 1
    record = summary.inserted_records[0]
    assert record["ingredients"][0]["quantity_ml"] == 240.0
    assert record["steps"] == ["Mix."]


def test_import_url(temp_db, mocker):
    page = (
        '<script type="application/ld+json">'
        + json.dumps({"@type": "Recipe", "name": "Toast", "recipeIngredient": ["1 slice bread"]})
        + "</script>"
    )
    session = mocker.Mock()
    session.get.return_value = mocker.Mock(text=page)

    summary = RecipeImporter(temp_db).import_url("https://example.com/toast", session=session)

    session.get.assert_called_once_with("https://example.com/toast")
    assert summary.inserted == 1
    assert summary.inserted_records[0]["source"] == "https://example.com/toast"


def test_import_url_without_recipe(temp_db, mocker):
    session = mocker.Mock()
    session.get.return_value = mocker.Mock(text="<html></html>")

    with pytest.raises(ValueError):
        RecipeImporter(temp_db).import_url("https://example.com/about", session=session)


def test_from_settings(temp_db, mocker):
    provider = mocker.patch(
        "recipe_utils.recipes.importer.BedrockEmbeddingProvider.from_settings"
    )
    settings = Settings(duplicate_distance_threshold=0.3, distance_metric="cosine")

    importer = RecipeImporter.from_settings(temp_db, settings)

    assert importer.embedder is provider.return_value
    assert importer.threshold == 0.3
    assert importer.store.metric == "cosine"
    assert RecipeImporter.from_settings(temp_db, settings, use_embeddings=False).embedder is None
