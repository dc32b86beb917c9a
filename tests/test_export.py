import datetime
import io
import json

import pandas as pd
import pytest

from recipe_utils.shopping import (
    ShoppingList,
    ShoppingListItem,
    export_as_csv,
    export_as_json,
    export_as_markdown,
    export_as_text,
    shopping_list_frame,
)


@pytest.fixture
def shopping_list():
    return ShoppingList(
        name="Weekend",
        description="Pancakes and chili",
        created_at=datetime.datetime(2024, 3, 9, 10, 30),
        items=[
            ShoppingListItem("milk", "2", "cups"),
            ShoppingListItem("olive oil", "2", "tbsp", is_checked=True),
            ShoppingListItem('spinach, "baby"', "1", "lb"),
            ShoppingListItem("eggs", "6"),
        ],
    )


def test_shopping_list_frame(shopping_list):
    df = shopping_list_frame(shopping_list)

    assert list(df.columns) == ["ingredient", "quantity", "unit", "category", "buy", "checked"]
    assert list(df["category"]) == ["Dairy & Eggs", "Condiments & Sauces", "Produce", "Dairy & Eggs"]
    assert list(df["buy"]) == ["2 cups", "8 fl oz", "1 lb", "6 piece"]


def test_export_as_csv(shopping_list):
    csv_text = export_as_csv(shopping_list)

    header, body = csv_text.split("\n\n", 1)
    assert header.splitlines() == ["# Weekend", "# Pancakes and chili", "# Created: 2024-03-09"]

    df = pd.read_csv(io.StringIO(body))
    assert list(df["ingredient"]) == ["milk", "olive oil", 'spinach, "baby"', "eggs"]
    assert list(df["checked"]) == ["No", "Yes", "No", "No"]
    assert '"spinach, ""baby"""' in body


def test_export_as_text(shopping_list):
    text = export_as_text(shopping_list)

    assert text.startswith("Weekend\n=======\n")
    assert "[ ] 1. milk (2 cups)" in text
    assert "[x] 2. olive oil (2 tbsp)" in text
    assert "[ ] 4. eggs (6)" in text
    assert "Total items: 4" in text
    assert "Checked: 1" in text
    assert "Unchecked: 3" in text


def test_export_as_markdown_groups_by_aisle(shopping_list):
    markdown = export_as_markdown(shopping_list)

    produce = markdown.index("### Produce")
    dairy = markdown.index("### Dairy & Eggs")
    condiments = markdown.index("### Condiments & Sauces")
    assert produce < dairy < condiments
    assert markdown.index("- [ ] milk *(2 cups)*") < markdown.index("- [ ] eggs *(6)*")
    assert "- [x] olive oil *(2 tbsp)*" in markdown
    assert "### Other" not in markdown


def test_export_as_json(shopping_list):
    payload = json.loads(export_as_json(shopping_list))

    assert payload["name"] == "Weekend"
    assert payload["createdAt"] == "2024-03-09T10:30:00"
    assert payload["summary"] == {"total": 4, "checked": 1, "unchecked": 3}
    assert payload["items"][1] == {
        "name": "olive oil",
        "category": "Condiments & Sauces",
        "quantity": "2",
        "unit": "tbsp",
        "buy": "8 fl oz",
        "checked": True,
    }
