"""Shopping list export as CSV, plain text, Markdown and JSON."""

import dataclasses
import datetime
import json
from typing import List, Optional

import pandas as pd

from recipe_utils.shopping.categories import classify, group_by_category
from recipe_utils.shopping.purchase import to_purchase_quantity

EXPORT_COLUMNS = [
    "ingredient",
    "quantity",
    "unit",
    "category",
    "buy",
    "checked",
]


@dataclasses.dataclass
class ShoppingListItem:
    """Dataclass for one line of a shopping list."""

    ingredient_name: str
    quantity: Optional[str] = None
    unit: Optional[str] = None
    category: Optional[str] = None
    is_checked: bool = False


@dataclasses.dataclass
class ShoppingList:
    name: str
    items: List[ShoppingListItem]
    description: Optional[str] = None
    created_at: datetime.datetime = dataclasses.field(
        default_factory=datetime.datetime.now
    )


def _quantity_text(item: ShoppingListItem) -> str:
    return " ".join(part for part in (item.quantity, item.unit) if part)


def _buy_text(item: ShoppingListItem) -> str:
    purchase = to_purchase_quantity(item.quantity, item.unit, item.ingredient_name)
    return purchase.display_text if purchase else ""


def shopping_list_frame(shopping_list: ShoppingList) -> pd.DataFrame:
    """Tabulate a shopping list with aisle and buy quantity per item.

    Args:
        shopping_list: The list to tabulate

    Returns:
        DataFrame with columns: ingredient, quantity, unit, category, buy, checked
    """
    rows = [
        {
            "ingredient": item.ingredient_name,
            "quantity": item.quantity or "",
            "unit": item.unit or "",
            "category": classify(item.category, item.ingredient_name).value,
            "buy": _buy_text(item),
            "checked": item.is_checked,
        }
        for item in shopping_list.items
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_as_csv(shopping_list: ShoppingList) -> str:
    """Export as CSV preceded by '#' comment lines with the list metadata."""
    header = [f"# {shopping_list.name}"]
    if shopping_list.description:
        header.append(f"# {shopping_list.description}")
    header.append(f"# Created: {shopping_list.created_at.date().isoformat()}")

    df = shopping_list_frame(shopping_list)
    df["checked"] = df["checked"].map({True: "Yes", False: "No"})
    return "\n".join(header) + "\n\n" + df.to_csv(index=False)


def _summary(shopping_list: ShoppingList):
    checked = sum(1 for item in shopping_list.items if item.is_checked)
    return len(shopping_list.items), checked, len(shopping_list.items) - checked


def export_as_text(shopping_list: ShoppingList) -> str:
    """Export as plain text with checkboxes and totals."""
    lines = [shopping_list.name, "=" * len(shopping_list.name), ""]
    if shopping_list.description:
        lines += [shopping_list.description, ""]
    lines += [
        f"Created: {shopping_list.created_at.date().isoformat()}",
        "",
        "Shopping List:",
        "-" * 50,
        "",
    ]

    for index, item in enumerate(shopping_list.items, start=1):
        checkbox = "[x]" if item.is_checked else "[ ]"
        quantity = _quantity_text(item)
        suffix = f" ({quantity})" if quantity else ""
        lines.append(f"{checkbox} {index}. {item.ingredient_name}{suffix}")

    total, checked, unchecked = _summary(shopping_list)
    lines += [
        "",
        "-" * 50,
        f"Total items: {total}",
        f"Checked: {checked}",
        f"Unchecked: {unchecked}",
    ]
    return "\n".join(lines) + "\n"


def export_as_markdown(shopping_list: ShoppingList) -> str:
    """Export as Markdown, one section per grocery aisle."""
    lines = [f"# {shopping_list.name}", ""]
    if shopping_list.description:
        lines += [shopping_list.description, ""]
    lines += [
        f"**Created:** {shopping_list.created_at.date().isoformat()}",
        "",
        "## Shopping List",
        "",
    ]

    for category, items in group_by_category(shopping_list.items).items():
        lines.append(f"### {category.value}")
        lines.append("")
        for item in items:
            checkbox = "[x]" if item.is_checked else "[ ]"
            quantity = _quantity_text(item)
            suffix = f" *({quantity})*" if quantity else ""
            lines.append(f"- {checkbox} {item.ingredient_name}{suffix}")
        lines.append("")

    total, checked, unchecked = _summary(shopping_list)
    lines += [
        "---",
        "",
        f"**Total items:** {total} | **Checked:** {checked} | **Unchecked:** {unchecked}",
    ]
    return "\n".join(lines) + "\n"


def export_as_json(shopping_list: ShoppingList) -> str:
    """Export as indented JSON with a summary block."""
    total, checked, unchecked = _summary(shopping_list)
    payload = {
        "name": shopping_list.name,
        "description": shopping_list.description,
        "createdAt": shopping_list.created_at.isoformat(),
        "items": [
            {
                "name": item.ingredient_name,
                "category": classify(item.category, item.ingredient_name).value,
                "quantity": item.quantity,
                "unit": item.unit,
                "buy": _buy_text(item) or None,
                "checked": item.is_checked,
            }
            for item in shopping_list.items
        ],
        "summary": {"total": total, "checked": checked, "unchecked": unchecked},
    }
    return json.dumps(payload, indent=2)
