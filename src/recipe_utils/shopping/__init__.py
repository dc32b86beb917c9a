"""Shopping list utilities: aisle classification, purchase quantities, export."""

from .categories import (
    GROCERY_CATEGORIES,
    GroceryCategory,
    classify,
    group_by_category,
)
from .export import (
    ShoppingList,
    ShoppingListItem,
    export_as_csv,
    export_as_json,
    export_as_markdown,
    export_as_text,
    shopping_list_frame,
)
from .purchase import (
    PACKAGE_SIZES,
    PurchaseQuantity,
    get_package_category,
    parse_purchase_quantity,
    round_up_to_package_size,
    to_purchase_quantity,
)

__all__ = [
    "GroceryCategory",
    "GROCERY_CATEGORIES",
    "classify",
    "group_by_category",
    "PurchaseQuantity",
    "PACKAGE_SIZES",
    "to_purchase_quantity",
    "parse_purchase_quantity",
    "round_up_to_package_size",
    "get_package_category",
    "ShoppingList",
    "ShoppingListItem",
    "shopping_list_frame",
    "export_as_csv",
    "export_as_text",
    "export_as_markdown",
    "export_as_json",
]
