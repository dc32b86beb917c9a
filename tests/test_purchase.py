import pytest

from recipe_utils.shopping import (
    PACKAGE_SIZES,
    PurchaseQuantity,
    get_package_category,
    parse_purchase_quantity,
    round_up_to_package_size,
    to_purchase_quantity,
)


@pytest.mark.parametrize(
    "quantity, expected",
    [
        ("2", 2.0),
        ("1.5", 1.5),
        ("1/4", 0.25),
        ("1 1/2", 1.5),
        ("1-1/2", 1.5),
        ("½", 0.5),
        ("2 to 3", 3.0),
        ("2-3", 3.0),
        ("1/2 to 1", 1.0),
        ("3 large", 3.0),
        ("", 0.0),
        (None, 0.0),
        ("some", 0.0),
    ],
)
def test_parse_purchase_quantity(quantity, expected):
    assert parse_purchase_quantity(quantity) == pytest.approx(expected)


@pytest.mark.parametrize("amount", [16.01, 20, 31.9, 32])
def test_round_up_between_sizes_takes_next_size(amount):
    assert round_up_to_package_size(amount, PACKAGE_SIZES["oil"].sizes) == 32


@pytest.mark.parametrize(
    "amount, expected",
    [
        (8, 8),
        (1, 8),
        (16, 16),
        (40, 32),
    ],
)
def test_round_up_to_package_size(amount, expected):
    assert round_up_to_package_size(amount, [8, 16, 32]) == expected


@pytest.mark.parametrize(
    "ingredient_name, expected",
    [
        ("all-purpose flour", "flour"),
        ("brown sugar", "sugar"),
        ("basmati rice", "rice"),
        ("spaghetti", "pasta"),
        ("ground cumin", "spice"),
        ("olive oil", "oil"),
        ("balsamic vinegar", "vinegar"),
        ("chicken broth", "stock"),
        ("unsalted butter", "butter"),
        ("diced tomatoes", "canned"),
        ("carrots", "produce"),
        (None, "produce"),
    ],
)
def test_get_package_category(ingredient_name, expected):
    assert get_package_category(ingredient_name) == expected


def test_olive_oil_rounds_to_smallest_bottle():
    assert to_purchase_quantity("2", "tbsp", "olive oil") == PurchaseQuantity(
        quantity="8", unit="fl oz", display_text="8 fl oz"
    )


@pytest.mark.parametrize(
    "quantity, unit, name, expected_text",
    [
        ("3", "cups", "olive oil", "32 fl oz"),
        ("1", "cup", "red wine vinegar", "8 fl oz"),
        ("6", "cups", "chicken broth", "2 containers (32 fl oz each)"),
        ("2", "cups", "vegetable stock", "1 container (32 fl oz each)"),
        ("3", "lb", "flour", "5 lb"),
        ("500", "g", "basmati rice", "2 lb"),
        ("1", "oz", "ground cumin", "1 oz"),
        ("8", "oz", "butter", "1 lb"),
        ("2", None, "onion", "2 piece"),
        ("1.5", "pieces", "ginger root", "2 pieces"),
        ("2", "cups", "milk", "2 cups"),
        ("1", "bunch", "cilantro", "1 bunch"),
        # A stock purchase is never zero containers
        (None, "cup", "chicken broth", "1 container (32 fl oz each)"),
        ("0", "cups", "beef stock", "1 container (32 fl oz each)"),
    ],
)
def test_to_purchase_quantity(quantity, unit, name, expected_text):
    assert to_purchase_quantity(quantity, unit, name).display_text == expected_text


def test_to_purchase_quantity_without_amount_buys_one_package():
    purchase = to_purchase_quantity(None, None, "sugar")
    assert purchase.quantity == "1"
    assert purchase.unit == "lb"


def test_to_purchase_quantity_zero_without_unit():
    assert to_purchase_quantity("0", None, "salt") is None
