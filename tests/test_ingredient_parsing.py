import pytest

from recipe_utils.ingredients import (
    UNIT_SPECS,
    canonical_unit,
    convert,
    normalize_ingredient_line,
    normalize_unit,
    parse_quantity,
)
from recipe_utils.ingredients.number_utils import (
    replace_numeric_hyphens,
    replace_unicode_fractions,
)


@pytest.mark.parametrize(
    "input_text, expected",
    [
        ("1 1/2", 1.5),
        ("½", 0.5),
        ("1-1/2", 1.5),
        ("1½", 1.5),
        ("2", 2.0),
        ("2.5", 2.5),
        ("3/4", 0.75),
        ("0", 0.0),
        ("1 to 2", 3.0),
        ("1/0 2", 2.0),
        ("⅕", 0.2),
        ("1⅚", 1 + 5 / 6),
        ("⅒", 0.1),
    ],
)
def test_parse_quantity(input_text, expected):
    assert parse_quantity(input_text) == pytest.approx(expected)


@pytest.mark.parametrize("input_text", ["", "   ", None, "abc", "to taste"])
def test_parse_quantity_unparsable(input_text):
    assert parse_quantity(input_text) is None


def test_replace_unicode_fractions():
    assert replace_unicode_fractions("½") == "1/2"
    assert replace_unicode_fractions("2¾ cups") == "2 3/4 cups"


def test_replace_numeric_hyphens():
    assert replace_numeric_hyphens("1-1/2") == "1 1/2"
    assert replace_numeric_hyphens("2 – 3") == "2 3"
    assert replace_numeric_hyphens("sugar-free") == "sugar-free"


@pytest.mark.parametrize(
    "input_unit, expected_unit",
    [
        ("Tablespoons", "tbsp"),
        ("tsp", "tsp"),
        ("lbs.", "lb"),
        ("Grams", "g"),
        ("cloves", "clove"),
        ("handful", "handful"),
    ],
)
def test_normalize_unit(input_unit, expected_unit):
    assert normalize_unit(input_unit) == expected_unit


def test_canonical_unit_unknown():
    assert canonical_unit("handful") is None
    assert canonical_unit(None) is None


@pytest.mark.parametrize(
    "quantity, unit_key, expected",
    [
        (2, "tbsp", {"ml": 29.57}),
        (1, "cup", {"ml": 240.0}),
        (1, "tsp", {"ml": 4.93}),
        (2, "lb", {"g": 907.18}),
        (1, "kg", {"g": 1000.0}),
        (1, "clove", {}),
        (3, "piece", {}),
        (None, "cup", {}),
    ],
)
def test_convert(quantity, unit_key, expected):
    assert convert(quantity, UNIT_SPECS[unit_key]) == expected


def test_unit_specs_are_volume_xor_weight():
    for spec in UNIT_SPECS.values():
        assert not (spec.is_volume and spec.is_weight)
    assert UNIT_SPECS["clove"].is_count
    assert UNIT_SPECS["piece"].is_count


def test_normalize_ingredient_line_example():
    line = normalize_ingredient_line("1 1/2 cups finely chopped onions, divided")
    assert line.to_dict() == {
        "raw": "1 1/2 cups finely chopped onions, divided",
        "quantity": "1 1/2",
        "quantity_float": 1.5,
        "unit": "cup",
        "ingredient": "finely chopped onions",
        "notes": "divided",
        "quantity_ml": 360.0,
        "quantity_g": None,
    }


@pytest.mark.parametrize(
    "raw, quantity_float, unit, name, notes",
    [
        ("2 large eggs, beaten", 2.0, None, "large eggs", "beaten"),
        ("3 cloves garlic, minced", 3.0, "clove", "garlic", "minced"),
        ("1 lb. ground beef", 1.0, "lb", "ground beef", None),
        ("½ tsp salt", 0.5, "tsp", "salt", None),
        ("⅕ cup milk", 0.2, "cup", "milk", None),
        ("salt and pepper to taste", None, None, "salt and pepper to taste", None),
        ("1 (14 oz) can tomatoes", 1.0, None, "(14 oz) can tomatoes", None),
    ],
)
def test_normalize_ingredient_line(raw, quantity_float, unit, name, notes):
    line = normalize_ingredient_line(raw)
    assert line.quantity_float == quantity_float
    assert (line.unit.key if line.unit else None) == unit
    assert line.ingredient_name == name
    assert line.notes == notes


def test_normalize_ingredient_line_weight_conversion():
    line = normalize_ingredient_line("200 g flour")
    assert line.quantity_g == 200.0
    assert line.quantity_ml is None


def test_normalize_ingredient_line_count_unit_has_no_conversion():
    line = normalize_ingredient_line("2 cloves garlic")
    assert line.quantity_ml is None
    assert line.quantity_g is None


def test_normalize_ingredient_line_empty():
    line = normalize_ingredient_line("")
    assert line.quantity is None
    assert line.ingredient_name == ""
    assert line.notes is None
