"""Grocery aisle classification for shopping list items.

Items are placed by an optional category hint first, then by an ordered
cascade of word patterns over the ingredient name. Many food words belong to
more than one aisle ("ground" coriander vs. ground beef, chicken broth vs.
chicken), so the order of CATEGORY_RULES is what decides the outcome.
"""

import dataclasses
import enum
import re
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Pattern, Tuple


class GroceryCategory(str, enum.Enum):
    PRODUCE = "Produce"
    DAIRY_EGGS = "Dairy & Eggs"
    MEAT_SEAFOOD = "Meat & Seafood"
    BAKERY = "Bakery"
    PANTRY = "Pantry & Canned Goods"
    FROZEN = "Frozen Foods"
    BEVERAGES = "Beverages"
    CONDIMENTS = "Condiments & Sauces"
    SPICES = "Spices & Seasonings"
    SNACKS = "Snacks"
    OTHER = "Other"

    def __str__(self) -> str:
        return self.value


GROCERY_CATEGORIES: List[GroceryCategory] = list(GroceryCategory)

# Category hints as stored on ingredients -> aisle
CATEGORY_HINTS: Dict[str, GroceryCategory] = {
    "vegetable": GroceryCategory.PRODUCE,
    "vegetables": GroceryCategory.PRODUCE,
    "fruit": GroceryCategory.PRODUCE,
    "fruits": GroceryCategory.PRODUCE,
    "produce": GroceryCategory.PRODUCE,
    "greens": GroceryCategory.PRODUCE,
    "herbs": GroceryCategory.PRODUCE,
    "fresh herbs": GroceryCategory.SPICES,
    "dairy": GroceryCategory.DAIRY_EGGS,
    "cheese": GroceryCategory.DAIRY_EGGS,
    "milk": GroceryCategory.DAIRY_EGGS,
    "eggs": GroceryCategory.DAIRY_EGGS,
    "yogurt": GroceryCategory.DAIRY_EGGS,
    "butter": GroceryCategory.DAIRY_EGGS,
    "cream": GroceryCategory.DAIRY_EGGS,
    "meat": GroceryCategory.MEAT_SEAFOOD,
    "beef": GroceryCategory.MEAT_SEAFOOD,
    "pork": GroceryCategory.MEAT_SEAFOOD,
    "chicken": GroceryCategory.MEAT_SEAFOOD,
    "poultry": GroceryCategory.MEAT_SEAFOOD,
    "fish": GroceryCategory.MEAT_SEAFOOD,
    "seafood": GroceryCategory.MEAT_SEAFOOD,
    "shellfish": GroceryCategory.MEAT_SEAFOOD,
    "bakery": GroceryCategory.BAKERY,
    "bread": GroceryCategory.BAKERY,
    "baked goods": GroceryCategory.BAKERY,
    "pastry": GroceryCategory.BAKERY,
    "pantry": GroceryCategory.PANTRY,
    "grains": GroceryCategory.PANTRY,
    "pasta": GroceryCategory.PANTRY,
    "rice": GroceryCategory.PANTRY,
    "beans": GroceryCategory.PANTRY,
    "legumes": GroceryCategory.PANTRY,
    "canned": GroceryCategory.PANTRY,
    "canned goods": GroceryCategory.PANTRY,
    "dry goods": GroceryCategory.PANTRY,
    "flour": GroceryCategory.PANTRY,
    "baking": GroceryCategory.PANTRY,
    "frozen": GroceryCategory.FROZEN,
    "frozen foods": GroceryCategory.FROZEN,
    "ice cream": GroceryCategory.FROZEN,
    "beverages": GroceryCategory.BEVERAGES,
    "drinks": GroceryCategory.BEVERAGES,
    "juice": GroceryCategory.BEVERAGES,
    "soda": GroceryCategory.BEVERAGES,
    "coffee": GroceryCategory.BEVERAGES,
    "tea": GroceryCategory.BEVERAGES,
    "condiments": GroceryCategory.CONDIMENTS,
    "sauces": GroceryCategory.CONDIMENTS,
    "oils": GroceryCategory.CONDIMENTS,
    "vinegar": GroceryCategory.CONDIMENTS,
    "dressings": GroceryCategory.CONDIMENTS,
    "spices": GroceryCategory.SPICES,
    "seasonings": GroceryCategory.SPICES,
    "spice": GroceryCategory.SPICES,
    "snacks": GroceryCategory.SNACKS,
    "chips": GroceryCategory.SNACKS,
    "crackers": GroceryCategory.SNACKS,
    "nuts": GroceryCategory.SNACKS,
    "candy": GroceryCategory.SNACKS,
    "sweets": GroceryCategory.SNACKS,
}

# Longest hint first for substring lookups ("frozen foods" before "frozen")
_HINT_PATTERNS: List[Tuple[Pattern, GroceryCategory]] = [
    (re.compile(r"\b" + re.escape(hint) + r"\b"), category)
    for hint, category in sorted(
        CATEGORY_HINTS.items(), key=lambda item: len(item[0]), reverse=True
    )
]


def _words(*terms: str) -> Pattern:
    """Compile whole-word alternatives; each term also matches its plural."""
    return re.compile(r"\b(?:" + "|".join(terms) + r")(?:e?s)?\b")


HERB_WORDS = (
    "basil",
    "thyme",
    "rosemary",
    "oregano",
    "parsley",
    "cilantro",
    "dill",
    "sage",
    "tarragon",
    "marjoram",
    "mint",
    "chive",
    "chervil",
    "bay leaf",
    "bay leaves",
)

_SPICE_BLENDS = _words(
    "garam masala",
    "herbes de provence",
    "italian seasoning",
    "chinese five spice",
    "five[- ]spice",
    "cajun seasoning",
    "creole seasoning",
    "taco seasoning",
    "fajita seasoning",
    "jerk seasoning",
    "poultry seasoning",
    "everything bagel seasoning",
    "seasoning salt",
    "seasoned salt",
    "lemon pepper",
    "curry powder",
    "chill?i powder",
    "pumpkin pie spice",
    "apple pie spice",
    "za'?atar",
    "ras el hanout",
    "old bay",
    "baharat",
    "berbere",
    "dukkah",
)

_HERBS = _words(*HERB_WORDS)

_SPICES = _words(
    "salt",
    r"(?<!bell )(?<!sweet )(?<!hot )(?<!green )(?<!chili )(?<!chile )pepper(?!s)",
    "peppercorn",
    "red pepper flakes",
    "chill?i flakes",
    "cayenne",
    "paprika",
    "cumin",
    "cinnamon",
    "nutmeg",
    "ginger",
    "turmeric",
    "cardamom",
    "(?<!garlic )clove",
    "allspice",
    "coriander",
    "fennel seed",
    "mustard seed",
    "celery seed",
    "caraway",
    "star anise",
    "anise",
    "saffron",
    "sumac",
    "harissa",
    "garlic powder",
    "onion powder",
    "curry",
    "spice",
    "seasoning",
)

_STOCKS = _words("stock", "broth", "bouillon", "consomm[eé]")

_PANTRY = _words(
    "(?<!wild )rice(?! vinegar| wine)",
    "pasta",
    "spaghetti",
    "penne",
    "macaroni",
    "linguine",
    "fettuccine",
    "noodle",
    "flour",
    "sugar(?! snap)",
    "(?<!green )(?<!string )bean",
    "chickpea",
    "lentil",
    "oat",
    "oatmeal",
    "quinoa",
    "couscous",
    "barley",
    "canned",
    "cereal",
    "granola",
    "breadcrumb",
    "panko",
    "cornstarch",
    "baking soda",
    "baking powder",
    "yeast",
    "peanut butter",
    "tomato paste",
    "coconut milk",
)

_CONDIMENTS = _words(
    "sauce",
    "mayo",
    "mayonnaise",
    "mustard",
    "dijon",
    "ketchup",
    "oil",
    "vinegar",
    "balsamic",
    "dressing",
    "worcestershire",
    "sriracha",
    "tahini",
    "honey",
    "syrup",
    "molasses",
    "salsa",
    "pesto",
    "relish",
    "hoisin",
)

_PRODUCE = _words(
    "tomato",
    "lettuce",
    "spinach",
    "kale",
    "arugula",
    "carrot",
    "onion",
    "garlic",
    "bell pepper",
    "(?:green|sweet|hot) pepper",
    "peppers",
    "jalape[nñ]o",
    "chil[ei] pepper",
    "potato",
    "sweet potato",
    "broccoli",
    "cauliflower",
    "cucumber",
    "celery",
    "mushroom",
    "zucchini",
    "squash",
    "cabbage",
    "brussels sprout",
    "asparagus",
    "green bean",
    "pea",
    "corn",
    "eggplant",
    "beet",
    "radish",
    "fennel",
    "avocado",
    "apple",
    "banana",
    "orange",
    "lemon",
    "lime",
    "berry",
    "berries",
    "strawberry",
    "strawberries",
    "blueberry",
    "blueberries",
    "raspberry",
    "raspberries",
    "grape",
    "melon",
    "watermelon",
    "pineapple",
    "mango",
    "peach",
    "pear",
    "plum",
    "cherry",
    "cherries",
    "shallot",
    "scallion",
    "leek",
)

_DAIRY = _words(
    "milk",
    "buttermilk",
    "cheese",
    "yogh?urt",
    "butter",
    "(?<!ice )cream",
    "sour cream",
    "cr[eè]me fra[iî]che",
    "half[- ]and[- ]half",
    "ghee",
    "ricotta",
    "parmesan",
    "mozzarella",
    "cheddar",
    "feta",
    "brie",
    "egg",
)

# "fresh thyme" and friends never count as meat even when a meat word follows
_HERB_WITH_VERB = re.compile(
    r"\b(?:chopped|diced|minced|sliced|fresh|dried)\s+(?:herbs?|"
    + "|".join(HERB_WORDS)
    + r")\b"
)

_MEAT = _words(
    "beef",
    "pork",
    "chicken",
    "turkey",
    "lamb",
    "veal",
    "duck",
    "bacon",
    "sausage",
    "ham",
    "prosciutto",
    "pancetta",
    "salami",
    "pepperoni",
    "chorizo",
    "steak",
    "ribeye",
    "sirloin",
    "tenderloin",
    "chop",
    "breast",
    "thigh",
    "wing",
    "drumstick",
    "rib",
    "brisket",
    "roast",
)

_SEAFOOD = _words(
    "fish",
    "salmon",
    "tuna",
    "shrimp",
    "prawn",
    "crab",
    "lobster",
    "tilapia",
    "cod",
    "halibut",
    "scallop",
    "clam",
    "mussel",
    "oyster",
    "sardine",
    "anchovy",
    "anchovies",
    "mackerel",
    "trout",
    "sea bass",
)

_FROZEN = _words(
    "frozen",
    "ice cream",
    "sorbet",
    "sherbet",
    "popsicle",
    "puff pastry",
    "phyllo",
    "filo",
)

_BAKERY = _words(
    "bread",
    "bun",
    "roll",
    "bagel",
    "tortilla",
    "pita",
    "croissant",
    "baguette",
    "naan",
    "focaccia",
    "ciabatta",
    "sourdough",
    "brioche",
    "english muffin",
)

_BEVERAGES = _words(
    "wine",
    "champagne",
    "beer",
    "ale",
    "liquor",
    "vodka",
    "whiske?y",
    "rum",
    "gin",
    "tequila",
    "port",
    "sherry",
    "vermouth",
    "brandy",
    "cognac",
    "sake",
    "juice",
    "soda",
    "coffee",
    "tea",
    "water",
    "kombucha",
)

_SNACKS = _words(
    "chip",
    "cracker",
    "pretzel",
    "popcorn",
    "nut",
    "peanut",
    "almond",
    "cashew",
    "walnut",
    "pecan",
    "pistachio",
    "candy",
    "candies",
    "chocolate",
    "cookie",
    "brownie",
    "cake",
    "pie",
)


@dataclasses.dataclass(frozen=True)
class CategoryRule:
    """One step of the classification cascade."""

    name: str
    pattern: Pattern
    category: GroceryCategory
    unless: Optional[Pattern] = None

    def matches(self, ingredient_name: str) -> bool:
        if self.unless is not None and self.unless.search(ingredient_name):
            return False
        return self.pattern.search(ingredient_name) is not None


# Evaluated top to bottom, first match wins.
CATEGORY_RULES: Tuple[CategoryRule, ...] = (
    # Blends first: "lemon pepper" and "chili powder" contain produce words.
    CategoryRule("spice blend", _SPICE_BLENDS, GroceryCategory.SPICES),
    # Herbs before produce and meat: "fresh basil", "chopped parsley".
    CategoryRule("herb", _HERBS, GroceryCategory.SPICES),
    # Single spices before meat: "ground coriander" is not ground meat.
    CategoryRule("spice", _SPICES, GroceryCategory.SPICES),
    # Stock before meat: "chicken broth" is a pantry item.
    CategoryRule("stock", _STOCKS, GroceryCategory.PANTRY),
    # Dry and canned goods before produce: "canned tomatoes", "black beans".
    CategoryRule("pantry", _PANTRY, GroceryCategory.PANTRY),
    # Sauces before produce: "tomato sauce", "lemon oil".
    CategoryRule("condiment", _CONDIMENTS, GroceryCategory.CONDIMENTS),
    CategoryRule("produce", _PRODUCE, GroceryCategory.PRODUCE),
    # Dairy before beverages: "milk" is not a drink aisle item.
    CategoryRule("dairy", _DAIRY, GroceryCategory.DAIRY_EGGS),
    CategoryRule(
        "meat", _MEAT, GroceryCategory.MEAT_SEAFOOD, unless=_HERB_WITH_VERB
    ),
    CategoryRule("seafood", _SEAFOOD, GroceryCategory.MEAT_SEAFOOD),
    # Frozen before bakery: "puff pastry", "frozen dinner rolls".
    CategoryRule("frozen", _FROZEN, GroceryCategory.FROZEN),
    CategoryRule("bakery", _BAKERY, GroceryCategory.BAKERY),
    CategoryRule("beverage", _BEVERAGES, GroceryCategory.BEVERAGES),
    CategoryRule("snack", _SNACKS, GroceryCategory.SNACKS),
)


def _category_from_hint(hint: str) -> Optional[GroceryCategory]:
    normalized = hint.strip().lower()
    if not normalized:
        return None
    if normalized in CATEGORY_HINTS:
        return CATEGORY_HINTS[normalized]
    for pattern, category in _HINT_PATTERNS:
        if pattern.search(normalized):
            return category
    return None


def classify(
    category_hint: Optional[str], ingredient_name: Optional[str]
) -> GroceryCategory:
    """Place an ingredient in a grocery store aisle.

    Args:
        category_hint: Category stored with the ingredient ("vegetable",
            "dairy", ...), if any. An unmapped hint falls through to the
            name rules.
        ingredient_name: Free-text ingredient name.

    Returns:
        The matching GroceryCategory; ``GroceryCategory.OTHER`` when nothing
        matches. Never None.

    Examples:
        >>> classify(None, "chicken broth")
        <GroceryCategory.PANTRY: 'Pantry & Canned Goods'>
        >>> classify("Vegetables", "anything")
        <GroceryCategory.PRODUCE: 'Produce'>
    """
    if isinstance(category_hint, str):
        category = _category_from_hint(category_hint)
        if category is not None:
            return category

    if isinstance(ingredient_name, str) and ingredient_name.strip():
        name = ingredient_name.lower()
        for rule in CATEGORY_RULES:
            if rule.matches(name):
                return rule.category

    return GroceryCategory.OTHER


def _item_fields(item: Any) -> Tuple[Optional[str], Optional[str]]:
    """Pull (category hint, ingredient name) from a mapping or an object."""
    if isinstance(item, Mapping):
        name = item.get("ingredient_name")
        if name is None:
            name = item.get("name")
        return item.get("category"), name
    name = getattr(item, "ingredient_name", None)
    if name is None:
        name = getattr(item, "name", None)
    return getattr(item, "category", None), name


def group_by_category(
    items: Iterable[Any],
    key: Optional[Callable[[Any], Tuple[Optional[str], Optional[str]]]] = None,
) -> Dict[GroceryCategory, List[Any]]:
    """Group shopping list items by grocery aisle.

    Args:
        items: Mappings or objects carrying ``category`` and
            ``ingredient_name`` (or ``name``).
        key: Optional function returning ``(category_hint, ingredient_name)``
            for an item.

    Returns:
        Dict keyed in GROCERY_CATEGORIES order. Items keep their input order
        within each aisle; aisles without items are left out.
    """
    key = key or _item_fields
    buckets: Dict[GroceryCategory, List[Any]] = {}
    for item in items:
        hint, name = key(item)
        buckets.setdefault(classify(hint, name), []).append(item)

    return {
        category: buckets[category]
        for category in GROCERY_CATEGORIES
        if category in buckets
    }
