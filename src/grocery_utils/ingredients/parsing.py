"""Ingredient parsing and recipe item normalization utilities."""

import re
from typing import List

from grocery_utils.ingredients.models import ParsedIngredient

# --- Constants ---

# Units recognised when the quantity precedes the name ("300g Hähnchenbrust")
PREFIX_UNITS = [
    "Messerspitze",
    "Stück",
    "Prise",
    "Zehe",
    "kg",
    "mg",
    "ml",
    "cl",
    "EL",
    "TL",
    "g",
    "l",
]

# Units recognised when the quantity follows the name ("beef 300g")
SUFFIX_UNITS = [
    "pieces",
    "pinch",
    "cups",
    "tbsp",
    "tsp",
    "pcs",
    "kg",
    "mg",
    "ml",
    "oz",
    "lb",
    "g",
    "l",
]

# Units that may end a recipe item written as "<product> <amount><unit>"
TRAILING_UNITS = ["Stück", "Prise", "Zehe", "kg", "ml", "EL", "TL", "g", "l"]

_AMOUNT = r"\d+(?:[.,]\d+)?"


def _unit_group(units: List[str]) -> str:
    return "|".join(re.escape(unit) for unit in units)


PREFIX_RE = re.compile(
    rf"^(?P<amount>{_AMOUNT})?\s*(?P<unit>{_unit_group(PREFIX_UNITS)})?\s+(?P<name>.+)$",
    re.IGNORECASE,
)
SUFFIX_RE = re.compile(
    rf"^(?P<name>.+?)\s+(?P<amount>{_AMOUNT})\s*(?P<unit>{_unit_group(SUFFIX_UNITS)})?$",
    re.IGNORECASE,
)
TRAILING_QTY_RE = re.compile(
    rf"({_AMOUNT}\s*(?:{_unit_group(TRAILING_UNITS)}))$", re.IGNORECASE
)

# Canonical product names applied when normalizing recipe items
CANONICAL_PRODUCTS = [
    (re.compile(r"Hähnchenbrustfilet", re.IGNORECASE), "Hähnchenbrust"),
    (re.compile(r"Putenbrustfilet", re.IGNORECASE), "Putenbrust"),
    (re.compile(r"Mageres Rinderhack", re.IGNORECASE), "Rinderhack"),
    (re.compile(r"Mageres Hackfleisch", re.IGNORECASE), "Hackfleisch"),
    (re.compile(r"Rinderhüftsteak", re.IGNORECASE), "Rindersteak"),
]

# --- Functions ---


def parse_ingredient(raw: str) -> ParsedIngredient:
    """Split a raw ingredient line into its name and quantity.

    The quantity cluster is looked for at the start of the string first
    ("300g Hähnchenbrust", "2 EL Olivenöl") and then at the end
    ("beef 300g"). Amount and unit are joined without a space in the
    returned quantity. Text elsewhere in the string is never read as a
    quantity.

    Args:
        raw: Raw ingredient text from a recipe.

    Returns:
        A ParsedIngredient. When no quantity cluster is found the whole
        trimmed string becomes the name and the quantity is empty.

    Examples:
        >>> parse_ingredient("300g Hähnchenbrust")
        ParsedIngredient(name='Hähnchenbrust', quantity='300g')
        >>> parse_ingredient("beef 300g")
        ParsedIngredient(name='beef', quantity='300g')
        >>> parse_ingredient("salt")
        ParsedIngredient(name='salt', quantity='')
    """
    text = raw.strip()

    for pattern in (PREFIX_RE, SUFFIX_RE):
        match = pattern.match(text)
        if match:
            name = match.group("name").strip()
            quantity = (match.group("amount") or "") + (match.group("unit") or "")
            if name:
                return ParsedIngredient(name=name, quantity=quantity)

    return ParsedIngredient(name=text, quantity="")


def clean_product_name(name: str) -> str:
    """Strip notes and formatting from the product part of a recipe item.

    Removes "Achtung" warnings up to the end of the string, parenthetical
    notes, quotes, repeated whitespace and trailing punctuation, then applies
    the canonical product renames.

    Examples:
        >>> clean_product_name("Zwiebel (fein gehackt)")
        'Zwiebel'
        >>> clean_product_name("Hähnchenbrustfilet, Achtung heiß")
        'Hähnchenbrust'
    """
    name = re.sub(r"Achtung.*$", "", name, flags=re.IGNORECASE).strip()
    name = re.sub(r"\([^)]*\)", "", name).strip()
    name = name.replace('"', "").strip()
    name = re.sub(r"\s{2,}", " ", name).strip()
    name = re.sub(r"[,:;]+$", "", name).strip()
    for pattern, replacement in CANONICAL_PRODUCTS:
        name = pattern.sub(replacement, name)
    return name


def normalize_recipe_item(name: str) -> str:
    """Rewrite "<product> <amount><unit>" recipe items as "<amount><unit> <product>".

    Items without a recognised trailing amount+unit cluster are returned
    trimmed but otherwise unchanged.

    Examples:
        >>> normalize_recipe_item("Zwiebel (gehackt) 50g")
        '50g Zwiebel'
        >>> normalize_recipe_item("Knoblauch 1 Zehe")
        '1Zehe Knoblauch'
        >>> normalize_recipe_item("Salz")
        'Salz'
    """
    trimmed = name.strip()
    match = TRAILING_QTY_RE.search(trimmed)
    if not match:
        return trimmed

    amount_unit = re.sub(r"\s+", "", match.group(1))
    product = clean_product_name(trimmed[: match.start()].strip())
    return f"{amount_unit} {product}".strip()
