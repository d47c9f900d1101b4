"""Ingredient parsing, staple filtering, quantity merging and categorization."""

from .categories import CategoryResolver, KeywordRule, load_keyword_rules, resolve_category
from .models import (
    CategorySuggestion,
    GroceryCategory,
    GroceryItem,
    ParsedIngredient,
    Quantity,
    ReconciliationResult,
)
from .pantry import PantryStaples, is_pantry_staple, load_staples
from .parsing import clean_product_name, normalize_recipe_item, parse_ingredient
from .quantities import format_amount, merge_quantities, parse_amount

__all__ = [
    "parse_ingredient",
    "clean_product_name",
    "normalize_recipe_item",
    "PantryStaples",
    "is_pantry_staple",
    "load_staples",
    "parse_amount",
    "merge_quantities",
    "format_amount",
    "CategoryResolver",
    "KeywordRule",
    "load_keyword_rules",
    "resolve_category",
    "CategorySuggestion",
    "GroceryCategory",
    "GroceryItem",
    "ParsedIngredient",
    "Quantity",
    "ReconciliationResult",
]
