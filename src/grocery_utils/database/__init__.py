"""Database utilities for recipe and grocery databases."""

from .schema import DDL, create_schema
from .stores import (
    DEFAULT_CATEGORIES,
    INGREDIENT,
    STEP,
    CategoryStore,
    GroceryStore,
    RecipeStore,
)
from .utils import get_connection, new_id, transaction

__all__ = [
    "DDL",
    "create_schema",
    "get_connection",
    "new_id",
    "transaction",
    "CategoryStore",
    "GroceryStore",
    "RecipeStore",
    "DEFAULT_CATEGORIES",
    "INGREDIENT",
    "STEP",
]
