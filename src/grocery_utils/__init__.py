"""Grocery Utils - Utilities for turning recipe ingredients into grocery lists."""

__version__ = "0.1.0"

from . import database, ingredients, recipes, suggestions
from .reconciliation import GroceryReconciler, reconcile_ingredients

__all__ = [
    "database",
    "ingredients",
    "recipes",
    "suggestions",
    "GroceryReconciler",
    "reconcile_ingredients",
]
