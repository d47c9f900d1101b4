"""Recipe import utilities."""

from .importing import CSV_COLUMNS, import_recipes_csv, read_recipe_csv, recipe_item_name

__all__ = [
    "CSV_COLUMNS",
    "import_recipes_csv",
    "read_recipe_csv",
    "recipe_item_name",
]
