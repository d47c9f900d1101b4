"""Exception types raised by grocery_utils."""


class GroceryUtilsError(Exception):
    """Base class for all grocery_utils errors."""


class RecipeNotFoundError(GroceryUtilsError, LookupError):
    """Raised when a recipe does not exist or belongs to another user."""


class GroceryNotFoundError(GroceryUtilsError, LookupError):
    """Raised when a grocery item does not exist or belongs to another user."""


class SuggestionError(GroceryUtilsError):
    """Raised when a category provider returns a payload that cannot be used."""
