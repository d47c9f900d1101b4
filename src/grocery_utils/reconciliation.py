"""Merging a recipe's ingredient list into a user's grocery list."""

import dataclasses
import logging
import sqlite3
from typing import Dict, List, Optional, Protocol, Sequence

from grocery_utils.database import CategoryStore, GroceryStore, RecipeStore
from grocery_utils.exceptions import SuggestionError
from grocery_utils.ingredients.categories import CategoryResolver
from grocery_utils.ingredients.models import (
    CategorySuggestion,
    GroceryCategory,
    GroceryItem,
    ReconciliationResult,
)
from grocery_utils.ingredients.pantry import PantryStaples
from grocery_utils.ingredients.parsing import parse_ingredient
from grocery_utils.ingredients.quantities import merge_quantities
from grocery_utils.suggestions import CategorySuggester, NullSuggester, fallback_suggestions

logger = logging.getLogger(__name__)


class GroceryWriter(Protocol):
    """The part of a grocery store the reconciliation writes through."""

    def create(
        self,
        user_id: str,
        title: str,
        menge: str = "",
        done: bool = False,
        category_ids: Optional[Sequence[str]] = None,
    ) -> GroceryItem:
        ...

    def update(
        self,
        item_id: str,
        user_id: str,
        title: Optional[str] = None,
        menge: Optional[str] = None,
        done: Optional[bool] = None,
    ) -> GroceryItem:
        ...


def request_suggestions(
    suggester: CategorySuggester,
    ingredients: Sequence[str],
    categories: Sequence[GroceryCategory],
) -> List[CategorySuggestion]:
    """Call the provider once; any failure degrades to empty suggestions.

    A provider that returns anything but a list of CategorySuggestion objects
    is treated as failed.
    """
    try:
        suggestions = suggester.suggest(list(ingredients), list(categories))
        if not isinstance(suggestions, list) or not all(
            isinstance(suggestion, CategorySuggestion) for suggestion in suggestions
        ):
            raise SuggestionError(
                f"Provider returned {type(suggestions).__name__}, expected a list of suggestions"
            )
        return suggestions
    except Exception as e:
        logger.warning(
            "Category provider failed, using heuristics for all %d ingredients: %s",
            len(ingredients),
            e,
        )
        return fallback_suggestions(ingredients)


def pair_suggestions(
    ingredients: Sequence[str], suggestions: Sequence[CategorySuggestion]
) -> List[CategorySuggestion]:
    """Line up provider suggestions with the ingredients they belong to.

    A suggestion whose ``ingredient_name`` equals the ingredient exactly is
    preferred; otherwise the suggestion at the same position is used when the
    provider returned exactly one per ingredient. Ingredients without a
    suggestion get an empty one.
    """
    by_name: Dict[str, CategorySuggestion] = {}
    for suggestion in suggestions:
        by_name.setdefault(suggestion.ingredient_name, suggestion)

    same_length = len(suggestions) == len(ingredients)
    paired = []
    for i, ingredient in enumerate(ingredients):
        if ingredient in by_name:
            paired.append(by_name[ingredient])
        elif same_length:
            paired.append(suggestions[i])
        else:
            paired.append(CategorySuggestion(ingredient_name=ingredient, confidence="low"))
    return paired


def summary_message(result: ReconciliationResult) -> str:
    """Describe the counts of a reconciliation pass, leaving out zero counts.

    Examples:
        >>> summary_message(ReconciliationResult(added=2, skipped=1))
        'Successfully added 2 new items (skipped 1 pantry staples)'
    """
    parts = []
    if result.added:
        parts.append(f"added {result.added} new items")
    if result.updated:
        parts.append(f"updated {result.updated} existing items")

    if parts:
        message = "Successfully " + " and ".join(parts)
    else:
        message = "No items were added or updated"
    if result.skipped:
        message += f" (skipped {result.skipped} pantry staples)"
    if result.failed:
        message += f" ({result.failed} failed)"
    return message


def _find_existing(
    existing_groceries: Sequence[GroceryItem], name: str
) -> Optional[int]:
    key = name.strip().lower()
    for index, item in enumerate(existing_groceries):
        if item.title.strip().lower() == key:
            return index
    return None


def reconcile_ingredients(
    recipe_ingredients: Sequence[str],
    existing_groceries: Sequence[GroceryItem],
    categories: Sequence[GroceryCategory],
    suggester: CategorySuggester,
    store: GroceryWriter,
    user_id: str,
    staples: Optional[PantryStaples] = None,
    resolver: Optional[CategoryResolver] = None,
) -> ReconciliationResult:
    """Merge recipe ingredients into a grocery list.

    Each ingredient is, in input order, either skipped as a pantry staple,
    merged into the existing grocery item with the same title (quantities
    combined with :func:`merge_quantities`) or created as a new item with a
    resolved category. A failure while handling one ingredient is counted
    and does not stop the others.

    Only the ``existing_groceries`` snapshot is searched for matches: items
    created earlier in the same pass are never merged into.

    Args:
        recipe_ingredients: Raw ingredient lines.
        existing_groceries: The user's groceries before this pass.
        categories: The grocery categories available for new items.
        suggester: Category provider, called once for the whole list.
        store: Where creates and updates are written.
        user_id: Owner of the grocery list.
        staples: Pantry staple filter; the bundled lists when omitted.
        resolver: Category resolver; the bundled keyword table when omitted.

    Returns:
        The counts of the pass and a summary message.
    """
    result = ReconciliationResult()
    if not recipe_ingredients:
        result.message = "Recipe has no ingredients to add"
        return result

    staples = staples or PantryStaples()
    resolver = resolver or CategoryResolver()
    snapshot = list(existing_groceries)

    suggestions = pair_suggestions(
        recipe_ingredients,
        request_suggestions(suggester, recipe_ingredients, categories),
    )

    for raw, suggestion in zip(recipe_ingredients, suggestions):
        if staples.should_skip(raw):
            logger.debug("Skipping pantry staple '%s'", raw)
            result.skipped += 1
            continue

        try:
            parsed = parse_ingredient(raw)
            index = _find_existing(snapshot, parsed.name)
            if index is not None:
                existing = snapshot[index]
                merged = merge_quantities(existing.menge, parsed.quantity)
                store.update(
                    existing.id,
                    user_id,
                    title=existing.title,
                    menge=merged,
                    done=existing.done,
                )
                snapshot[index] = dataclasses.replace(existing, menge=merged)
                logger.debug(
                    "Merged '%s' into '%s': %s", raw, existing.title, merged
                )
                result.updated += 1
            else:
                category_id = resolver.resolve(parsed.name, suggestion, categories)
                store.create(
                    user_id,
                    title=parsed.name,
                    menge=parsed.quantity,
                    done=False,
                    category_ids=[category_id] if category_id else [],
                )
                logger.debug(
                    "Created '%s' (%s) in category %s",
                    parsed.name,
                    parsed.quantity,
                    category_id,
                )
                result.added += 1
        except Exception:
            logger.exception("Failed to add ingredient '%s' to groceries", raw)
            result.failed += 1

    result.message = summary_message(result)
    logger.info(result.message)
    return result


class GroceryReconciler:
    """Adds a stored recipe's ingredients to a user's grocery list.

    Attributes:
        recipes: Recipe store used to look up the ingredient lines.
        groceries: Grocery store read once per pass and written per ingredient.
        categories: Category store.
        suggester: Category provider; no provider when omitted.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        suggester: Optional[CategorySuggester] = None,
        staples: Optional[PantryStaples] = None,
        resolver: Optional[CategoryResolver] = None,
    ):
        self.recipes = RecipeStore(conn)
        self.groceries = GroceryStore(conn)
        self.categories = CategoryStore(conn)
        self.suggester = suggester or NullSuggester()
        self.staples = staples or PantryStaples()
        self.resolver = resolver or CategoryResolver()

    def reconcile(self, recipe_id: str, user_id: str) -> ReconciliationResult:
        """Add all ingredients of ``recipe_id`` to ``user_id``'s grocery list.

        Raises:
            RecipeNotFoundError: If the recipe does not exist for this user.
        """
        ingredients = self.recipes.get_ingredients(recipe_id, user_id)
        logger.info(
            "Adding %d ingredients of recipe %s to groceries", len(ingredients), recipe_id
        )
        return reconcile_ingredients(
            ingredients,
            self.groceries.list(user_id),
            self.categories.list(),
            self.suggester,
            self.groceries,
            user_id,
            staples=self.staples,
            resolver=self.resolver,
        )
