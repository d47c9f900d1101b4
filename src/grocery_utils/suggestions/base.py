"""Category suggestion providers: shared prompt and response handling."""

import json
import logging
from typing import Any, List, Optional, Protocol, Sequence

from grocery_utils.exceptions import SuggestionError
from grocery_utils.ingredients.models import (
    CONFIDENCE_LEVELS,
    CategorySuggestion,
    GroceryCategory,
)

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a grocery categorization assistant. Given a list of recipe ingredients and AVAILABLE GROCERY CATEGORIES, map each ingredient to the MOST GENERAL MATCH that a supermarket would use.

AVAILABLE CATEGORIES (use ONLY these, do NOT invent new names):
{categories}

STRICT OUTPUT: Return a JSON array of objects with keys exactly:
[
  {{
    "ingredientName": "string (original)",
    "suggestedCategoryId": "string (one of the provided IDs)",
    "confidence": "high|medium|low"
  }}
]

RULES:
- Choose GENERAL categories (e.g., cheese, meat, dairy, vegetables) over specific subtypes.
- If no suitable category exists, set suggestedCategoryId to null.
- Do NOT propose or name new categories.
- Keep ingredientName exactly as provided."""


class CategorySuggester(Protocol):
    """Anything that can suggest a grocery category for each ingredient."""

    def suggest(
        self, ingredients: Sequence[str], categories: Sequence[GroceryCategory]
    ) -> List[CategorySuggestion]:
        ...


def fallback_suggestions(ingredients: Sequence[str]) -> List[CategorySuggestion]:
    """One empty, low-confidence suggestion per ingredient."""
    return [
        CategorySuggestion(ingredient_name=ingredient, confidence="low")
        for ingredient in ingredients
    ]


class NullSuggester:
    """Suggester used when no AI provider is configured."""

    def suggest(
        self, ingredients: Sequence[str], categories: Sequence[GroceryCategory]
    ) -> List[CategorySuggestion]:
        return fallback_suggestions(ingredients)


def build_system_prompt(categories: Sequence[GroceryCategory]) -> str:
    listing = "\n".join(f"- {category.id}: {category.value}" for category in categories)
    return SYSTEM_PROMPT.format(categories=listing)


def build_user_prompt(ingredients: Sequence[str]) -> str:
    lines = "\n".join(f"{i + 1}. {ingredient}" for i, ingredient in enumerate(ingredients))
    return f"Map these ingredients to categories:\n{lines}"


def extract_json(completion: str) -> Any:
    """Pull the JSON payload out of a model completion.

    Handles fenced ```json blocks and prose around a bare object or array.

    Raises:
        SuggestionError: If no JSON can be decoded.
    """
    text = completion.strip()
    if "```json" in text:
        text = text.split("```json")[1].split("```")[0]
    elif text.startswith("```"):
        text = text.strip("`").strip()
    else:
        starts = [i for i in (text.find("{"), text.find("[")) if i != -1]
        end = max(text.rfind("}"), text.rfind("]"))
        if starts and end > min(starts):
            text = text[min(starts) : end + 1]

    try:
        return json.loads(text.strip())
    except json.JSONDecodeError as e:
        raise SuggestionError(f"Could not decode provider response: {e}") from e


def _safe_string(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, list):
        value = next((item for item in value if item and str(item).strip()), None)
        if value is None:
            return None
    text = str(value).strip()
    return text or None


def parse_suggestions(payload: Any) -> List[CategorySuggestion]:
    """Normalize a decoded provider payload into CategorySuggestion objects.

    Accepts a bare list or an object holding the list under ``mappings`` or
    ``ingredients``, and the alternative key spellings models tend to use.

    Raises:
        SuggestionError: If the payload has no list of mappings.
    """
    if isinstance(payload, dict):
        payload = payload.get("mappings") or payload.get("ingredients") or []
    if not isinstance(payload, list):
        raise SuggestionError(f"Unexpected provider payload: {type(payload).__name__}")

    suggestions = []
    for entry in payload:
        if not isinstance(entry, dict):
            continue
        confidence = str(entry.get("confidence") or "low").strip().lower()
        suggestions.append(
            CategorySuggestion(
                ingredient_name=str(
                    entry.get("ingredientName") or entry.get("ingredient") or ""
                ),
                suggested_category_id=_safe_string(
                    entry.get("suggestedCategoryId") or entry.get("categoryId")
                ),
                category_name=_safe_string(
                    entry.get("categoryName") or entry.get("category")
                ),
                confidence=confidence if confidence in CONFIDENCE_LEVELS else "low",
            )
        )
    return suggestions
