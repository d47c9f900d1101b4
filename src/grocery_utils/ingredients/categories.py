"""Grocery category resolution for recipe ingredients."""

import dataclasses
import json
import logging
import os
import re
from typing import List, Optional, Sequence

from grocery_utils.ingredients.models import CategorySuggestion, GroceryCategory

logger = logging.getLogger(__name__)

DEFAULT_KEYWORDS_FILE = os.path.join(
    os.path.dirname(__file__), "data", "category_keywords.json"
)


@dataclasses.dataclass
class KeywordRule:
    group: str
    keywords: List[str]
    label_pattern: re.Pattern

    def hits(self, ingredient_name: str) -> bool:
        text = ingredient_name.lower()
        return any(keyword in text for keyword in self.keywords)

    def first_category(
        self, categories: Sequence[GroceryCategory]
    ) -> Optional[GroceryCategory]:
        for category in categories:
            if self.label_pattern.search(category.value.strip().lower()):
                return category
        return None


def load_keyword_rules(keywords_file: str = DEFAULT_KEYWORDS_FILE) -> List[KeywordRule]:
    """Load the ordered keyword heuristic table from a JSON file.

    Each entry holds a ``group`` name, a list of ``keywords`` looked for in
    the ingredient name and a ``label_pattern`` regex matched against
    lowercased category labels.
    """
    with open(keywords_file, "r", encoding="utf-8") as f:
        entries = json.load(f)
    return [
        KeywordRule(
            group=entry["group"],
            keywords=[keyword.lower() for keyword in entry["keywords"]],
            label_pattern=re.compile(entry["label_pattern"], re.IGNORECASE),
        )
        for entry in entries
    ]


def _label_tokens(label: str) -> List[str]:
    return [token for token in re.split(r"[\s/]+", label) if token]


class CategoryResolver:
    """Picks a grocery category id for an ingredient.

    Signals are tried from most to least specific: the provider's category
    id, the provider's category name, the keyword heuristic table and
    finally plain label containment. The resolver never raises; it returns
    None when nothing fits.

    Attributes:
        rules (list): Ordered KeywordRule entries for the heuristic step.
    """

    def __init__(
        self,
        keywords_file: str = DEFAULT_KEYWORDS_FILE,
        rules: Optional[List[KeywordRule]] = None,
    ):
        self.rules = rules if rules is not None else load_keyword_rules(keywords_file)

    def match_category_name(
        self, category_name: str, categories: Sequence[GroceryCategory]
    ) -> Optional[str]:
        """Match a category name suggested by the provider against the labels.

        An exact (case-insensitive) label match wins. Otherwise the first
        category whose label contains the name, is contained in the name, or
        has a slash/space separated token contained in the name is used, so
        that "Gemüse" finds "Obst / Gemüse".
        """
        wanted = category_name.strip().lower()
        if not wanted:
            return None

        for category in categories:
            if category.value.strip().lower() == wanted:
                return category.id

        for category in categories:
            label = category.value.strip().lower()
            if not label:
                continue
            if wanted in label or label in wanted:
                return category.id
            if any(token in wanted for token in _label_tokens(label)):
                return category.id
        return None

    def match_keywords(
        self, ingredient_name: str, categories: Sequence[GroceryCategory]
    ) -> Optional[str]:
        for rule in self.rules:
            if not rule.hits(ingredient_name):
                continue
            category = rule.first_category(categories)
            if category is not None:
                logger.debug(
                    "Keyword group '%s' mapped '%s' to '%s'",
                    rule.group,
                    ingredient_name,
                    category.value,
                )
                return category.id
        return None

    @staticmethod
    def match_label_in_name(
        ingredient_name: str, categories: Sequence[GroceryCategory]
    ) -> Optional[str]:
        text = ingredient_name.lower()
        for category in categories:
            label = category.value.strip().lower()
            if label and label in text:
                return category.id
        return None

    def resolve(
        self,
        ingredient_name: str,
        suggestion: Optional[CategorySuggestion],
        categories: Sequence[GroceryCategory],
    ) -> Optional[str]:
        """Return the category id for ``ingredient_name`` or None.

        Args:
            ingredient_name: Parsed ingredient name (quantity already removed).
            suggestion: The provider's suggestion for this ingredient, if any.
            categories: The user's grocery categories.

        Returns:
            A category id. The provider's id is passed through without
            checking it against ``categories``.
        """
        if suggestion is not None:
            if suggestion.suggested_category_id:
                return suggestion.suggested_category_id
            if suggestion.category_name:
                category_id = self.match_category_name(
                    suggestion.category_name, categories
                )
                if category_id:
                    return category_id

        category_id = self.match_keywords(ingredient_name, categories)
        if category_id:
            return category_id

        return self.match_label_in_name(ingredient_name, categories)


_default_resolver: Optional[CategoryResolver] = None


def resolve_category(
    ingredient_name: str,
    suggestion: Optional[CategorySuggestion],
    categories: Sequence[GroceryCategory],
) -> Optional[str]:
    """Resolve a category with the bundled keyword table."""
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = CategoryResolver()
    return _default_resolver.resolve(ingredient_name, suggestion, categories)
