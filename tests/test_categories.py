import re

import pytest

from grocery_utils.ingredients.categories import (
    CategoryResolver,
    KeywordRule,
    load_keyword_rules,
    resolve_category,
)
from grocery_utils.ingredients.models import CategorySuggestion, GroceryCategory

CATEGORIES = [
    GroceryCategory("c-produce", "Obst / Gemüse"),
    GroceryCategory("c-frozen", "TK"),
    GroceryCategory("c-meat", "Fleisch"),
    GroceryCategory("c-cheese", "Käse"),
    GroceryCategory("c-canned", "Konserven"),
    GroceryCategory("c-drugstore", "Drogerie"),
]


@pytest.fixture(scope="module")
def resolver():
    return CategoryResolver()


def suggestion(category_id=None, category_name=None, name="x"):
    return CategorySuggestion(
        ingredient_name=name,
        suggested_category_id=category_id,
        category_name=category_name,
        confidence="high" if category_id else "low",
    )


def test_direct_id_wins_over_category_name(resolver):
    result = resolver.resolve(
        "Hähnchenbrust", suggestion("c-cheese", "Fleisch"), CATEGORIES
    )
    assert result == "c-cheese"


def test_direct_id_is_not_validated(resolver):
    assert resolver.resolve("Milch", suggestion("unknown-id"), CATEGORIES) == "unknown-id"


@pytest.mark.parametrize(
    "category_name, expected_id",
    [
        ("Fleisch", "c-meat"),
        ("  käse ", "c-cheese"),
        ("Gemüse", "c-produce"),
        ("Obst", "c-produce"),
        ("Konserven & Dosen", "c-canned"),
        ("TK-Ware", "c-frozen"),
    ],
)
def test_category_name_match(resolver, category_name, expected_id):
    result = resolver.resolve("Zutat", suggestion(category_name=category_name), CATEGORIES)
    assert result == expected_id


def test_exact_name_match_beats_loose_match(resolver):
    categories = [GroceryCategory("a", "Käse & Milch"), GroceryCategory("b", "Käse")]
    assert resolver.match_category_name("Käse", categories) == "b"


def test_unmatched_category_name_falls_through_to_keywords(resolver):
    result = resolver.resolve(
        "Rinderhack", suggestion(category_name="Haushalt"), CATEGORIES
    )
    assert result == "c-meat"


@pytest.mark.parametrize(
    "ingredient_name, expected_id",
    [
        ("Hähnchenbrust", "c-meat"),
        ("Putenbrust", "c-meat"),
        ("Rindersteak", "c-meat"),
        ("Zwiebeln", "c-produce"),
        ("Karotten", "c-produce"),
        ("Brokkoli", "c-produce"),
        ("Gouda", "c-cheese"),
        ("Milch (laktosefrei)", "c-cheese"),
        ("Kidneybohnen", "c-canned"),
        ("Passierte Tomaten", "c-produce"),
        ("TK Erbsen", "c-frozen"),
    ],
)
def test_keyword_heuristic(resolver, ingredient_name, expected_id):
    assert resolver.resolve(ingredient_name, suggestion(), CATEGORIES) == expected_id


def test_keyword_group_without_category_continues(resolver):
    """Produce has no category here, so the later canned group is used."""
    categories = [GroceryCategory("c-canned", "Konserven")]
    assert resolver.resolve("Tomatenmark", suggestion(), categories) == "c-canned"


def test_keyword_heuristic_wins_over_label_containment():
    categories = [GroceryCategory("c-brust", "Brust"), GroceryCategory("c-meat", "Fleisch")]
    assert CategoryResolver().resolve("Hähnchenbrust", None, categories) == "c-meat"


def test_label_containment_fallback(resolver):
    categories = [GroceryCategory("c-drinks", "Saft"), GroceryCategory("c-empty", "  ")]
    assert resolver.resolve("Orangensaft", suggestion(), categories) == "c-drinks"


@pytest.mark.parametrize(
    "ingredient_name, categories",
    [
        ("Zwiebeln", [GroceryCategory("c1", "Fleisch")]),
        ("Alufolie", CATEGORIES),
        ("Hähnchenbrust", []),
    ],
)
def test_no_match_returns_none(resolver, ingredient_name, categories):
    assert resolver.resolve(ingredient_name, suggestion(), categories) is None


def test_missing_suggestion_uses_heuristics(resolver):
    assert resolver.resolve("Feta", None, CATEGORIES) == "c-cheese"


def test_custom_rules():
    rules = [KeywordRule("fish", ["lachs"], re.compile("fisch"))]
    resolver = CategoryResolver(rules=rules)
    categories = [GroceryCategory("c-fish", "Fisch"), GroceryCategory("c-meat", "Fleisch")]
    assert resolver.resolve("Lachsfilet", None, categories) == "c-fish"


def test_bundled_rules_are_ordered():
    groups = [rule.group for rule in load_keyword_rules()]
    assert groups == [
        "meat",
        "produce",
        "dairy",
        "starch",
        "oil",
        "sugar",
        "canned",
        "frozen",
    ]


def test_resolve_category_uses_bundled_table():
    assert resolve_category("Hähnchenbrust", None, [GroceryCategory("c1", "Fleisch")]) == "c1"
