import sqlite3

import pytest

from grocery_utils.database import (
    INGREDIENT,
    STEP,
    CategoryStore,
    GroceryStore,
    RecipeStore,
    get_connection,
    transaction,
)
from grocery_utils.exceptions import GroceryNotFoundError, RecipeNotFoundError

USER = "user-1"


@pytest.fixture
def categories(conn):
    store = CategoryStore(conn)
    return {
        "produce": store.create("Obst / Gemüse", sort_order=1).id,
        "meat": store.create("Fleisch", sort_order=2).id,
    }


def test_get_connection_creates_parent_directory(tmp_path):
    db_path = tmp_path / "nested" / "dir" / "groceries.db"
    conn = get_connection(db_path)
    try:
        assert db_path.parent.is_dir()
        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1
    finally:
        conn.close()


def test_transaction_rolls_back_on_error(conn):
    with pytest.raises(sqlite3.IntegrityError):
        with transaction(conn) as cur:
            cur.execute(
                "INSERT INTO grocery(id, user_id, title) VALUES ('g1', ?, 'Milch')", (USER,)
            )
            cur.execute(
                "INSERT INTO grocery(id, user_id, title) VALUES ('g1', ?, 'Milch')", (USER,)
            )
    assert GroceryStore(conn).list(USER) == []


def test_category_store_lists_in_sort_order(conn, categories):
    store = CategoryStore(conn)
    assert [c.value for c in store.list()] == ["Obst / Gemüse", "Fleisch"]
    assert store.ensure("Fleisch") == categories["meat"]
    new_id = store.ensure("Käse", sort_order=3)
    assert [c.id for c in store.list()][-1] == new_id


def test_create_and_get_grocery(conn, categories):
    store = GroceryStore(conn)
    item = store.create(USER, "Zwiebeln", "2", category_ids=[categories["produce"]])

    assert item.title == "Zwiebeln"
    assert item.menge == "2"
    assert item.done is False
    assert [c.value for c in item.categories] == ["Obst / Gemüse"]
    assert store.get(item.id, USER) == item


def test_groceries_are_scoped_to_user(conn):
    store = GroceryStore(conn)
    item = store.create(USER, "Milch", "1l")

    assert store.list("user-2") == []
    with pytest.raises(GroceryNotFoundError):
        store.get(item.id, "user-2")
    with pytest.raises(GroceryNotFoundError):
        store.update(item.id, "user-2", menge="2l")
    with pytest.raises(GroceryNotFoundError):
        store.delete(item.id, "user-2")


def test_list_newest_first_with_filters(conn, categories):
    store = GroceryStore(conn)
    store.create(USER, "Zwiebeln", "2", category_ids=[categories["produce"]])
    store.create(USER, "Hähnchenbrust", "300g", category_ids=[categories["meat"]])
    store.create(USER, "Milch", "1l")

    assert [i.title for i in store.list(USER)] == ["Milch", "Hähnchenbrust", "Zwiebeln"]
    assert [i.title for i in store.list(USER, search="MILCH")] == ["Milch"]
    assert [i.title for i in store.list(USER, search="300")] == ["Hähnchenbrust"]
    assert [i.title for i in store.list(USER, category_ids=[categories["meat"]])] == [
        "Hähnchenbrust"
    ]
    assert store.list(USER, search="zwiebel", category_ids=[categories["meat"]]) == []


def test_update_keeps_unspecified_fields(conn, categories):
    store = GroceryStore(conn)
    item = store.create(USER, "Reis", "500g", category_ids=[categories["produce"]])

    updated = store.update(item.id, USER, menge="1500g", done=True)
    assert (updated.title, updated.menge, updated.done) == ("Reis", "1500g", True)
    assert [c.id for c in updated.categories] == [categories["produce"]]

    recategorized = store.update(item.id, USER, category_ids=[])
    assert recategorized.categories == []
    assert recategorized.menge == "1500g"


def test_unknown_category_is_rejected(conn):
    with pytest.raises(sqlite3.IntegrityError):
        GroceryStore(conn).create(USER, "Milch", category_ids=["no-such-category"])
    assert GroceryStore(conn).list(USER) == []


def test_delete_grocery(conn, categories):
    store = GroceryStore(conn)
    item = store.create(USER, "Gurke", "1", category_ids=[categories["produce"]])

    assert store.delete(item.id, USER) == item.id
    assert store.list(USER) == []
    count = conn.execute("SELECT count(*) FROM grocery_category_assignment").fetchone()[0]
    assert count == 0


def test_recipe_ingredients_leave_out_steps(conn):
    store = RecipeStore(conn)
    recipe_id = store.create(
        USER,
        "Curry",
        ["300g Hähnchenbrust", ("Zwiebeln würfeln", STEP), ("2 Zwiebeln", INGREDIENT)],
        description="Schnell gemacht",
    )

    assert store.get_ingredients(recipe_id, USER) == ["300g Hähnchenbrust", "2 Zwiebeln"]
    assert store.find_by_title(USER, "Curry") == recipe_id
    assert store.find_by_title("user-2", "Curry") is None


def test_recipe_not_found(conn):
    with pytest.raises(RecipeNotFoundError):
        RecipeStore(conn).get_ingredients("missing", USER)


def test_recipe_with_unknown_item_type_is_rolled_back(conn):
    store = RecipeStore(conn)
    with pytest.raises(ValueError):
        store.create(USER, "Kaputt", [("Mehl", "garnish")])
    assert store.find_by_title(USER, "Kaputt") is None


def test_normalize_items(conn):
    store = RecipeStore(conn)
    recipe_id = store.create(
        USER,
        "Wraps",
        [
            "Hähnchenbrustfilet 300g",
            "Wraps 4Stück",
            "300g Reis",
            ("Gemüse 200g anbraten", STEP),
        ],
    )

    assert store.normalize_items() == 2
    assert store.get_ingredients(recipe_id, USER) == [
        "300g Hähnchenbrust",
        "4Stück Wraps",
        "300g Reis",
    ]
    step = conn.execute("SELECT name FROM recipe_item WHERE type = ?", (STEP,)).fetchone()[0]
    assert step == "Gemüse 200g anbraten"
    assert store.normalize_items() == 0


def test_seed_default_categories(conn):
    store = CategoryStore(conn)
    store.create("Fleisch", sort_order=3)

    assert store.seed_defaults() == 5
    assert [c.value for c in store.list()] == [
        "Obst / Gemüse",
        "TK",
        "Fleisch",
        "Käse",
        "Konserven",
        "Drogerie",
    ]
    assert store.seed_defaults() == 0
