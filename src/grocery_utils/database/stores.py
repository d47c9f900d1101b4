"""SQLite backed stores for groceries, grocery categories and recipes.

All grocery and recipe operations are scoped to a user id; a record owned by
another user behaves as if it did not exist.
"""

import logging
import sqlite3
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from grocery_utils.database.utils import new_id, transaction
from grocery_utils.exceptions import GroceryNotFoundError, RecipeNotFoundError
from grocery_utils.ingredients.models import GroceryCategory, GroceryItem
from grocery_utils.ingredients.parsing import normalize_recipe_item

logger = logging.getLogger(__name__)

INGREDIENT = "ingredient"
STEP = "step"

# (value, color, sort_order)
DEFAULT_CATEGORIES = [
    ("Obst / Gemüse", "#3fb950", 1),
    ("TK", "#06b6d4", 2),
    ("Fleisch", "#f85149", 3),
    ("Käse", "#e3b341", 4),
    ("Konserven", "#484f58", 5),
    ("Drogerie", "#14b8a6", 6),
]


class CategoryStore:
    """Grocery categories, shared by all users."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def list(self) -> List[GroceryCategory]:
        cur = self.conn.execute(
            "SELECT id, value FROM grocery_category ORDER BY sort_order, value"
        )
        return [GroceryCategory(id=row[0], value=row[1]) for row in cur.fetchall()]

    def create(
        self, value: str, color: str = "#cccccc", sort_order: int = 0
    ) -> GroceryCategory:
        category_id = new_id()
        with transaction(self.conn) as cur:
            cur.execute(
                "INSERT INTO grocery_category(id, value, color, sort_order) "
                "VALUES (?, ?, ?, ?)",
                (category_id, value, color, sort_order),
            )
        return GroceryCategory(id=category_id, value=value)

    def ensure(self, value: str, color: str = "#cccccc", sort_order: int = 0) -> str:
        """Return the id of the category labelled ``value``, creating it if needed."""
        row = self.conn.execute(
            "SELECT id FROM grocery_category WHERE value = ?", (value,)
        ).fetchone()
        if row:
            return row[0]
        return self.create(value, color, sort_order).id

    def seed_defaults(self) -> int:
        """Create the default categories that do not exist yet.

        Returns:
            Number of categories created.
        """
        before = len(self.list())
        for value, color, sort_order in DEFAULT_CATEGORIES:
            self.ensure(value, color, sort_order)
        created = len(self.list()) - before
        logger.info("Seeded %d grocery categories", created)
        return created


class GroceryStore:
    """A user's grocery list."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def _categories_for(self, grocery_ids: Sequence[str]) -> Dict[str, List[GroceryCategory]]:
        if not grocery_ids:
            return {}
        placeholders = ",".join("?" for _ in grocery_ids)
        cur = self.conn.execute(
            f"""
            SELECT a.grocery_id, c.id, c.value
            FROM grocery_category_assignment a
            JOIN grocery_category c ON c.id = a.grocery_category_id
            WHERE a.grocery_id IN ({placeholders})
            ORDER BY c.sort_order, c.value
            """,
            list(grocery_ids),
        )
        categories: Dict[str, List[GroceryCategory]] = {}
        for grocery_id, category_id, value in cur.fetchall():
            categories.setdefault(grocery_id, []).append(
                GroceryCategory(id=category_id, value=value)
            )
        return categories

    def _to_items(self, rows: List[Tuple]) -> List[GroceryItem]:
        categories = self._categories_for([row[0] for row in rows])
        return [
            GroceryItem(
                id=row[0],
                title=row[1],
                menge=row[2] or "",
                done=bool(row[3]),
                categories=categories.get(row[0], []),
            )
            for row in rows
        ]

    def list(
        self,
        user_id: str,
        search: Optional[str] = None,
        category_ids: Optional[Sequence[str]] = None,
    ) -> List[GroceryItem]:
        """List a user's groceries, newest first.

        Args:
            user_id: Owner of the groceries.
            search: Case-insensitive substring matched against title or menge.
            category_ids: Only return items assigned to one of these categories.
        """
        query = "SELECT id, title, menge, done FROM grocery WHERE user_id = ?"
        params: List = [user_id]
        if search:
            query += " AND (lower(title) LIKE ? OR lower(coalesce(menge, '')) LIKE ?)"
            pattern = f"%{search.lower()}%"
            params.extend([pattern, pattern])
        if category_ids:
            placeholders = ",".join("?" for _ in category_ids)
            query += (
                " AND id IN (SELECT grocery_id FROM grocery_category_assignment"
                f" WHERE grocery_category_id IN ({placeholders}))"
            )
            params.extend(category_ids)
        query += " ORDER BY created_at DESC, rowid DESC"
        return self._to_items(self.conn.execute(query, params).fetchall())

    def get(self, item_id: str, user_id: str) -> GroceryItem:
        row = self.conn.execute(
            "SELECT id, title, menge, done FROM grocery WHERE id = ? AND user_id = ?",
            (item_id, user_id),
        ).fetchone()
        if row is None:
            raise GroceryNotFoundError(f"Grocery not found: {item_id}")
        return self._to_items([row])[0]

    def create(
        self,
        user_id: str,
        title: str,
        menge: str = "",
        done: bool = False,
        category_ids: Optional[Iterable[str]] = None,
    ) -> GroceryItem:
        grocery_id = new_id()
        with transaction(self.conn) as cur:
            cur.execute(
                "INSERT INTO grocery(id, user_id, title, menge, done) VALUES (?, ?, ?, ?, ?)",
                (grocery_id, user_id, title, menge, int(done)),
            )
            for category_id in category_ids or []:
                cur.execute(
                    "INSERT INTO grocery_category_assignment(grocery_id, grocery_category_id) "
                    "VALUES (?, ?)",
                    (grocery_id, category_id),
                )
        return self.get(grocery_id, user_id)

    def update(
        self,
        item_id: str,
        user_id: str,
        title: Optional[str] = None,
        menge: Optional[str] = None,
        done: Optional[bool] = None,
        category_ids: Optional[Iterable[str]] = None,
    ) -> GroceryItem:
        """Update fields of a grocery item; None leaves a field unchanged.

        When ``category_ids`` is given the item's categories are replaced.
        """
        existing = self.get(item_id, user_id)
        with transaction(self.conn) as cur:
            cur.execute(
                """
                UPDATE grocery
                SET title = ?, menge = ?, done = ?,
                    updated_at = strftime('%Y-%m-%d %H:%M:%f', 'now')
                WHERE id = ? AND user_id = ?
                """,
                (
                    existing.title if title is None else title,
                    existing.menge if menge is None else menge,
                    int(existing.done if done is None else done),
                    item_id,
                    user_id,
                ),
            )
            if category_ids is not None:
                cur.execute(
                    "DELETE FROM grocery_category_assignment WHERE grocery_id = ?",
                    (item_id,),
                )
                for category_id in category_ids:
                    cur.execute(
                        "INSERT INTO grocery_category_assignment(grocery_id, grocery_category_id) "
                        "VALUES (?, ?)",
                        (item_id, category_id),
                    )
        return self.get(item_id, user_id)

    def delete(self, item_id: str, user_id: str) -> str:
        self.get(item_id, user_id)
        with transaction(self.conn) as cur:
            cur.execute("DELETE FROM grocery WHERE id = ? AND user_id = ?", (item_id, user_id))
        return item_id


RecipeItemInput = Union[str, Tuple[str, str]]


class RecipeStore:
    """Recipes and their items (ingredients and preparation steps)."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def create(
        self,
        user_id: str,
        title: str,
        items: Sequence[RecipeItemInput] = (),
        description: Optional[str] = None,
    ) -> str:
        """Create a recipe and return its id.

        Args:
            user_id: Owner of the recipe.
            title: Recipe title.
            items: Item names, or ``(name, type)`` pairs where type is
                ``"ingredient"`` or ``"step"``. Plain names are ingredients.
            description: Optional free-text description.
        """
        recipe_id = new_id()
        with transaction(self.conn) as cur:
            cur.execute(
                "INSERT INTO recipe(id, user_id, title, description) VALUES (?, ?, ?, ?)",
                (recipe_id, user_id, title, description),
            )
            for order, item in enumerate(items):
                name, item_type = (item, INGREDIENT) if isinstance(item, str) else item
                if item_type not in (INGREDIENT, STEP):
                    raise ValueError(f"Unknown recipe item type: {item_type}")
                cur.execute(
                    "INSERT INTO recipe_item(id, recipe_id, name, type, sort_order) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (new_id(), recipe_id, name, item_type, order),
                )
        return recipe_id

    def find_by_title(self, user_id: str, title: str) -> Optional[str]:
        row = self.conn.execute(
            "SELECT id FROM recipe WHERE user_id = ? AND title = ?", (user_id, title)
        ).fetchone()
        return row[0] if row else None

    def get_ingredients(self, recipe_id: str, user_id: str) -> List[str]:
        """Return the ingredient lines of a recipe; steps are left out.

        Raises:
            RecipeNotFoundError: If the recipe does not exist for this user.
        """
        row = self.conn.execute(
            "SELECT id FROM recipe WHERE id = ? AND user_id = ?", (recipe_id, user_id)
        ).fetchone()
        if row is None:
            raise RecipeNotFoundError(f"Recipe not found: {recipe_id}")
        cur = self.conn.execute(
            "SELECT name FROM recipe_item WHERE recipe_id = ? AND type = ? "
            "ORDER BY sort_order",
            (recipe_id, INGREDIENT),
        )
        return [name for (name,) in cur.fetchall()]

    def normalize_items(self) -> int:
        """Rewrite all ingredient items into "<amount+unit> <product>" form.

        Returns:
            Number of items that changed.
        """
        rows = self.conn.execute(
            "SELECT id, name FROM recipe_item WHERE type = ?", (INGREDIENT,)
        ).fetchall()
        updates = 0
        with transaction(self.conn) as cur:
            for item_id, name in rows:
                normalized = normalize_recipe_item(name)
                if normalized != name:
                    cur.execute(
                        "UPDATE recipe_item SET name = ? WHERE id = ?", (normalized, item_id)
                    )
                    updates += 1
                    logger.info("Updated: '%s' -> '%s'", name, normalized)
        logger.info("Normalization complete. Updated %d of %d items.", updates, len(rows))
        return updates
