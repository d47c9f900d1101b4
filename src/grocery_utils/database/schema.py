"""Database schema definitions for recipe and grocery databases."""

import sqlite3

DDL = """
CREATE TABLE IF NOT EXISTS grocery_category(
    id         TEXT PRIMARY KEY,
    value      TEXT NOT NULL,
    color      TEXT NOT NULL DEFAULT '#cccccc',
    sort_order INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE IF NOT EXISTS grocery(
    id         TEXT PRIMARY KEY,
    user_id    TEXT NOT NULL,
    title      TEXT NOT NULL,
    menge      TEXT,
    done       INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%d %H:%M:%f', 'now')),
    updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%d %H:%M:%f', 'now'))
);

CREATE INDEX IF NOT EXISTS grocery_user_idx ON grocery(user_id);

CREATE TABLE IF NOT EXISTS grocery_category_assignment(
    grocery_id          TEXT NOT NULL,
    grocery_category_id TEXT NOT NULL,
    PRIMARY KEY(grocery_id, grocery_category_id),
    FOREIGN KEY(grocery_id)          REFERENCES grocery(id)          ON DELETE CASCADE,
    FOREIGN KEY(grocery_category_id) REFERENCES grocery_category(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS recipe(
    id          TEXT PRIMARY KEY,
    user_id     TEXT NOT NULL,
    title       TEXT NOT NULL,
    description TEXT,
    created_at  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%d %H:%M:%f', 'now'))
);

CREATE TABLE IF NOT EXISTS recipe_item(
    id         TEXT PRIMARY KEY,
    recipe_id  TEXT NOT NULL,
    name       TEXT NOT NULL,
    type       TEXT NOT NULL DEFAULT 'ingredient',
    sort_order INTEGER NOT NULL DEFAULT 0,
    FOREIGN KEY(recipe_id) REFERENCES recipe(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS recipe_item_type_idx ON recipe_item(type);
"""


def create_schema(conn: sqlite3.Connection) -> None:
    """Create the database schema for recipes and groceries.

    Args:
        conn: SQLite database connection
    """
    conn.executescript(DDL)
    conn.execute("PRAGMA foreign_keys = ON")
