#!/usr/bin/env python3
"""Prints the grocery categories in display order, optionally seeding the defaults."""

import argparse
import logging

from grocery_utils.config import Settings
from grocery_utils.database import CategoryStore, create_schema, get_connection

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)


def main():
    settings = Settings.from_env()
    parser = argparse.ArgumentParser(description="List grocery categories")
    parser.add_argument(
        "--db-path",
        default=settings.db_path,
        help=f"Path to the database file (default: {settings.db_path})",
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Create the default categories before listing",
    )
    args = parser.parse_args()

    conn = get_connection(args.db_path)
    try:
        create_schema(conn)
        store = CategoryStore(conn)
        if args.seed:
            store.seed_defaults()
        categories = store.list()
    finally:
        conn.close()

    print("Grocery Categories:")
    for category in categories:
        print(f"  - {category.id}: {category.value}")


if __name__ == "__main__":
    main()
