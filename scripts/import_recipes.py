#!/usr/bin/env python3
"""
Imports recipes from a CSV export (one row per ingredient) into the recipe database.
"""

import argparse
import logging
import sys

from grocery_utils.config import Settings
from grocery_utils.database import RecipeStore, create_schema, get_connection
from grocery_utils.recipes import import_recipes_csv

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def main():
    settings = Settings.from_env()
    parser = argparse.ArgumentParser(description="Import recipes from a CSV file")
    parser.add_argument("--csv", required=True, help="Path to the recipe CSV file")
    parser.add_argument("--user-id", required=True, help="Owner of the imported recipes")
    parser.add_argument(
        "--db-path",
        default=settings.db_path,
        help=f"Path to the database file (default: {settings.db_path})",
    )
    args = parser.parse_args()

    conn = get_connection(args.db_path)
    try:
        create_schema(conn)
        created, skipped = import_recipes_csv(args.csv, RecipeStore(conn), args.user_id)
    except (OSError, ValueError) as e:
        logger.error("Import failed: %s", e)
        sys.exit(1)
    finally:
        conn.close()

    print(f"Created: {created}, Skipped (already existed): {skipped}")


if __name__ == "__main__":
    main()
