#!/usr/bin/env python3
"""
Rewrites stored recipe ingredients into the "<amount+unit> <product>" pattern,
removing parenthetical notes and "Achtung" warnings from the product part.
"""

import argparse
import logging

from grocery_utils.config import Settings
from grocery_utils.database import RecipeStore, create_schema, get_connection

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)


def main():
    settings = Settings.from_env()
    parser = argparse.ArgumentParser(description="Normalize recipe ingredient names")
    parser.add_argument(
        "--db-path",
        default=settings.db_path,
        help=f"Path to the database file (default: {settings.db_path})",
    )
    args = parser.parse_args()

    conn = get_connection(args.db_path)
    try:
        create_schema(conn)
        RecipeStore(conn).normalize_items()
    finally:
        conn.close()


if __name__ == "__main__":
    main()
