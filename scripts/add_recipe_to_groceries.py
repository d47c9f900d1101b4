#!/usr/bin/env python3
"""
Adds all ingredients of a recipe to a user's grocery list, merging quantities
into items that are already on the list.
"""

import argparse
import dataclasses
import logging
import sys

from grocery_utils.config import PROVIDERS, Settings
from grocery_utils.database import create_schema, get_connection
from grocery_utils.exceptions import RecipeNotFoundError
from grocery_utils.reconciliation import GroceryReconciler
from grocery_utils.suggestions import get_suggester

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def main():
    settings = Settings.from_env()
    parser = argparse.ArgumentParser(description="Add a recipe to the grocery list")
    parser.add_argument("--recipe-id", required=True, help="Recipe to add")
    parser.add_argument("--user-id", required=True, help="Owner of recipe and groceries")
    parser.add_argument(
        "--db-path",
        default=settings.db_path,
        help=f"Path to the database file (default: {settings.db_path})",
    )
    parser.add_argument(
        "--provider",
        choices=PROVIDERS,
        default=settings.ai_provider,
        help=f"Category suggestion provider (default: {settings.ai_provider})",
    )
    args = parser.parse_args()

    settings = dataclasses.replace(settings, ai_provider=args.provider)
    conn = get_connection(args.db_path)
    try:
        create_schema(conn)
        reconciler = GroceryReconciler(conn, suggester=get_suggester(settings))
        result = reconciler.reconcile(args.recipe_id, args.user_id)
    except (RecipeNotFoundError, ValueError) as e:
        logger.error("%s", e)
        sys.exit(1)
    finally:
        conn.close()

    print(result.message)


if __name__ == "__main__":
    main()
