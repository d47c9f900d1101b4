"""Importing recipes from CSV exports."""

import csv
import logging
from typing import IO, Iterable, List, Tuple, Union

import pandas as pd
from tqdm import tqdm

from grocery_utils.database import RecipeStore

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["Rezeptname", "Zutat", "Menge", "Einheit", "Zubereitung"]


def _fit_row(row: List[str], width: int) -> List[str]:
    # unquoted notes may contain commas; everything past the last column is the note
    if len(row) > width:
        row = row[: width - 1] + [", ".join(row[width - 1 :])]
    return row + [""] * (width - len(row))


def _read_rows(lines: Iterable[str]) -> List[List[str]]:
    reader = csv.reader(lines, skipinitialspace=True)
    return [row for row in reader if any(field.strip() for field in row)]


def read_recipe_csv(source: Union[str, IO]) -> pd.DataFrame:
    """Read a recipe CSV with one row per ingredient.

    Expected columns are ``Rezeptname, Zutat, Menge, Einheit, Zubereitung``.
    Missing trailing columns and short rows are filled with empty strings.
    Preparation notes may contain unquoted commas: fields beyond the header
    width are joined back into the last column.

    Raises:
        ValueError: If the recipe or ingredient column is missing.
    """
    if isinstance(source, str):
        with open(source, "r", encoding="utf-8-sig", newline="") as f:
            rows = _read_rows(f)
    else:
        rows = _read_rows(source)
    if not rows:
        raise ValueError("Recipe CSV is empty")

    header = [column.strip() for column in rows[0]]
    body = [_fit_row(row, len(header)) for row in rows[1:]]
    df = pd.DataFrame(body, columns=header, dtype=str)
    for column in CSV_COLUMNS[:2]:
        if column not in df.columns:
            raise ValueError(f"Recipe CSV is missing the '{column}' column")
    for column in CSV_COLUMNS[2:]:
        if column not in df.columns:
            df[column] = ""
    return df[CSV_COLUMNS].apply(lambda col: col.str.strip())


def recipe_item_name(ingredient: str, amount: str, unit: str) -> str:
    """Join an ingredient row into a "<name> <amount><unit>" recipe item.

    Examples:
        >>> recipe_item_name("Hähnchenbrustfilet", "300", "g")
        'Hähnchenbrustfilet 300g'
        >>> recipe_item_name("Salz", "", "")
        'Salz'
    """
    quantity = f"{amount}{unit}"
    return f"{ingredient} {quantity}".strip() if quantity else ingredient.strip()


def _distinct(values: List[str]) -> List[str]:
    seen = []
    for value in values:
        if value and value not in seen:
            seen.append(value)
    return seen


def import_recipes_csv(
    source: Union[str, IO], store: RecipeStore, user_id: str
) -> Tuple[int, int]:
    """Create a recipe for each distinct recipe name in a CSV file.

    Recipes that already exist for the user (same title) are skipped. The
    distinct preparation notes of a recipe become its description.

    Args:
        source: Path or file object of the CSV export.
        store: Recipe store to write to.
        user_id: Owner of the imported recipes.

    Returns:
        A tuple of (created, skipped) recipe counts.
    """
    df = read_recipe_csv(source)
    created = 0
    skipped = 0

    for recipe_name, rows in tqdm(
        df.groupby("Rezeptname", sort=False), desc="Importing recipes"
    ):
        if store.find_by_title(user_id, recipe_name):
            logger.info("Skipping existing recipe: %s", recipe_name)
            skipped += 1
            continue

        items = [
            recipe_item_name(row["Zutat"], row["Menge"], row["Einheit"])
            for _, row in rows.iterrows()
            if row["Zutat"]
        ]
        description = "\n".join(_distinct(rows["Zubereitung"].tolist())) or None
        store.create(user_id, recipe_name, items, description=description)
        logger.info("Imported recipe: %s (%d items)", recipe_name, len(items))
        created += 1

    logger.info("Import complete. Created: %d, Skipped (already existed): %d", created, skipped)
    return created, skipped
