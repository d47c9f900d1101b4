import dataclasses
from decimal import Decimal
from typing import List, Optional

CONFIDENCE_LEVELS = ("high", "medium", "low")


@dataclasses.dataclass(frozen=True)
class ParsedIngredient:
    name: str
    quantity: str  # "" when no amount/unit cluster was found


@dataclasses.dataclass(frozen=True)
class Quantity:
    value: Decimal
    unit: str  # lowercased, "" for bare counts


@dataclasses.dataclass
class CategorySuggestion:
    ingredient_name: str
    suggested_category_id: Optional[str] = None
    category_name: Optional[str] = None
    confidence: str = "low"  # 'high', 'medium', 'low'


@dataclasses.dataclass
class GroceryCategory:
    id: str
    value: str


@dataclasses.dataclass
class GroceryItem:
    id: str
    title: str
    menge: str
    done: bool = False
    categories: List[GroceryCategory] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class ReconciliationResult:
    added: int = 0
    updated: int = 0
    skipped: int = 0
    failed: int = 0
    message: str = ""
