"""Unit-aware merging of grocery quantity strings."""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from grocery_utils.ingredients.models import Quantity

QUANTITY_RE = re.compile(r"^(\d+(?:[.,]\d+)?)\s*([^\W\d_]*)$")

# Compatible unit pairs: larger unit -> (smaller unit, factor)
UNIT_CONVERSIONS = {
    "l": ("ml", Decimal(1000)),
    "kg": ("g", Decimal(1000)),
}


def parse_amount(text: str) -> Optional[Quantity]:
    """Parse a quantity string like ``"300g"``, ``"1,5 l"`` or ``"2"``.

    Returns:
        A Quantity with a lowercased unit, or None if the text is not a plain
        number optionally followed by unit letters.

    Examples:
        >>> parse_amount("1,5L")
        Quantity(value=Decimal('1.5'), unit='l')
        >>> parse_amount("some") is None
        True
    """
    match = QUANTITY_RE.match(text.strip())
    if not match:
        return None
    try:
        value = Decimal(match.group(1).replace(",", "."))
    except InvalidOperation:
        return None
    return Quantity(value=value, unit=match.group(2).lower())


def _to_smaller_unit(quantity: Quantity, other_unit: str) -> Quantity:
    conversion = UNIT_CONVERSIONS.get(quantity.unit)
    if conversion and conversion[0] == other_unit:
        smaller_unit, factor = conversion
        return Quantity(value=quantity.value * factor, unit=smaller_unit)
    return quantity


def format_amount(value: Decimal) -> str:
    """Format a Decimal without exponent or trailing zeros.

    Examples:
        >>> format_amount(Decimal("1500.0"))
        '1500'
        >>> format_amount(Decimal("2.50"))
        '2.5'
    """
    text = format(value.normalize(), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def merge_quantities(existing: str, incoming: str) -> str:
    """Combine two quantity strings into one.

    Amounts in the same unit are summed; ``l``/``ml`` and ``kg``/``g`` are
    converted to the smaller unit first. Anything that cannot be summed is
    kept verbatim as ``"<existing> + <incoming>"``.

    Examples:
        >>> merge_quantities("500g", "300g")
        '800g'
        >>> merge_quantities("500ml", "1l")
        '1500ml'
        >>> merge_quantities("2 Stück", "300g")
        '2 Stück + 300g'
        >>> merge_quantities("", "300g")
        '300g'
    """
    existing = existing or ""
    incoming = incoming or ""
    if not existing.strip():
        return incoming
    if not incoming.strip():
        return existing

    left = parse_amount(existing)
    right = parse_amount(incoming)
    if left is None or right is None:
        return f"{existing} + {incoming}"

    left = _to_smaller_unit(left, right.unit)
    right = _to_smaller_unit(right, left.unit)
    if left.unit != right.unit:
        return f"{existing} + {incoming}"

    return f"{format_amount(left.value + right.value)}{left.unit}"
