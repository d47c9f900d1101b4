from decimal import Decimal

import pytest

from grocery_utils.ingredients.models import Quantity
from grocery_utils.ingredients.quantities import (
    format_amount,
    merge_quantities,
    parse_amount,
)


@pytest.mark.parametrize(
    "existing, incoming, expected",
    [
        ("500g", "300g", "800g"),
        ("2pcs", "3pcs", "5pcs"),
        ("500ml", "1l", "1500ml"),
        ("1l", "500ml", "1500ml"),
        ("1kg", "200g", "1200g"),
        ("200g", "1,5kg", "1700g"),
        ("1l", "1l", "2l"),
        ("2", "3", "5"),
        ("0.1l", "0.2l", "0.3l"),
        ("1,5 kg", "0,5kg", "2kg"),
        ("2EL", "1EL", "3el"),
        ("2 Stück", "3 stück", "5stück"),
        ("some", "more", "some + more"),
        ("2 Stück", "300g", "2 Stück + 300g"),
        ("500g", "1l", "500g + 1l"),
        ("300g", "nach Geschmack", "300g + nach Geschmack"),
        ("", "300g", "300g"),
        ("300g", "", "300g"),
        ("", "", ""),
    ],
)
def test_merge_quantities(existing, incoming, expected):
    assert merge_quantities(existing, incoming) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("300g", Quantity(Decimal("300"), "g")),
        ("1,5L", Quantity(Decimal("1.5"), "l")),
        ("2 Stück", Quantity(Decimal("2"), "stück")),
        ("4", Quantity(Decimal("4"), "")),
        (" 250 ml ", Quantity(Decimal("250"), "ml")),
        ("ca. 300g", None),
        ("300g Mehl", None),
        ("g", None),
        ("", None),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (Decimal("1500.0"), "1500"),
        (Decimal("800"), "800"),
        (Decimal("2.50"), "2.5"),
        (Decimal("0.3"), "0.3"),
        (Decimal("0"), "0"),
    ],
)
def test_format_amount(value, expected):
    assert format_amount(value) == expected
