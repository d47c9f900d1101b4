"""Pantry staple detection.

Staples (cooking oils, dried pasta and everyday seasonings) are assumed to be
in stock already, so they are left off the grocery list when a recipe is
imported.
"""

import json
import os
from typing import Dict, Iterable, List, Optional

DEFAULT_STAPLES_FILE = os.path.join(
    os.path.dirname(__file__), "data", "pantry_staples.json"
)


def load_staples(staples_file: str = DEFAULT_STAPLES_FILE) -> Dict[str, List[str]]:
    """Load the staple word lists, lowercased, keyed by group name."""
    with open(staples_file, "r", encoding="utf-8") as f:
        groups = json.load(f)
    return {
        group: [term.strip().lower() for term in terms if term.strip()]
        for group, terms in groups.items()
    }


def matches_as_words(text: str, term: str) -> bool:
    """Check if ``term`` appears in ``text`` bounded by spaces or the string ends.

    Both arguments are expected to be lowercased already.

    Examples:
        >>> matches_as_words("300g olivenöl", "olivenöl")
        True
        >>> matches_as_words("salzgurken", "salz")
        False
    """
    return (
        text == term
        or text.startswith(term + " ")
        or text.endswith(" " + term)
        or (" " + term + " ") in text
    )


class PantryStaples:
    """Decides whether an ingredient is a pantry staple that should be skipped.

    Attributes:
        groups (dict): Mapping of group name (``oils``, ``pasta``,
            ``seasonings``) to lowercased terms.
    """

    def __init__(
        self,
        staples_file: str = DEFAULT_STAPLES_FILE,
        groups: Optional[Dict[str, Iterable[str]]] = None,
    ):
        if groups is not None:
            self.groups = {
                group: [term.strip().lower() for term in terms if term.strip()]
                for group, terms in groups.items()
            }
        else:
            self.groups = load_staples(staples_file)

    def matching_group(self, name: str) -> Optional[str]:
        """Return the name of the first staple group matching ``name``, if any."""
        text = name.strip().lower()
        for group, terms in self.groups.items():
            for term in terms:
                if matches_as_words(text, term):
                    return group
        return None

    def should_skip(self, name: str) -> bool:
        return self.matching_group(name) is not None


_default_staples: Optional[PantryStaples] = None


def is_pantry_staple(name: str) -> bool:
    """Check ``name`` against the bundled staple lists."""
    global _default_staples
    if _default_staples is None:
        _default_staples = PantryStaples()
    return _default_staples.should_skip(name)
