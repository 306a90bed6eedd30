"""
Allergen keyword scan over canonical names. Literal substrings only; nothing
is inferred (e.g. 'butter' does not report dairy).
"""
from typing import List

ALLERGEN_KEYWORDS: tuple[str, ...] = (
    "milk",
    "eggs",
    "fish",
    "shellfish",
    "tree nuts",
    "peanuts",
    "wheat",
    "soybeans",
    "dairy",
    "lactose",
    "gluten",
    "casein",
    "whey",
)


def detect_allergens(name: str) -> List[str]:
    """Every keyword contained in name, in keyword order. Overlaps are kept."""
    lowered = (name or "").lower()
    return [kw for kw in ALLERGEN_KEYWORDS if kw in lowered]
