"""
Rule-based concern list from the resolved rating and name substrings.
"""
from typing import List

from labelscan.models.scan_result import SafetyRating

AVOID_CONCERNS = ("may pose health risks", "consider avoiding")
CAUTION_CONCERNS = ("consume in moderation",)

ARTIFICIAL_CONCERN = "contains artificial ingredients"
PRESERVATIVE_CONCERN = "contains preservatives"
COLORING_CONCERN = "contains added coloring"

# (substrings, concern) checked in this order; each fires at most once
_TYPE_RULES = (
    (("artificial", "synthetic"), ARTIFICIAL_CONCERN),
    (("preservative",), PRESERVATIVE_CONCERN),
    (("color", "dye"), COLORING_CONCERN),
)


def generate_concerns(name: str, rating: SafetyRating) -> List[str]:
    concerns: List[str] = []
    if rating == SafetyRating.AVOID:
        concerns.extend(AVOID_CONCERNS)
    elif rating == SafetyRating.CAUTION:
        concerns.extend(CAUTION_CONCERNS)
    lowered = (name or "").lower()
    for needles, concern in _TYPE_RULES:
        if any(n in lowered for n in needles):
            concerns.append(concern)
    return concerns
