"""
Label-level summaries derived from the per-ingredient results.
"""
from typing import Sequence

from labelscan.models.scan_result import OverallRating, ProcessedIngredient, SafetyRating

RATING_SCORES = {
    SafetyRating.SAFE: 100,
    SafetyRating.CAUTION: 60,
    SafetyRating.AVOID: 20,
}
SAFE_THRESHOLD = 80
CAUTION_THRESHOLD = 60

MIN_LIST_SIZE = 2
WELL_READ_CONFIDENCE = 70
WELL_READ_RATIO = 0.7


def compute_overall_rating(ingredients: Sequence[ProcessedIngredient]) -> OverallRating:
    """
    Mean of safe=100 / caution=60 / avoid=20, rounded.
    >= 80 safe, >= 60 caution, otherwise avoid.
    """
    if not ingredients:
        return OverallRating(SafetyRating.CAUTION, 0)
    avg = sum(RATING_SCORES[ing.rating] for ing in ingredients) / len(ingredients)
    score = int(round(avg))
    if avg >= SAFE_THRESHOLD:
        return OverallRating(SafetyRating.SAFE, score)
    if avg >= CAUTION_THRESHOLD:
        return OverallRating(SafetyRating.CAUTION, score)
    return OverallRating(SafetyRating.AVOID, score)


def looks_like_ingredient_list(ingredients: Sequence[ProcessedIngredient]) -> bool:
    """At least 2 ingredients and >= 70% of them with confidence >= 70."""
    if len(ingredients) < MIN_LIST_SIZE:
        return False
    well_read = sum(1 for ing in ingredients if ing.confidence >= WELL_READ_CONFIDENCE)
    return well_read / len(ingredients) >= WELL_READ_RATIO
