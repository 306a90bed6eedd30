"""
Per-ingredient confidence heuristic, integer in [0, 98].
base 70; +20 exact knowledge-base key (partial matches get no bonus);
+10 single-token name; +5 Safe or +10 Avoid; capped at 98.
"""
from labelscan.models.scan_result import SafetyRating

BASE_SCORE = 70
EXACT_MATCH_BONUS = 20
SINGLE_TOKEN_BONUS = 10
RATING_BONUS = {
    SafetyRating.SAFE: 5,
    SafetyRating.CAUTION: 0,
    SafetyRating.AVOID: 10,
}
MAX_SCORE = 98


def score_ingredient(name: str, rating: SafetyRating, exact_match: bool) -> int:
    score = BASE_SCORE
    if exact_match:
        score += EXACT_MATCH_BONUS
    if " " not in name:
        score += SINGLE_TOKEN_BONUS
    score += RATING_BONUS[rating]
    return max(0, min(MAX_SCORE, score))
