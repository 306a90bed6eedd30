"""
Scan pipeline: raw label text + recognition confidence -> ScanResult.

Normalize -> Extract -> Segment -> (Validate -> Canonicalize -> Classify)* -> Assemble.
Pure and synchronous; the only shared state is the read-only knowledge base.
"""
import logging
from typing import List, Optional, Tuple

from labelscan.config import MIN_CANONICAL_LENGTH, MIN_TEXT_LENGTH
from labelscan.errors import EmptyOrTooShortText, ErrorKind, NoValidIngredientsParsed
from labelscan.evaluation.allergens import detect_allergens
from labelscan.evaluation.concerns import generate_concerns
from labelscan.evaluation.confidence import score_ingredient
from labelscan.evaluation.overall import compute_overall_rating, looks_like_ingredient_list
from labelscan.knowledge.safety_knowledge_base import (
    MatchKind,
    SafetyKnowledgeBase,
    get_knowledge_base,
)
from labelscan.models.scan_result import ProcessedIngredient, ScanResult
from labelscan.normalization.normalizer import canonicalize_name, normalize_text, suggest_corrections
from labelscan.parsing.ingredient_parser import find_ingredient_list, is_valid_segment, segment_ingredients

logger = logging.getLogger(__name__)


def to_percent(confidence: float) -> int:
    """
    Recognition confidence as an integer percentage.
    Values in [0, 1] are fractions; values in (1, 100] are already percentages.
    """
    if confidence is None or confidence < 0 or confidence > 100:
        raise ValueError(f"recognition confidence out of range: {confidence!r}")
    if confidence <= 1:
        confidence = confidence * 100
    return int(round(confidence))


def _display_name(canonical: str) -> str:
    return canonical[:1].upper() + canonical[1:]


def _classify(
    canonical: str, position: int, kb: SafetyKnowledgeBase
) -> Tuple[ProcessedIngredient, MatchKind]:
    record, match_kind = kb.match(canonical)
    if match_kind == "default":
        hints = suggest_corrections(canonical)
        if hints:
            logger.info("UNKNOWN_INGREDIENT name=%s possible_misread_of=%s", canonical, hints)
    ingredient = ProcessedIngredient(
        display_name=_display_name(canonical),
        canonical_name=canonical,
        rating=record.rating,
        # Bonus depends on an exact key only, even when the rating came from a partial match.
        confidence=score_ingredient(canonical, record.rating, kb.has_exact(canonical)),
        explanation=record.explanation,
        position=position,
        allergens=tuple(detect_allergens(canonical)),
        concerns=tuple(generate_concerns(canonical, record.rating)),
        sources=record.sources,
    )
    return ingredient, match_kind


def classify_ingredient(
    canonical: str,
    position: int,
    knowledge_base: Optional[SafetyKnowledgeBase] = None,
) -> ProcessedIngredient:
    """Resolve one canonical name against the knowledge base and score it."""
    ingredient, _ = _classify(canonical, position, knowledge_base or get_knowledge_base())
    return ingredient


def run_scan(
    raw_text: str,
    recognition_confidence: float,
    knowledge_base: Optional[SafetyKnowledgeBase] = None,
) -> ScanResult:
    """
    Run the whole pipeline once.
    Raises EmptyOrTooShortText when normalized text is under 10 characters and
    NoValidIngredientsParsed when no segment survives validation.
    Non-fatal conditions are recorded on ScanResult.notices.
    """
    overall_confidence = to_percent(recognition_confidence)
    kb = knowledge_base or get_knowledge_base()
    notices: List[ErrorKind] = []

    text = normalize_text(raw_text or "")
    logger.info("SCAN_START raw_len=%d normalized_len=%d", len(raw_text or ""), len(text))
    if len(text) < MIN_TEXT_LENGTH:
        raise EmptyOrTooShortText(
            f"recognized text too short ({len(text)} < {MIN_TEXT_LENGTH} characters)"
        )

    segment, marker = find_ingredient_list(text)
    if marker is None:
        notices.append(ErrorKind.NO_INGREDIENT_MARKER_FOUND)

    ingredients: List[ProcessedIngredient] = []
    for raw in segment_ingredients(segment):
        if not is_valid_segment(raw):
            logger.debug("SEGMENT_DROPPED reason=shape segment=%r", raw)
            continue
        canonical = canonicalize_name(raw)
        if len(canonical) < MIN_CANONICAL_LENGTH:
            logger.debug("SEGMENT_DROPPED reason=canonical_too_short segment=%r", raw)
            continue
        ingredient, match_kind = _classify(canonical, len(ingredients) + 1, kb)
        if match_kind == "default" and ErrorKind.UNKNOWN_INGREDIENT not in notices:
            notices.append(ErrorKind.UNKNOWN_INGREDIENT)
        ingredients.append(ingredient)

    if not ingredients:
        raise NoValidIngredientsParsed("no valid ingredients found in recognized text")

    if not looks_like_ingredient_list(ingredients):
        notices.append(ErrorKind.LOW_CONFIDENCE_LIST)

    overall = compute_overall_rating(ingredients)
    logger.info(
        "SCAN_DONE ingredients=%d overall=%s score=%d confidence=%d notices=%s",
        len(ingredients), overall.rating.value, overall.score, overall_confidence,
        [n.value for n in notices],
    )
    return ScanResult(
        ingredients=tuple(ingredients),
        overall_confidence=overall_confidence,
        raw_text=raw_text or "",
        overall_rating=overall,
        notices=tuple(notices),
    )
