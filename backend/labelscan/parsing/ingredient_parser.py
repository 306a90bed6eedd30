"""
Locate the ingredient enumeration inside label text and split it into
individual ingredient strings.
- Extraction: ordered marker patterns, whole text as fallback.
- Segmentation: commas split only outside parentheses.
- Validation: length/shape filter, kept separate from the splitter.
"""
import re
import logging
from typing import Iterator, Optional, Tuple

from labelscan.config import MAX_SEGMENT_LENGTH

logger = logging.getLogger(__name__)

# Tried in order; the first pattern that matches wins.
MARKER_PATTERNS = [
    re.compile(r"ingredients?\s*:?\s*(.+)", re.IGNORECASE),
    re.compile(r"contains?\s*:?\s*(.+)", re.IGNORECASE),
    re.compile(r"made\s+with\s*:?\s*(.+)", re.IGNORECASE),
]


def find_ingredient_list(text: str) -> Tuple[str, Optional[str]]:
    """
    Return (segment, marker) where marker is the pattern that matched,
    or None when the whole text was used.
    """
    for pat in MARKER_PATTERNS:
        m = pat.search(text)
        if m and m.group(1).strip():
            return m.group(1).strip(), pat.pattern
    logger.info("MARKER_NOT_FOUND using whole text len=%d", len(text))
    return text, None


def extract_ingredient_list(text: str) -> str:
    """
    'Nutrition facts ... Ingredients: Water, Sugar' -> 'Water, Sugar'
    Falls back to the whole text when no marker is present.
    """
    segment, _ = find_ingredient_list(text)
    return segment


def segment_ingredients(text: str) -> Iterator[str]:
    """
    Split on commas at parenthesis depth 0, yielding trimmed segments in order.
    'Vitamin C (Ascorbic Acid), Salt' -> 'Vitamin C (Ascorbic Acid)', 'Salt'
    A stray ')' never drives the depth below zero.
    """
    depth = 0
    current: list[str] = []
    for ch in text:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth = max(0, depth - 1)
        elif ch == "," and depth == 0:
            yield "".join(current).strip()
            current = []
            continue
        current.append(ch)
    yield "".join(current).strip()


def is_valid_segment(segment: str) -> bool:
    """Reject OCR noise: too short, too long, or not starting with a letter."""
    if not segment or len(segment) <= 1 or len(segment) >= MAX_SEGMENT_LENGTH:
        return False
    return segment[0].isalpha()
