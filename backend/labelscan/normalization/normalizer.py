"""
Deterministic text normalization. No fuzzy matching happens here; the keys
produced are looked up as-is in the safety knowledge base.
"""
import re
import logging
from typing import List

logger = logging.getLogger(__name__)

_SMART_QUOTES = re.compile(r"[‘’‚‛“”„‟´`]")
_WHITESPACE = re.compile(r"\s+")
# Innermost group only; applied until nothing matches so nesting is handled.
_ENCLOSED = re.compile(r"\([^()]*\)|\[[^\[\]]*\]")
_NAME_PUNCTUATION = re.compile(r"[.,;]")

# Frequent OCR misreads of common ingredients (misread -> intended)
OCR_CORRECTIONS: dict[str, str] = {
    "suqar": "sugar",
    "waler": "water",
    "sall": "salt",
    "oii": "oil",
    "milx": "milk",
    "buttcr": "butter",
    "vanilia": "vanilla",
}


def normalize_text(text: str) -> str:
    """
    Clean raw recognized text.
    - Newlines become spaces, whitespace runs collapse to one space.
    - Curly/smart quotes become a straight apostrophe.
    - Leading/trailing whitespace is trimmed.
    """
    if not text:
        return ""
    t = text.replace("\r", " ").replace("\n", " ")
    t = _SMART_QUOTES.sub("'", t)
    t = _WHITESPACE.sub(" ", t)
    return t.strip()


def canonicalize_name(segment: str) -> str:
    """
    Lookup key for one ingredient segment.
    'Vitamin C (Ascorbic Acid).' -> 'vitamin c'
    """
    if not segment:
        return ""
    t = segment
    while True:
        stripped = _ENCLOSED.sub(" ", t)
        if stripped == t:
            break
        t = stripped
    t = _NAME_PUNCTUATION.sub("", t)
    t = _WHITESPACE.sub(" ", t)
    return t.strip().lower()


def suggest_corrections(name: str) -> List[str]:
    """Known OCR misread fixes for a canonical name; empty when none apply."""
    corrected = OCR_CORRECTIONS.get((name or "").strip().lower())
    if corrected:
        logger.debug("OCR_CORRECTION candidate raw=%s -> %s", name, corrected)
        return [corrected]
    return []
