"""
Structured scan output. Single format for the text and image scan paths.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from labelscan.errors import ErrorKind


class SafetyRating(str, Enum):
    SAFE = "safe"
    CAUTION = "caution"
    AVOID = "avoid"


@dataclass(frozen=True)
class SafetyRecord:
    rating: SafetyRating
    explanation: str
    sources: tuple[str, ...] = ()


@dataclass(frozen=True)
class OverallRating:
    rating: SafetyRating
    score: int


@dataclass(frozen=True)
class ProcessedIngredient:
    display_name: str
    canonical_name: str
    rating: SafetyRating
    confidence: int
    explanation: str
    position: int
    allergens: tuple[str, ...] = ()
    concerns: tuple[str, ...] = ()
    sources: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.display_name,
            "rating": self.rating.value,
            "explanation": self.explanation,
            "confidence": self.confidence,
            "position": self.position,
            "sources": list(self.sources),
            "allergens": list(self.allergens),
            "concerns": list(self.concerns),
        }


@dataclass(frozen=True)
class ScanResult:
    ingredients: tuple[ProcessedIngredient, ...]
    overall_confidence: int
    raw_text: str
    overall_rating: OverallRating
    notices: tuple[ErrorKind, ...] = field(default_factory=tuple)

    @property
    def allergens(self) -> list[str]:
        """Union of per-ingredient allergens, first-seen order."""
        seen: list[str] = []
        for ing in self.ingredients:
            for a in ing.allergens:
                if a not in seen:
                    seen.append(a)
        return seen

    def to_dict(self) -> dict[str, Any]:
        return {
            "ingredients": [ing.to_dict() for ing in self.ingredients],
            "confidence": self.overall_confidence,
            "rawText": self.raw_text,
            "overallRating": self.overall_rating.rating.value,
            "overallScore": self.overall_rating.score,
            "allergens": self.allergens,
            "notices": [n.value for n in self.notices],
        }
