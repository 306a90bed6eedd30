"""
Label safety scanner core: recognized label text -> per-ingredient safety assessment.
"""
from labelscan.errors import (
    ErrorKind,
    ScanError,
    EmptyOrTooShortText,
    NoValidIngredientsParsed,
    RecognitionUnavailable,
)
from labelscan.models.scan_result import (
    SafetyRating,
    SafetyRecord,
    ProcessedIngredient,
    ScanResult,
)
from labelscan.pipeline import run_scan

__all__ = [
    "ErrorKind",
    "ScanError",
    "EmptyOrTooShortText",
    "NoValidIngredientsParsed",
    "RecognitionUnavailable",
    "SafetyRating",
    "SafetyRecord",
    "ProcessedIngredient",
    "ScanResult",
    "run_scan",
]
