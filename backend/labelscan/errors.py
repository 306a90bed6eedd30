"""
Typed failures for a scan. Fatal kinds are raised; non-fatal kinds are
collected on ScanResult.notices and never interrupt a run.
"""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    EMPTY_OR_TOO_SHORT_TEXT = "EMPTY_OR_TOO_SHORT_TEXT"
    NO_INGREDIENT_MARKER_FOUND = "NO_INGREDIENT_MARKER_FOUND"
    NO_VALID_INGREDIENTS_PARSED = "NO_VALID_INGREDIENTS_PARSED"
    UNKNOWN_INGREDIENT = "UNKNOWN_INGREDIENT"
    LOW_CONFIDENCE_LIST = "LOW_CONFIDENCE_LIST"
    RECOGNITION_UNAVAILABLE = "RECOGNITION_UNAVAILABLE"

    @property
    def fatal(self) -> bool:
        return self in _FATAL_KINDS


_FATAL_KINDS = frozenset({
    ErrorKind.EMPTY_OR_TOO_SHORT_TEXT,
    ErrorKind.NO_VALID_INGREDIENTS_PARSED,
    ErrorKind.RECOGNITION_UNAVAILABLE,
})


class ScanError(Exception):
    """
    Base failure surfaced to the caller. Concrete subclasses set `kind`;
    the base carries none.
    """

    kind: Optional[ErrorKind] = None

    def __init__(self, message: str = ""):
        default = self.kind.value if self.kind is not None else type(self).__name__
        super().__init__(message or default)
        self.message = message or default

    def to_dict(self) -> dict:
        return {"kind": self.kind.value if self.kind is not None else None, "message": self.message}


class EmptyOrTooShortText(ScanError):
    kind = ErrorKind.EMPTY_OR_TOO_SHORT_TEXT


class NoValidIngredientsParsed(ScanError):
    kind = ErrorKind.NO_VALID_INGREDIENTS_PARSED


class RecognitionUnavailable(ScanError):
    """The recognition engine could not be acquired or failed to read the image."""

    kind = ErrorKind.RECOGNITION_UNAVAILABLE
