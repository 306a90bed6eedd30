from contextlib import contextmanager
from dataclasses import dataclass
from io import BytesIO
from typing import Any, Callable, Iterator, Optional
import logging
import threading

import numpy as np
from PIL import Image

from labelscan.config import get_ocr_lang, get_ocr_use_angle_cls
from labelscan.errors import RecognitionUnavailable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecognizedText:
    text: str
    confidence: float  # mean line confidence in [0, 1]


def _paddle_backend() -> Any:
    # Imported here so the pipeline and API can load without the model weights.
    from paddleocr import PaddleOCR
    return PaddleOCR(use_angle_cls=get_ocr_use_angle_cls(), lang=get_ocr_lang(), show_log=False)


class OCREngine:
    """
    Recognition engine handle with an explicit lifecycle.
    acquire() returns a ready engine or raises RecognitionUnavailable;
    release() frees the model and is safe to call more than once.
    One lock guards the backend: acquire builds it at most once and
    recognition calls never overlap (Paddle predictors are not thread-safe).
    Prefer `with OCREngine.session() as engine:` so release always runs.
    """

    def __init__(self, backend_factory: Optional[Callable[[], Any]] = None):
        self._factory = backend_factory or _paddle_backend
        self._backend: Any = None
        self._lock = threading.Lock()

    @property
    def ready(self) -> bool:
        return self._backend is not None

    def acquire(self) -> "OCREngine":
        with self._lock:
            if self._backend is not None:
                return self
            logger.info("OCR_ACQUIRE lang=%s", get_ocr_lang())
            try:
                self._backend = self._factory()
            except Exception as e:
                logger.error("OCR_ACQUIRE failed: %s", e)
                raise RecognitionUnavailable(f"OCR engine could not be initialized: {e}") from e
        return self

    def release(self) -> None:
        with self._lock:
            if self._backend is not None:
                logger.info("OCR_RELEASE")
            self._backend = None

    @classmethod
    @contextmanager
    def session(cls, backend_factory: Optional[Callable[[], Any]] = None) -> Iterator["OCREngine"]:
        engine = cls(backend_factory)
        engine.acquire()
        try:
            yield engine
        finally:
            engine.release()

    def extract_text(self, image_bytes: bytes) -> RecognizedText:
        """
        Recognize text in an encoded image.
        Result structure: [[[box], ("text", confidence)], ...] per page.
        """
        try:
            img = Image.open(BytesIO(image_bytes)).convert("RGB")
            img_np = np.array(img)
        except Exception as e:
            logger.error("OCR failed: %s", e)
            raise RecognitionUnavailable(f"OCR failed: {e}") from e
        with self._lock:
            if self._backend is None:
                raise RecognitionUnavailable("OCR engine used before acquire()")
            try:
                result = self._backend.ocr(img_np, cls=True)
            except Exception as e:
                logger.error("OCR failed: %s", e)
                raise RecognitionUnavailable(f"OCR failed: {e}") from e

        lines = []
        confidences = []
        if result and result[0]:
            for line in result[0]:
                text, conf = line[1][0], line[1][1]
                lines.append(text)
                confidences.append(float(conf))
        confidence = sum(confidences) / len(confidences) if confidences else 0.0
        confidence = min(1.0, max(0.0, confidence))
        logger.info("OCR extracted lines=%d confidence=%.3f", len(lines), confidence)
        return RecognizedText(text="\n".join(lines), confidence=confidence)
