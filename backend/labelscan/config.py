"""
Centralized configuration. Values are read lazily from the environment
(app.py loads .env via python-dotenv before anything reads them).
"""
import os
import logging

logger = logging.getLogger(__name__)

# Normalized text shorter than this cannot hold an ingredient list.
MIN_TEXT_LENGTH = 10

# Segments at or above this length are treated as OCR run-on noise.
MAX_SEGMENT_LENGTH = 50

# Canonical names shorter than this are dropped.
MIN_CANONICAL_LENGTH = 2


# --- Logging ---
def get_log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"


# --- OCR ---
def get_ocr_lang() -> str:
    return os.environ.get("OCR_LANG", "en").strip() or "en"


def get_ocr_use_angle_cls() -> bool:
    return os.environ.get("OCR_USE_ANGLE_CLS", "true").lower() in ("1", "true", "yes")


# --- Startup logging ---
def log_config() -> None:
    logger.info(
        "CONFIG: log_level=%s ocr_lang=%s ocr_use_angle_cls=%s min_text_length=%d "
        "max_segment_length=%d",
        get_log_level(), get_ocr_lang(), get_ocr_use_angle_cls(),
        MIN_TEXT_LENGTH, MAX_SEGMENT_LENGTH,
    )
