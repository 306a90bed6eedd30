"""
Label Safety Scanner FastAPI application.

Endpoints:
    GET  /            Health check
    POST /scan        Image upload -> OCR -> ingredient safety pipeline
    POST /scan/text   Already-recognized text -> ingredient safety pipeline
"""
from fastapi import FastAPI, UploadFile, File, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import List, Optional
import logging
from dotenv import load_dotenv
from pathlib import Path

# Load env vars
load_dotenv(Path(__file__).parent / ".env")

from labelscan.config import get_log_level, log_config
from labelscan.errors import RecognitionUnavailable, ScanError
from labelscan.pipeline import run_scan
from ocr_engine import OCREngine

# Logger
logging.basicConfig(level=get_log_level())
logger = logging.getLogger(__name__)

# Initialize App
app = FastAPI(title="Label Safety Scanner API")
log_config()

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ocr_engine = OCREngine()


@app.on_event("startup")
def _acquire_ocr():
    try:
        ocr_engine.acquire()
    except RecognitionUnavailable as exc:
        logger.warning("OCR unavailable at startup (text scans still served): %s", exc)


@app.on_event("shutdown")
def _release_ocr():
    ocr_engine.release()


# --- Request/Response Models ---
class TextScanRequest(BaseModel):
    text: str
    confidence: float = Field(..., ge=0, le=100)


class IngredientOut(BaseModel):
    name: str
    rating: str
    explanation: str
    confidence: int
    position: int
    sources: List[str]
    allergens: List[str]
    concerns: List[str]


class ScanResponse(BaseModel):
    ingredients: List[IngredientOut]
    confidence: int
    rawText: str
    overallRating: str
    overallScore: int
    allergens: List[str]
    notices: List[str]


class ScanErrorResponse(BaseModel):
    kind: Optional[str] = None
    message: Optional[str] = None


# --- Helper Functions ---

def _scan_or_422(text: str, confidence: float) -> dict:
    try:
        return run_scan(text, confidence).to_dict()
    except ScanError as e:
        logger.info("Scan rejected kind=%s message=%s", e.to_dict()["kind"], e.message)
        raise HTTPException(status_code=422, detail=e.to_dict())


# --- Endpoints ---

@app.get("/")
def health_check():
    return {"status": "ok", "service": "Label Safety Scanner", "ocr_ready": ocr_engine.ready}


@app.post("/scan/text", response_model=ScanResponse, responses={422: {"model": ScanErrorResponse}})
def scan_text(request: TextScanRequest):
    """Recognized text + recognition confidence -> per-ingredient assessment."""
    logger.info("Text scan request len=%d confidence=%s", len(request.text), request.confidence)
    return _scan_or_422(request.text, request.confidence)


@app.post("/scan", response_model=ScanResponse, responses={422: {"model": ScanErrorResponse}})
async def scan_image(file: UploadFile = File(...)):
    """OCR -> pipeline. 503 when the engine was not acquired at startup or OCR fails."""
    logger.info("Scan request filename=%s", file.filename)
    image_bytes = await file.read()
    if not ocr_engine.ready:
        logger.warning("Scan refused: OCR engine not acquired")
        raise HTTPException(status_code=503, detail=RecognitionUnavailable("OCR engine not available").to_dict())
    try:
        recognized = await run_in_threadpool(ocr_engine.extract_text, image_bytes)
    except RecognitionUnavailable as e:
        raise HTTPException(status_code=503, detail=e.to_dict())
    logger.info("OCR extracted %d chars", len(recognized.text))
    return _scan_or_422(recognized.text, recognized.confidence)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
