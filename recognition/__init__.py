"""
Text recognition through an external OCR engine.

Key components:
- languages: the fixed set of selectable languages
- types: RecognitionOptions and RecognitionResult
- backend: OcrEngine interface, EasyOCR and Tesseract engines, engine_session()
- service: extract_text(), the full upload → text pipeline
"""

from .backend import (
    BACKEND_NAMES,
    EasyOcrEngine,
    EngineFactory,
    OcrEngine,
    TesseractEngine,
    engine_session,
    get_engine_factory,
)
from .languages import LANGUAGE_CODES, SUPPORTED_LANGUAGES, Language, get_language
from .service import extract_text, recognize, recognize_source
from .types import RecognitionOptions, RecognitionResult

__all__ = [
    "Language",
    "SUPPORTED_LANGUAGES",
    "LANGUAGE_CODES",
    "get_language",
    "RecognitionOptions",
    "RecognitionResult",
    "OcrEngine",
    "EngineFactory",
    "EasyOcrEngine",
    "TesseractEngine",
    "BACKEND_NAMES",
    "engine_session",
    "get_engine_factory",
    "recognize",
    "recognize_source",
    "extract_text",
]
