"""
Recognition orchestration: Loader → Preprocessor → OCR engine.

This is the boundary where every pipeline failure is caught, logged with
its detail and turned into a short message the user can see.
"""

from __future__ import annotations

import logging

from starlette.concurrency import run_in_threadpool

from config import GENERIC_ERROR_MESSAGE, UNREADABLE_FILE_MESSAGE
from errors import OcrAppError, RecognitionError, UnreadableFileError
from image_loader import SourceImage, load_image
from preprocessing import ProcessedImage, preprocess_image_async
from .backend import EngineFactory, engine_session
from .languages import Language
from .types import RecognitionOptions, RecognitionResult

logger = logging.getLogger(__name__)


def recognize(
    image: ProcessedImage,
    language: Language,
    factory: EngineFactory | None = None,
) -> str:
    """Run OCR on a preprocessed image with a freshly acquired engine.

    The engine is closed before this function returns or raises.

    Raises:
        RecognitionError: If the engine cannot start or fails to recognize.
    """
    with engine_session(language, factory) as engine:
        try:
            text = engine.recognize(image.png)
        except Exception as exc:
            raise RecognitionError(f"{type(exc).__name__}: {exc}") from exc

    logger.info(
        "Recognized %d characters (%s, %s, %dx%d)",
        len(text), language.code, image.transform, image.width, image.height,
    )
    return text


async def recognize_source(
    source: SourceImage,
    options: RecognitionOptions,
    factory: EngineFactory | None = None,
) -> str:
    """Preprocess a decoded upload and recognize it.

    Raises:
        CanvasUnavailableError: If preprocessing cannot produce a PNG.
        RecognitionError: If the engine fails.
    """
    processed = await preprocess_image_async(source, options.binarize)
    return await run_in_threadpool(recognize, processed, options.language, factory)


async def extract_text(
    data: bytes,
    options: RecognitionOptions,
    factory: EngineFactory | None = None,
    filename: str | None = None,
) -> RecognitionResult:
    """Run the whole pipeline for one upload and never raise pipeline errors.

    Returns:
        RecognitionResult with the extracted text, or with a user-facing
        error message. Unreadable uploads get their own message; every other
        failure gets the generic one. The detected MIME type is carried
        whenever the upload decoded.
    """
    source: SourceImage | None = None
    try:
        source = await load_image(data, filename)
        text = await recognize_source(source, options, factory)
    except UnreadableFileError as exc:
        logger.warning("Rejected upload %s: %s", filename or "<upload>", exc)
        return RecognitionResult.failure(UNREADABLE_FILE_MESSAGE, type(exc).__name__)
    except OcrAppError as exc:
        logger.error("Text recognition failed for %s: %s", filename or "<upload>", exc, exc_info=True)
        mime_type = source.mime_type if source is not None else None
        return RecognitionResult.failure(GENERIC_ERROR_MESSAGE, type(exc).__name__, mime_type)

    return RecognitionResult.success(text, source.mime_type)
