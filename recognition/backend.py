"""
OCR engine interface and local implementations.

An engine is a scoped resource: one instance is created per recognition
request and closed as soon as the attempt finishes, whether it succeeded or
not. Use engine_session() rather than calling a factory directly.
"""

from __future__ import annotations

import io
import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Protocol

from PIL import Image

import config
from errors import RecognitionError
from .languages import Language

logger = logging.getLogger(__name__)


class OcrEngine(Protocol):
    """Interface for OCR engine backends."""

    def recognize(self, png: bytes) -> str:
        """Return the plain text found in a PNG-encoded image."""

    def close(self) -> None:
        """Release models, workers and any other engine resources."""


EngineFactory = Callable[[Language], OcrEngine]


class EasyOcrEngine:
    """Engine backed by an easyocr.Reader loaded for one language."""

    def __init__(self, language: Language, gpu: bool | None = None) -> None:
        import easyocr

        self.language = language
        self.gpu = config.EASYOCR_GPU if gpu is None else gpu
        self._reader = easyocr.Reader(list(language.easyocr_langs), gpu=self.gpu, verbose=False)

    def recognize(self, png: bytes) -> str:
        if self._reader is None:
            raise RuntimeError("EasyOCR engine has already been closed")
        lines = self._reader.readtext(png, detail=0, paragraph=True)
        return "\n".join(line.strip() for line in lines if line.strip())

    def close(self) -> None:
        self._reader = None
        if self.gpu:
            import torch

            if torch.cuda.is_available():
                torch.cuda.empty_cache()


class TesseractEngine:
    """Engine backed by the tesseract binary through pytesseract."""

    def __init__(self, language: Language, tesseract_config: str | None = None) -> None:
        import pytesseract

        self.language = language
        self.tesseract_config = (
            config.TESSERACT_CONFIG if tesseract_config is None else tesseract_config
        )
        self._pytesseract = pytesseract

    def recognize(self, png: bytes) -> str:
        if self._pytesseract is None:
            raise RuntimeError("Tesseract engine has already been closed")
        with Image.open(io.BytesIO(png)) as image:
            text = self._pytesseract.image_to_string(
                image,
                lang=self.language.tesseract_lang,
                config=self.tesseract_config,
            )
        return text.strip()

    def close(self) -> None:
        self._pytesseract = None


_BACKENDS: dict[str, EngineFactory] = {
    "easyocr": EasyOcrEngine,
    "tesseract": TesseractEngine,
}

BACKEND_NAMES: tuple[str, ...] = tuple(_BACKENDS)


def get_engine_factory(backend_name: str | None = None) -> EngineFactory:
    """Return the engine factory for a backend name.

    Args:
        backend_name: Backend name (e.g. ``"easyocr"``). Defaults to
            ``config.OCR_BACKEND`` if None.

    Raises:
        ValueError: If the backend name is unknown.
    """
    name = backend_name if backend_name is not None else config.OCR_BACKEND
    factory = _BACKENDS.get(name)
    if factory is None:
        raise ValueError(f"Unknown OCR backend: {name!r}")
    return factory


@contextmanager
def engine_session(
    language: Language,
    factory: EngineFactory | None = None,
) -> Iterator[OcrEngine]:
    """Acquire one engine for `language` and always close it afterwards.

    Raises:
        RecognitionError: If the engine cannot be created.
    """
    if factory is None:
        factory = get_engine_factory()

    try:
        engine = factory(language)
    except Exception as exc:
        raise RecognitionError(f"Failed to start OCR engine for {language.code}: {exc}") from exc
    logger.debug("Acquired OCR engine for %s", language.code)

    try:
        yield engine
    finally:
        try:
            engine.close()
        except Exception:
            logger.exception("Failed to release OCR engine for %s", language.code)
        else:
            logger.debug("Released OCR engine for %s", language.code)
