"""Runs one recognition request against the app's engine factory."""

import logging

from fastapi import FastAPI

from recognition import RecognitionOptions, RecognitionResult, extract_text
from .state import RecognitionState

logger = logging.getLogger(__name__)


async def run_recognition(
    app: FastAPI,
    data: bytes,
    options: RecognitionOptions,
    filename: str | None = None,
) -> tuple[RecognitionState, RecognitionResult]:
    """Run the pipeline while holding the app-wide recognition lock.

    Only one recognition is outstanding at a time; later requests wait for
    the lock.

    Returns:
        The final RecognitionState and the RecognitionResult behind it.
    """
    async with app.state.recognition_lock:
        state = RecognitionState().begin()
        logger.info(
            "Recognizing %s (language=%s, binarize=%s)",
            filename or "<upload>", options.language.code, options.binarize,
        )
        result = await extract_text(
            data, options, factory=app.state.engine_factory, filename=filename,
        )
        state = state.finish(result)
    return state, result
