"""
Preprocessing pipeline entry points.

run_pipeline() works on raw RGBA buffers; preprocess_image() works on a
decoded SourceImage and also re-encodes the result as PNG, which is the
form handed to the OCR engine.

Guarantees:
- Exactly one transform per run: binarization or contrast stretch
- Output dimensions always equal input dimensions
- The input buffer is never modified
"""

import logging

import numpy as np
from starlette.concurrency import run_in_threadpool

from image_loader import SourceImage
from errors import CanvasUnavailableError
from .config import PreprocessConfig, PreprocessResult, ProcessedImage
from .encoding import encode_png
from .normalization import validate_rgba
from .steps import BinarizeStep, ContrastStretchStep, PreprocessStep

logger = logging.getLogger(__name__)


def build_step(config: PreprocessConfig) -> PreprocessStep:
    """Build the one transform step a PreprocessConfig selects."""
    if config.binarize:
        return BinarizeStep(threshold=config.threshold)
    return ContrastStretchStep(factor=config.contrast, midpoint=config.midpoint)


def run_pipeline(
    img: np.ndarray,
    config: PreprocessConfig | None = None,
) -> PreprocessResult:
    """Apply the configured transform to an RGBA buffer.

    Args:
        img: RGBA uint8 array of shape (H, W, 4).
        config: Preprocessing configuration. If None, uses the contrast stretch.

    Returns:
        PreprocessResult with the untouched original and the processed buffer.

    Raises:
        ValueError: If the configuration or the buffer is invalid.
        TypeError: If img is not a numpy array.

    Examples:
        >>> img = np.full((2, 3, 4), 255, dtype=np.uint8)
        >>> run_pipeline(img, PreprocessConfig(binarize=True)).dimensions
        (3, 2)
    """
    if config is None:
        config = PreprocessConfig()

    config.validate()
    validate_rgba(img)

    original = img.copy()
    step = build_step(config)
    processed = step.apply(original)

    return PreprocessResult(
        original=original,
        processed=processed,
        config=config,
        metadata=step.get_metadata(),
    )


def preprocess_image(source: SourceImage, binarize: bool) -> ProcessedImage:
    """Transform a decoded upload and re-encode it as PNG.

    Raises:
        CanvasUnavailableError: If the source buffer is not a usable RGBA
            raster or the PNG cannot be written.
    """
    config = PreprocessConfig(binarize=binarize)
    try:
        result = run_pipeline(source.pixels, config)
    except (TypeError, ValueError) as exc:
        raise CanvasUnavailableError(f"Cannot preprocess image: {exc}") from exc

    png = encode_png(result.processed)
    width, height = result.dimensions
    logger.debug(
        "Applied %s to %dx%d image (%s)",
        config.transform_name, width, height, result.metadata,
    )

    return ProcessedImage(
        width=width,
        height=height,
        pixels=result.processed,
        png=png,
        transform=config.transform_name,
    )


async def preprocess_image_async(source: SourceImage, binarize: bool) -> ProcessedImage:
    """Run preprocess_image in the threadpool."""
    return await run_in_threadpool(preprocess_image, source, binarize)
