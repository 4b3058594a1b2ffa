"""
Pixel preprocessing applied to uploads before OCR.

This module provides pure, deterministic functions that turn an RGBA buffer
into a grayscale-derived buffer of the same size. All functions follow the
pattern: input -> output with no mutation of the original arrays.

Key components:
- config: PreprocessConfig, PreprocessResult and ProcessedImage
- normalization: luminance and channel helpers
- steps: BinarizeStep and ContrastStretchStep behind the PreprocessStep interface
- pipeline: run_pipeline() for buffers, preprocess_image() for uploads
- encoding: PNG re-encoding
"""

from .config import PreprocessConfig, PreprocessResult, ProcessedImage
from .encoding import encode_png
from .normalization import apply_gray, luminance, to_channel, validate_rgba
from .pipeline import build_step, preprocess_image, preprocess_image_async, run_pipeline
from .steps import BinarizeStep, ContrastStretchStep, PreprocessStep

__all__ = [
    # Config and results
    "PreprocessConfig",
    "PreprocessResult",
    "ProcessedImage",
    # Function API
    "run_pipeline",
    "build_step",
    "preprocess_image",
    "preprocess_image_async",
    "encode_png",
    "luminance",
    "apply_gray",
    "to_channel",
    "validate_rgba",
    # Class-based API
    "PreprocessStep",
    "BinarizeStep",
    "ContrastStretchStep",
]
