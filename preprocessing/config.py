"""
Configuration and result types for pixel preprocessing.

Every preprocessing run is parameterized through PreprocessConfig so the
transform applied to an upload is fully described by one immutable value.
"""

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from config import (
    BINARIZE_THRESHOLD,
    CHANNEL_MAX,
    CHANNEL_MIN,
    CONTRAST_FACTOR,
    CONTRAST_MIDPOINT,
)


@dataclass(frozen=True)
class PreprocessConfig:
    """Configuration for the preprocessing transform.

    Exactly one transform is applied per run: binarization when `binarize`
    is set, otherwise a contrast stretch.

    Attributes:
        binarize: Apply the hard threshold instead of the contrast stretch.
        threshold: Luminance cutoff for binarization. A pixel becomes white
                   only if its luminance is strictly greater.
        contrast: Contrast stretch factor (1.0 = no change).
        midpoint: Luminance value left unchanged by the contrast stretch.
    """

    binarize: bool = False
    threshold: float = BINARIZE_THRESHOLD
    contrast: float = CONTRAST_FACTOR
    midpoint: float = CONTRAST_MIDPOINT

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ValueError: If any parameter is invalid.
        """
        if not CHANNEL_MIN <= self.threshold <= CHANNEL_MAX:
            raise ValueError(
                f"threshold must be within [{CHANNEL_MIN}, {CHANNEL_MAX}], got {self.threshold}"
            )
        if self.contrast <= 0:
            raise ValueError(f"contrast must be positive, got {self.contrast}")
        if not CHANNEL_MIN <= self.midpoint <= CHANNEL_MAX:
            raise ValueError(
                f"midpoint must be within [{CHANNEL_MIN}, {CHANNEL_MAX}], got {self.midpoint}"
            )

    @property
    def transform_name(self) -> str:
        return "binarize" if self.binarize else "contrast"


@dataclass
class PreprocessResult:
    """Result of the preprocessing pipeline.

    Attributes:
        original: Input RGBA buffer (untouched copy).
        processed: Transformed RGBA buffer with R == G == B for every pixel.
        config: The configuration used.
        metadata: Metadata reported by the applied step.
    """

    original: np.ndarray
    processed: np.ndarray
    config: PreprocessConfig
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def dimensions(self) -> tuple[int, int]:
        """(width, height) of the processed image."""
        h, w = self.processed.shape[:2]
        return w, h


@dataclass(frozen=True)
class ProcessedImage:
    """A preprocessed upload, ready to hand to the OCR engine.

    Attributes:
        width: Same as the source width.
        height: Same as the source height.
        pixels: Transformed RGBA uint8 array of shape (height, width, 4).
        png: PNG encoding of `pixels`.
        transform: Name of the single transform applied.
    """

    width: int
    height: int
    pixels: np.ndarray
    png: bytes
    transform: str
