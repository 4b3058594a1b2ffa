"""
Preprocessing step classes with a common interface.

Each step is a frozen dataclass that implements the PreprocessStep interface.
Steps are pure: they take an RGBA buffer and return a new buffer without
mutating the original array. Channels R, G and B are read before any write,
and alpha is never touched.

Usage:
    from preprocessing.steps import BinarizeStep

    step = BinarizeStep(threshold=128)
    binary = step.apply(rgba)
    step.get_metadata()  # {"white_ratio": ...}
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from config import BINARIZE_THRESHOLD, CHANNEL_MAX, CHANNEL_MIN, CONTRAST_FACTOR, CONTRAST_MIDPOINT
from .normalization import apply_gray, luminance, to_channel


class PreprocessStep(ABC):
    """Base class for preprocessing steps.

    Steps should be pure functions of their input and may report metadata
    describing what they did.
    """

    @abstractmethod
    def apply(self, img: np.ndarray) -> np.ndarray:
        """Apply this step to an RGBA buffer and return a new buffer."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for logging and debugging."""

    def get_metadata(self) -> dict[str, Any]:
        """Return metadata about the last application. Empty by default."""
        return {}


@dataclass(frozen=True)
class BinarizeStep(PreprocessStep):
    """Hard threshold on luminance.

    Pixels with luminance strictly greater than `threshold` become white
    (255), all others black (0). The cutoff is fixed; there is no adaptive
    thresholding.
    """

    threshold: float = BINARIZE_THRESHOLD
    _white_ratio: float | None = field(default=None, init=False, repr=False)

    def apply(self, img: np.ndarray) -> np.ndarray:
        gray = luminance(img)
        mask = gray > self.threshold
        values = np.where(mask, CHANNEL_MAX, CHANNEL_MIN).astype(np.uint8)
        object.__setattr__(self, "_white_ratio", float(mask.mean()))
        return apply_gray(img, values)

    @property
    def name(self) -> str:
        return f"binarize(threshold={self.threshold:g})"

    def get_metadata(self) -> dict[str, Any]:
        return {"white_ratio": self._white_ratio}


@dataclass(frozen=True)
class ContrastStretchStep(PreprocessStep):
    """Linear contrast stretch of luminance around a fixed midpoint.

    output = gray * factor + midpoint * (1 - factor), rounded and clamped
    to [0, 255]. With the defaults this is gray * 1.5 - 64.
    """

    factor: float = CONTRAST_FACTOR
    midpoint: float = CONTRAST_MIDPOINT
    _clipped_pixels: int = field(default=0, init=False, repr=False)

    def apply(self, img: np.ndarray) -> np.ndarray:
        gray = luminance(img)
        stretched = gray * self.factor + self.midpoint * (1 - self.factor)
        clipped = int(np.count_nonzero((stretched < CHANNEL_MIN) | (stretched > CHANNEL_MAX)))
        object.__setattr__(self, "_clipped_pixels", clipped)
        return apply_gray(img, to_channel(stretched))

    @property
    def name(self) -> str:
        return f"contrast(factor={self.factor:g})"

    def get_metadata(self) -> dict[str, Any]:
        return {"clipped_pixels": self._clipped_pixels}

