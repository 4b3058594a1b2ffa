"""
Per-pixel helpers shared by the preprocessing steps.

All functions are pure: they take an input and return a new output without
mutating the original array.
"""

import numpy as np

from config import CHANNEL_MAX, CHANNEL_MIN, LUMINANCE_SCALE, LUMINANCE_WEIGHTS

RGBA_CHANNELS = 4


def validate_rgba(img: np.ndarray) -> None:
    """Check that an array is a non-empty RGBA uint8 buffer.

    Raises:
        TypeError: If img is not a numpy array.
        ValueError: If img is not (H, W, 4) uint8 or has no pixels.
    """
    if not isinstance(img, np.ndarray):
        raise TypeError(f"Expected numpy.ndarray, got {type(img).__name__}")

    if img.ndim != 3 or img.shape[2] != RGBA_CHANNELS:
        raise ValueError(
            f"Expected an RGBA buffer of shape (H, W, 4), got shape {img.shape}"
        )

    if img.size == 0:
        raise ValueError("Image array is empty")

    if img.dtype != np.uint8:
        raise ValueError(f"Expected uint8 channels, got {img.dtype}")


def luminance(img: np.ndarray) -> np.ndarray:
    """Compute BT.601 luminance for every pixel of an RGBA buffer.

    The weighted sum is formed in integers and divided once, so pixels with
    R == G == B map back to exactly that value.

    Args:
        img: RGBA uint8 array of shape (H, W, 4).

    Returns:
        float64 array of shape (H, W) with values in [0, 255].

    Examples:
        >>> px = np.array([[[100, 100, 100, 255]]], dtype=np.uint8)
        >>> float(luminance(px)[0, 0])
        100.0
    """
    validate_rgba(img)
    weights = np.asarray(LUMINANCE_WEIGHTS, dtype=np.int64)
    weighted = img[:, :, :3].astype(np.int64) @ weights
    return weighted / LUMINANCE_SCALE


def to_channel(values: np.ndarray) -> np.ndarray:
    """Round to nearest (ties to even) and clamp into the uint8 channel range."""
    return np.clip(np.rint(values), CHANNEL_MIN, CHANNEL_MAX).astype(np.uint8)


def apply_gray(img: np.ndarray, values: np.ndarray) -> np.ndarray:
    """Write one value into R, G and B of every pixel, keeping alpha.

    Args:
        img: Source RGBA uint8 array of shape (H, W, 4). Not modified.
        values: uint8 array of shape (H, W).

    Returns:
        New RGBA array with R == G == B == values and the source alpha.
    """
    validate_rgba(img)
    if values.shape != img.shape[:2]:
        raise ValueError(
            f"Value map shape {values.shape} does not match image {img.shape[:2]}"
        )
    result = img.copy()
    result[:, :, 0] = values
    result[:, :, 1] = values
    result[:, :, 2] = values
    return result
