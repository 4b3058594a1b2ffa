"""PNG re-encoding of processed RGBA buffers."""

import io

import numpy as np
from PIL import Image

from errors import CanvasUnavailableError
from .normalization import validate_rgba


def encode_png(img: np.ndarray) -> bytes:
    """Encode an RGBA uint8 buffer as PNG bytes.

    Raises:
        CanvasUnavailableError: If the buffer is not an RGBA raster or
            Pillow cannot write it.
    """
    try:
        validate_rgba(img)
    except (TypeError, ValueError) as exc:
        raise CanvasUnavailableError(str(exc)) from exc

    buffer = io.BytesIO()
    try:
        Image.fromarray(np.ascontiguousarray(img)).save(buffer, format="PNG")
    except (OSError, ValueError) as exc:
        raise CanvasUnavailableError(f"Failed to encode PNG: {exc}") from exc
    return buffer.getvalue()
