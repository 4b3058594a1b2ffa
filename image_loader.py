"""
Image loading for uploaded files.

Turns raw uploaded bytes into a SourceImage: the original bytes plus a
decoded RGBA pixel buffer. No size or type validation is performed beyond
what Pillow itself enforces.
"""

from __future__ import annotations

import base64
import io
import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError
from starlette.concurrency import run_in_threadpool

from errors import CanvasUnavailableError, ImageDecodeError, UnreadableFileError

logger = logging.getLogger(__name__)

RGBA_CHANNELS = 4

# Single-channel modes whose samples do not fit in 8 bits
_WIDE_GRAY_MODES = ("I;16", "I;16L", "I;16B", "I;16N", "I", "F")
_WIDE_SAMPLE_MAX = 65535


def _narrow_gray(image: Image.Image) -> Image.Image:
    """Scale 16-bit, 32-bit and float grayscale down to 8-bit "L".

    Pillow's RGBA conversion clips these samples at 255, which turns a
    normal 16-bit scan into solid white. Integer samples keep their top
    8 bits of a 16-bit range; float samples in [0, 1] are scaled by 255.
    """
    if image.mode not in _WIDE_GRAY_MODES:
        return image

    samples = np.asarray(image)
    if image.mode == "F" and samples.size and float(samples.max()) <= 1.0:
        narrowed = np.rint(np.clip(samples, 0.0, 1.0) * 255)
    else:
        narrowed = np.clip(samples, 0, _WIDE_SAMPLE_MAX).astype(np.uint32) >> 8
    return Image.fromarray(narrowed.astype(np.uint8))


@dataclass(frozen=True)
class SourceImage:
    """An uploaded image and its decoded pixels.

    Attributes:
        data: Raw bytes exactly as uploaded.
        width: Decoded width in pixels.
        height: Decoded height in pixels.
        pixels: Read-only RGBA uint8 array of shape (height, width, 4).
        format: Pillow format name (e.g. "PNG", "JPEG").
        mime_type: MIME type matching the format, used for previews.
        filename: Name of the uploaded file, if known.
    """

    data: bytes
    width: int
    height: int
    pixels: np.ndarray
    format: str
    mime_type: str
    filename: str | None = None

    @property
    def buffer_length(self) -> int:
        """Number of channel values in the pixel buffer (width * height * 4)."""
        return int(self.pixels.size)


def to_data_uri(data: bytes, mime_type: str) -> str:
    """Encode bytes as a base64 data URI for the preview pane."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def read_image(data: bytes, filename: str | None = None) -> SourceImage:
    """Identify and decode an uploaded image into an RGBA buffer.

    Args:
        data: Raw file bytes.
        filename: Optional original filename, kept for logging.

    Returns:
        SourceImage with a read-only RGBA pixel buffer.

    Raises:
        TypeError: If data is not bytes.
        UnreadableFileError: If the bytes are empty or not a known image format.
        ImageDecodeError: If the header is valid but the pixel data is not.
        CanvasUnavailableError: If the raster has no area or cannot be allocated.
    """
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError(f"Expected bytes, got {type(data).__name__}")

    if not data:
        raise UnreadableFileError("Uploaded file is empty")

    try:
        image = Image.open(io.BytesIO(data))
    except Image.DecompressionBombError as exc:
        raise CanvasUnavailableError(f"Image is too large to rasterise: {exc}") from exc
    except (UnidentifiedImageError, OSError) as exc:
        raise UnreadableFileError(f"Not a recognised image: {filename or '<upload>'}") from exc

    width, height = image.size
    if width <= 0 or height <= 0:
        raise CanvasUnavailableError(f"Image has no pixels ({width}x{height})")

    try:
        rgba = _narrow_gray(image).convert("RGBA")
    except MemoryError as exc:
        raise CanvasUnavailableError(f"Cannot allocate a {width}x{height} RGBA buffer") from exc
    except (OSError, SyntaxError, ValueError, EOFError) as exc:
        raise ImageDecodeError(f"Failed to decode {image.format} image: {exc}") from exc

    pixels = np.array(rgba, dtype=np.uint8)
    if pixels.shape != (height, width, RGBA_CHANNELS):
        raise CanvasUnavailableError(
            f"Unexpected pixel buffer shape {pixels.shape} for {width}x{height} image"
        )
    pixels.setflags(write=False)

    image_format = image.format or "PNG"
    mime_type = Image.MIME.get(image_format, "application/octet-stream")

    logger.debug(
        "Decoded %s (%s, %dx%d, %d bytes)",
        filename or "<upload>", image_format, width, height, len(data),
    )

    return SourceImage(
        data=bytes(data),
        width=width,
        height=height,
        pixels=pixels,
        format=image_format,
        mime_type=mime_type,
        filename=filename,
    )


def read_image_file(path: str | Path) -> SourceImage:
    """Read and decode an image from disk.

    Raises:
        FileNotFoundError: If the path does not point to a file.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")
    return read_image(path.read_bytes(), filename=path.name)


async def load_image(data: bytes, filename: str | None = None) -> SourceImage:
    """Decode an upload without blocking the event loop.

    Decoding runs in the threadpool and cannot be cancelled once started.
    """
    return await run_in_threadpool(read_image, data, filename)
