"""Shared builders and fakes for the test suite."""

import io
import threading
import time
from contextlib import contextmanager

import numpy as np
from PIL import Image


def encode(image: Image.Image, fmt: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


def solid_png(color=(100, 100, 100, 255), size=(8, 6)) -> bytes:
    """PNG bytes of a single-color RGBA image of size (width, height)."""
    return encode(Image.new("RGBA", size, color))


def noise_png(size=(64, 64), seed=0) -> bytes:
    """PNG bytes of random RGB noise; compresses poorly, so truncation hits pixel data."""
    rng = np.random.default_rng(seed)
    pixels = rng.integers(0, 256, size=(size[1], size[0], 3), dtype=np.uint8)
    return encode(Image.fromarray(pixels))


def rgba(pixels) -> np.ndarray:
    """Build an RGBA uint8 buffer from nested [[ [r, g, b, a], ... ], ...] lists."""
    return np.array(pixels, dtype=np.uint8)


class _FakeEngine:
    def __init__(self, factory, language):
        self.factory = factory
        self.language = language

    def recognize(self, png: bytes) -> str:
        self.factory.calls.append(("recognize", self.language.code))
        self.factory.images.append(png)
        with self.factory.track_active():
            if self.factory.delay:
                time.sleep(self.factory.delay)
        if self.factory.recognize_error is not None:
            raise self.factory.recognize_error
        return self.factory.text

    def close(self) -> None:
        self.factory.calls.append(("close", self.language.code))
        if self.factory.close_error is not None:
            raise self.factory.close_error


class RecordingEngineFactory:
    """Engine factory that records every acquire/recognize/close call."""

    def __init__(
        self,
        text="Hello OCR",
        recognize_error=None,
        start_error=None,
        close_error=None,
        delay=0.0,
    ):
        self.text = text
        self.delay = delay
        self.active = 0
        self.peak_active = 0
        self._active_lock = threading.Lock()
        self.recognize_error = recognize_error
        self.start_error = start_error
        self.close_error = close_error
        self.calls: list[tuple[str, str]] = []
        self.images: list[bytes] = []

    def __call__(self, language):
        self.calls.append(("acquire", language.code))
        if self.start_error is not None:
            raise self.start_error
        return _FakeEngine(self, language)

    def count(self, kind: str) -> int:
        return sum(1 for call, _ in self.calls if call == kind)

    @contextmanager
    def track_active(self):
        """Count recognize calls running at the same moment."""
        with self._active_lock:
            self.active += 1
            self.peak_active = max(self.peak_active, self.active)
        try:
            yield
        finally:
            with self._active_lock:
                self.active -= 1
