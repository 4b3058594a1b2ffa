"""Error kinds raised by the extraction pipeline."""


class OcrAppError(Exception):
    """Base class for failures the web surface converts to a user message."""


class UnreadableFileError(OcrAppError):
    """The uploaded bytes cannot be identified as an image."""


class ImageDecodeError(OcrAppError):
    """The image header was readable but rasterisation failed."""


class CanvasUnavailableError(OcrAppError):
    """No RGBA pixel surface could be produced or re-encoded."""


class RecognitionError(OcrAppError):
    """The OCR engine failed to start or to recognize the image."""
