"""
Type definitions for a recognition request and its outcome.
"""

from __future__ import annotations

from dataclasses import dataclass

from errors import UnreadableFileError

from .languages import Language, get_language


@dataclass(frozen=True)
class RecognitionOptions:
    """Snapshot of the user's choices taken when recognition starts.

    Attributes:
        language: Language to recognize.
        binarize: Use binarization instead of the contrast stretch.
    """

    language: Language
    binarize: bool = False

    @classmethod
    def from_form(cls, language_code: str, binarize: bool = False) -> RecognitionOptions:
        """Build options from submitted form values.

        Raises:
            ValueError: If the language tag is not supported.
        """
        return cls(language=get_language(language_code), binarize=bool(binarize))


@dataclass(frozen=True)
class RecognitionResult:
    """Outcome of one recognition attempt: either text or an error message.

    Exactly one of `text` and `error` is set. `error_kind` names the
    exception class behind a failure, for diagnostics only. `mime_type` is
    the type detected from the upload's content, set once it decoded.
    """

    text: str | None = None
    error: str | None = None
    error_kind: str | None = None
    mime_type: str | None = None

    def __post_init__(self) -> None:
        if (self.text is None) == (self.error is None):
            raise ValueError("RecognitionResult needs exactly one of text or error")

    @classmethod
    def success(cls, text: str, mime_type: str | None = None) -> RecognitionResult:
        return cls(text=text, mime_type=mime_type)

    @classmethod
    def failure(
        cls,
        message: str,
        error_kind: str | None = None,
        mime_type: str | None = None,
    ) -> RecognitionResult:
        return cls(error=message, error_kind=error_kind, mime_type=mime_type)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def unreadable(self) -> bool:
        """True if the upload could not be read as an image at all."""
        return self.error_kind == UnreadableFileError.__name__
