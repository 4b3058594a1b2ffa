"""Languages offered in the language selector."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Language:
    """A selectable recognition language.

    Attributes:
        code: Language tag submitted by the form (Tesseract traineddata name).
        label: Display name in the selector.
        easyocr_langs: Language list passed to easyocr.Reader. EasyOCR only
            combines CJK models with English, so every entry pairs with "en".
    """

    code: str
    label: str
    easyocr_langs: tuple[str, ...]

    @property
    def tesseract_lang(self) -> str:
        return self.code


SUPPORTED_LANGUAGES: tuple[Language, ...] = (
    Language("eng", "English", ("en",)),
    Language("chi_sim", "Chinese (Simplified)", ("ch_sim", "en")),
    Language("jpn", "Japanese", ("ja", "en")),
    Language("kor", "Korean", ("ko", "en")),
    Language("fra", "French", ("fr", "en")),
    Language("deu", "German", ("de", "en")),
)

_BY_CODE = {language.code: language for language in SUPPORTED_LANGUAGES}

LANGUAGE_CODES: tuple[str, ...] = tuple(_BY_CODE)


def get_language(code: str) -> Language:
    """Look up a supported language by its tag.

    Raises:
        ValueError: If the tag is not one of the supported languages.
    """
    language = _BY_CODE.get(code)
    if language is None:
        raise ValueError(
            f"Unsupported language: {code!r} (expected one of {', '.join(LANGUAGE_CODES)})"
        )
    return language
