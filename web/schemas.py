"""Pydantic schemas for the JSON API.

These define the exact wire format returned by each endpoint.
"""

from pydantic import BaseModel, model_validator


class RecognizeResponse(BaseModel):
    """Response for POST /api/recognize. Exactly one field is set."""
    text: str | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _exactly_one(self):
        if (self.text is None) == (self.error is None):
            raise ValueError("exactly one of text or error must be set")
        return self


class LanguageOut(BaseModel):
    """One entry of the language selector."""
    value: str
    label: str


class LanguagesResponse(BaseModel):
    """Response for GET /api/languages."""
    languages: list[LanguageOut]
    default: str
