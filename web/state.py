"""
UI state for one recognition request.

The page shows at most one of: a loading indicator, extracted text, or an
error message. RecognitionState keeps those together in a single value with
explicit transitions so that combinations like "loading with stale text"
cannot be built.

    idle ──begin()──▶ loading ──succeed(text)──▶ success
                         │                          │
                         └──fail(message)──▶ error  │
                                               │    │
                      loading ◀──begin()───────┴────┘
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from recognition import RecognitionResult

Status = Literal["idle", "loading", "success", "error"]

IDLE_LABEL = "Extract Text"
LOADING_LABEL = "Analyzing..."


@dataclass(frozen=True)
class RecognitionState:
    """Current status of the recognition trigger and its output sinks.

    Attributes:
        status: One of "idle", "loading", "success", "error".
        text: Extracted text; set only in "success".
        error: User-facing message; set only in "error".
    """

    status: Status = "idle"
    text: str | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if self.status in ("idle", "loading"):
            valid = self.text is None and self.error is None
        elif self.status == "success":
            valid = self.text is not None and self.error is None
        elif self.status == "error":
            valid = self.error is not None and self.text is None
        else:
            raise ValueError(f"Unknown status: {self.status!r}")
        if not valid:
            raise ValueError(
                f"Inconsistent state: status={self.status!r} text={self.text!r} error={self.error!r}"
            )

    @property
    def loading(self) -> bool:
        return self.status == "loading"

    @property
    def button_label(self) -> str:
        return LOADING_LABEL if self.loading else IDLE_LABEL

    def begin(self) -> RecognitionState:
        """Start a request, clearing any previous text or error."""
        if self.loading:
            raise ValueError("A recognition request is already in progress")
        return RecognitionState(status="loading")

    def succeed(self, text: str) -> RecognitionState:
        if not self.loading:
            raise ValueError(f"Cannot succeed from status {self.status!r}")
        return RecognitionState(status="success", text=text)

    def fail(self, message: str) -> RecognitionState:
        if not self.loading:
            raise ValueError(f"Cannot fail from status {self.status!r}")
        return RecognitionState(status="error", error=message)

    def finish(self, result: RecognitionResult) -> RecognitionState:
        """Apply a completed RecognitionResult."""
        if result.ok:
            return self.succeed(result.text)
        return self.fail(result.error)
