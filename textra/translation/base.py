"""Result type returned by the TexTra API client."""

from __future__ import annotations

from dataclasses import dataclass

from textra.translation.errors import FailureKind


@dataclass
class TranslationResult:
    """Result of a translation operation.

    Exactly one of ``translated_text`` and ``failure`` is set.
    """

    translated_text: str | None
    source_language: str | None
    target_language: str | None
    mode: str | None
    failure: FailureKind | None = None
    detail: str | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        """True if the API returned a translation."""
        return self.failure is None
