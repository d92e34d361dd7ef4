"""Typed extraction outputs independent of transport and presentation."""

from dataclasses import dataclass, field
from typing import Literal

from lerndeutsch.extraction.errors import ErrorKind

WordCategory = Literal["Noun", "Verb", "Adjective", "Adverb", "Phrase"]
GenderArticle = Literal["der", "die", "das"]
HelperVerb = Literal["haben", "sein"]


@dataclass(slots=True)
class VocabularyCandidate:
    """One structurally valid vocabulary entry returned by the model."""

    word: str
    translation: str
    category: WordCategory
    article: GenderArticle | None = None
    plural: str | None = None
    helper_verb: HelperVerb | None = None
    past_participle: str | None = None
    example: str | None = None
    confidence: float | None = None


@dataclass(slots=True)
class ExtractionOutcome:
    """Result of one extraction call; failures are reported here, never raised."""

    succeeded: bool
    candidates: list[VocabularyCandidate] = field(default_factory=list)
    failure_reason: str | None = None
    error_kind: ErrorKind | None = None
    raw_text: str | None = None
    attempts: int = 0

    @classmethod
    def success(
        cls,
        candidates: list[VocabularyCandidate],
        *,
        raw_text: str | None = None,
        attempts: int = 0,
    ) -> "ExtractionOutcome":
        return cls(succeeded=True, candidates=list(candidates), raw_text=raw_text, attempts=attempts)

    @classmethod
    def failure(
        cls,
        reason: str,
        kind: ErrorKind,
        *,
        raw_text: str | None = None,
        attempts: int = 0,
    ) -> "ExtractionOutcome":
        return cls(
            succeeded=False,
            failure_reason=reason,
            error_kind=kind,
            raw_text=raw_text,
            attempts=attempts,
        )
