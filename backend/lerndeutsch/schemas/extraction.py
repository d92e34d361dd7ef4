"""Extraction endpoint schemas."""

from pydantic import BaseModel, ConfigDict, Field

from lerndeutsch.extraction.errors import ErrorKind
from lerndeutsch.extraction.types import GenderArticle, HelperVerb, WordCategory


class VocabularyCandidateRead(BaseModel):
    """One extracted vocabulary entry awaiting user review."""

    model_config = ConfigDict(from_attributes=True)

    word: str
    article: GenderArticle | None = None
    plural: str | None = None
    helper_verb: HelperVerb | None = None
    past_participle: str | None = None
    translation: str
    example: str | None = None
    category: WordCategory
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)


class ExtractionOutcomeRead(BaseModel):
    """Extraction result; failures are reported in-band with HTTP 200."""

    model_config = ConfigDict(from_attributes=True)

    succeeded: bool
    candidates: list[VocabularyCandidateRead]
    failure_reason: str | None = None
    error_kind: ErrorKind | None = None
    raw_text: str | None = None
    attempts: int = 0
