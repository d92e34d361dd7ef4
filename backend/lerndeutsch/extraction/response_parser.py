"""Validation of the model's textual answer into vocabulary candidates."""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from lerndeutsch.extraction.errors import (
    EMPTY_RESPONSE_MESSAGE,
    MALFORMED_RESPONSE_MESSAGE,
    ErrorKind,
    ExtractionError,
)
from lerndeutsch.extraction.types import GenderArticle, HelperVerb, VocabularyCandidate, WordCategory

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)
_ARTICLES: frozenset[str] = frozenset({"der", "die", "das"})
_HELPER_VERBS: frozenset[str] = frozenset({"haben", "sein"})


class _RawCandidate(BaseModel):
    """One array element as the model sent it."""

    model_config = ConfigDict(extra="ignore")

    word: str
    translation: str
    category: WordCategory
    article: GenderArticle | None = None
    plural: str | None = None
    helper_verb: HelperVerb | None = Field(
        default=None,
        validation_alias=AliasChoices("helper_verb", "helperVerb"),
    )
    past_participle: str | None = Field(
        default=None,
        validation_alias=AliasChoices("past_participle", "pastParticiple"),
    )
    example: str | None = None
    confidence: float | None = None

    @field_validator("word", "translation")
    @classmethod
    def _require_text(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("must not be empty")
        return cleaned

    @field_validator("plural", "past_participle", "example", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip() or None
        return value

    # Grammar fields are hints: an unknown value is discarded, the entry is kept.
    @field_validator("article", mode="before")
    @classmethod
    def _known_article(cls, value: Any) -> str | None:
        if isinstance(value, str) and value.strip().lower() in _ARTICLES:
            return value.strip().lower()
        return None

    @field_validator("helper_verb", mode="before")
    @classmethod
    def _known_helper_verb(cls, value: Any) -> str | None:
        if isinstance(value, str) and value.strip().lower() in _HELPER_VERBS:
            return value.strip().lower()
        return None

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp_confidence(cls, value: Any) -> float | None:
        if value is None or isinstance(value, bool):
            return None
        try:
            parsed = float(value)
        except (TypeError, ValueError):
            return None
        if math.isnan(parsed):
            return None
        return max(0.0, min(1.0, parsed))

    def to_candidate(self) -> VocabularyCandidate:
        return VocabularyCandidate(
            word=self.word,
            translation=self.translation,
            category=self.category,
            article=self.article,
            plural=self.plural,
            helper_verb=self.helper_verb,
            past_participle=self.past_participle,
            example=self.example,
            confidence=self.confidence,
        )


def extract_answer_text(body: str) -> str | None:
    """Return the first text part of the first candidate in a generateContent response."""

    try:
        decoded = json.loads(body)
    except json.JSONDecodeError as exc:
        raise ExtractionError.of(ErrorKind.MALFORMED_RESPONSE, MALFORMED_RESPONSE_MESSAGE) from exc
    if not isinstance(decoded, dict):
        raise ExtractionError.of(ErrorKind.MALFORMED_RESPONSE, MALFORMED_RESPONSE_MESSAGE)
    try:
        text = decoded["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text).strip()


def parse_vocabulary_response(text: str | None) -> list[VocabularyCandidate]:
    """Parse the model's answer into candidates, dropping malformed elements.

    Elements missing ``word``/``translation`` or carrying an unknown category are
    skipped so one bad entry does not discard the rest of the batch. A top level
    that is not a JSON array fails the whole response.
    """

    if text is None or not text.strip():
        raise ExtractionError.of(ErrorKind.EMPTY_RESPONSE, EMPTY_RESPONSE_MESSAGE, raw_text=text)

    cleaned = strip_code_fences(text)
    try:
        decoded = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise ExtractionError.of(
            ErrorKind.MALFORMED_RESPONSE, MALFORMED_RESPONSE_MESSAGE, raw_text=text
        ) from exc
    if not isinstance(decoded, list):
        raise ExtractionError.of(ErrorKind.MALFORMED_RESPONSE, MALFORMED_RESPONSE_MESSAGE, raw_text=text)

    candidates: list[VocabularyCandidate] = []
    for index, element in enumerate(decoded):
        try:
            raw = _RawCandidate.model_validate(element)
        except ValidationError as exc:
            logger.debug(
                "extraction.candidate_rejected index=%d errors=%d detail=%s",
                index,
                exc.error_count(),
                exc.errors(include_url=False),
            )
            continue
        candidates.append(raw.to_candidate())

    if len(candidates) < len(decoded):
        logger.info(
            "extraction.candidates_dropped accepted=%d rejected=%d",
            len(candidates),
            len(decoded) - len(candidates),
        )
    return candidates
