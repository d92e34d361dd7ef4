"""Vocabulary extraction from photographed German text."""

from lerndeutsch.extraction.errors import ErrorKind, ExtractionError
from lerndeutsch.extraction.types import ExtractionOutcome, VocabularyCandidate
from lerndeutsch.extraction.vocabulary_extractor import (
    VocabularyExtractor,
    extract_vocabulary_from_image,
    get_default_extractor,
)

__all__ = [
    "ErrorKind",
    "ExtractionError",
    "ExtractionOutcome",
    "VocabularyCandidate",
    "VocabularyExtractor",
    "extract_vocabulary_from_image",
    "get_default_extractor",
]
