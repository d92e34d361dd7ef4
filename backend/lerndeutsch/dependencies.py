"""FastAPI dependency providers."""

from lerndeutsch.extraction.extractor_interface import ExtractorInterface
from lerndeutsch.extraction.vocabulary_extractor import get_default_extractor


def get_extractor() -> ExtractorInterface:
    """Return the configured vocabulary extractor for one request."""

    return get_default_extractor()
