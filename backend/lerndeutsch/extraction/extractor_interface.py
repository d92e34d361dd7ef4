"""Extractor interface for pluggable extraction implementations."""

from abc import ABC, abstractmethod

from lerndeutsch.extraction.image_encoder import ImageReference
from lerndeutsch.extraction.types import ExtractionOutcome


class ExtractorInterface(ABC):
    """Abstract vocabulary extractor."""

    @abstractmethod
    async def extract(self, image_reference: ImageReference) -> ExtractionOutcome:
        """Extract vocabulary candidates from one image; must not raise."""
