"""Gemini-backed vocabulary extraction from photographed German text."""

from __future__ import annotations

import asyncio
import logging
from time import perf_counter

from lerndeutsch.config import Settings, get_settings
from lerndeutsch.extraction.connectivity import AlwaysOnlineProbe, ConnectivityProbe
from lerndeutsch.extraction.errors import (
    MISSING_API_KEY_MESSAGE,
    OFFLINE_MESSAGE,
    UNEXPECTED_FAILURE_MESSAGE,
    ErrorKind,
    ExtractionError,
)
from lerndeutsch.extraction.extractor_interface import ExtractorInterface
from lerndeutsch.extraction.image_encoder import ImageReference, encode_image
from lerndeutsch.extraction.prompt import VOCABULARY_PROMPT_VERSION, get_extraction_prompt
from lerndeutsch.extraction.response_parser import extract_answer_text, parse_vocabulary_response
from lerndeutsch.extraction.retry import RetryOrchestrator, RetryPolicy, SleepFunc, TransportFailure
from lerndeutsch.extraction.transport import AiohttpGeminiTransport, GeminiTransport, build_generate_content_body
from lerndeutsch.extraction.types import ExtractionOutcome

logger = logging.getLogger(__name__)


class VocabularyExtractor(ExtractorInterface):
    """Encodes an image, calls Gemini with retries, and validates the answer.

    ``extract`` never raises: configuration, input, transport and parsing
    failures all come back as a failed ExtractionOutcome.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        transport: GeminiTransport | None = None,
        policy: RetryPolicy | None = None,
        connectivity: ConnectivityProbe | None = None,
        sleep: SleepFunc = asyncio.sleep,
        model: str = "gemini-2.5-flash",
        prompt_version: str = VOCABULARY_PROMPT_VERSION,
    ) -> None:
        self._api_key = (api_key or "").strip() or None
        if transport is None and self._api_key is not None:
            transport = AiohttpGeminiTransport(api_key=self._api_key, model=model)
        self._orchestrator = RetryOrchestrator(transport, policy, sleep=sleep) if transport is not None else None
        self._connectivity = connectivity or AlwaysOnlineProbe()
        self._prompt_version = prompt_version
        self.model = model

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        connectivity: ConnectivityProbe | None = None,
    ) -> "VocabularyExtractor":
        transport = None
        if settings.gemini_api_key:
            transport = AiohttpGeminiTransport(
                api_key=settings.gemini_api_key,
                model=settings.gemini_model,
                base_url=settings.gemini_base_url,
                api_version=settings.gemini_api_version,
            )
        return cls(
            settings.gemini_api_key,
            transport=transport,
            policy=RetryPolicy.from_settings(settings),
            connectivity=connectivity,
            model=settings.gemini_model,
        )

    async def extract(self, image_reference: ImageReference) -> ExtractionOutcome:
        """Extract vocabulary candidates from one local image."""

        total_started = perf_counter()
        attempts = 0
        raw_text: str | None = None
        try:
            if self._api_key is None or self._orchestrator is None:
                logger.error("extraction.not_configured reason=missing_gemini_api_key")
                raise ExtractionError.of(ErrorKind.CONFIGURATION, MISSING_API_KEY_MESSAGE)
            if not await self._connectivity.is_online():
                raise ExtractionError.of(ErrorKind.OFFLINE, OFFLINE_MESSAGE)

            image = await asyncio.to_thread(encode_image, image_reference)
            prompt = get_extraction_prompt(self._prompt_version)
            payload = build_generate_content_body(prompt, image_data=image.data, mime_type=image.mime_type)
            logger.info(
                "extraction.started model=%s mime_type=%s payload_chars=%d",
                self.model,
                image.mime_type,
                len(image.data),
            )

            result = await self._orchestrator.run(payload)
            attempts = result.attempts
            raw_text = extract_answer_text(result.response.body)
            logger.debug("extraction.raw_response text=%s", raw_text)
            candidates = parse_vocabulary_response(raw_text)
        except TransportFailure as exc:
            outcome = ExtractionOutcome.failure(exc.message, exc.kind, attempts=exc.attempts)
        except ExtractionError as exc:
            outcome = ExtractionOutcome.failure(
                exc.message,
                exc.kind,
                raw_text=exc.raw_text if exc.raw_text is not None else raw_text,
                attempts=attempts,
            )
        except Exception:
            logger.exception("extraction.unexpected_failure attempts=%d", attempts)
            outcome = ExtractionOutcome.failure(
                UNEXPECTED_FAILURE_MESSAGE,
                ErrorKind.UNEXPECTED,
                raw_text=raw_text,
                attempts=attempts,
            )
        else:
            outcome = ExtractionOutcome.success(candidates, raw_text=raw_text, attempts=attempts)

        logger.info(
            "extraction.finished succeeded=%s kind=%s candidates=%d attempts=%d total_ms=%.2f",
            outcome.succeeded,
            outcome.error_kind.value if outcome.error_kind else "-",
            len(outcome.candidates),
            outcome.attempts,
            (perf_counter() - total_started) * 1000.0,
        )
        return outcome


def get_default_extractor() -> VocabularyExtractor:
    """Return the Gemini extractor configured from settings."""

    return VocabularyExtractor.from_settings(get_settings())


async def extract_vocabulary_from_image(
    image_reference: ImageReference,
    *,
    extractor: ExtractorInterface | None = None,
) -> ExtractionOutcome:
    """Extract vocabulary from one image with the given or default extractor."""

    return await (extractor or get_default_extractor()).extract(image_reference)
