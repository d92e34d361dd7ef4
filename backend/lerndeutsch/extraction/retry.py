"""Bounded retry loop around the Gemini transport."""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from time import perf_counter
from typing import Any

import aiohttp

from lerndeutsch.config import Settings
from lerndeutsch.extraction.deadline import run_with_deadline
from lerndeutsch.extraction.errors import ErrorClassification, ExtractionError, classify
from lerndeutsch.extraction.transport import GeminiTransport, TransportResponse

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]

_LOGGED_BODY_CHARS = 500

_KEY_PARAM = re.compile(r"(\bkey=)[^&\s'\"]+")


def redact_secrets(text: str) -> str:
    """Mask ``key=`` query values so request URLs can be logged."""

    return _KEY_PARAM.sub(r"\1***", text)


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Attempt ceiling, per-attempt deadline, and exponential backoff base."""

    max_attempts: int = 3
    attempt_timeout_seconds: float = 30.0
    backoff_base_seconds: float = 2.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.attempt_timeout_seconds <= 0:
            raise ValueError("attempt_timeout_seconds must be positive")
        if self.backoff_base_seconds < 0:
            raise ValueError("backoff_base_seconds must not be negative")

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        return cls(
            max_attempts=settings.extraction_max_attempts,
            attempt_timeout_seconds=settings.extraction_attempt_timeout_seconds,
            backoff_base_seconds=settings.extraction_backoff_base_seconds,
        )

    def backoff_before(self, attempt: int) -> float:
        """Delay before 1-indexed ``attempt``: 0 for the first, then base, 2*base, 4*base..."""

        if attempt <= 1:
            return 0.0
        return self.backoff_base_seconds * (2 ** (attempt - 2))


class AttemptState(str, Enum):
    IDLE = "idle"
    ATTEMPTING = "attempting"
    SUCCESS = "success"
    RETRYABLE_FAILURE = "retryable_failure"
    TERMINAL_FAILURE = "terminal_failure"


@dataclass(slots=True)
class RetryResult:
    """Successful transport response plus the number of attempts spent."""

    response: TransportResponse
    attempts: int


class TransportFailure(ExtractionError):
    """Raised when the orchestrator stops without a 2xx response; carries the attempts spent."""

    def __init__(self, classification: ErrorClassification, *, attempts: int) -> None:
        super().__init__(classification)
        self.attempts = attempts


class RetryOrchestrator:
    """Runs sequential deadline-bounded attempts until success or a terminal failure."""

    def __init__(
        self,
        transport: GeminiTransport,
        policy: RetryPolicy | None = None,
        *,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self._transport = transport
        self._policy = policy or RetryPolicy()
        self._sleep = sleep

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    async def run(self, payload: dict[str, Any]) -> RetryResult:
        """Send ``payload`` until a 2xx response arrives.

        Raises TransportFailure on a non-retryable failure (immediately) or after
        the attempt ceiling, with the message of the most recent failure.
        """

        attempt = 0
        while True:
            attempt += 1
            delay = self._policy.backoff_before(attempt)
            if delay > 0:
                logger.info("extraction.backoff attempt=%d delay_s=%.2f", attempt, delay)
                await self._sleep(delay)

            state = AttemptState.ATTEMPTING
            started = perf_counter()
            logger.debug("extraction.attempt_start attempt=%d state=%s", attempt, state.value)
            try:
                response = await run_with_deadline(
                    self._transport.generate(payload),
                    self._policy.attempt_timeout_seconds,
                )
            except (TimeoutError, asyncio.TimeoutError, aiohttp.ClientError, OSError) as exc:
                classification = classify(exc)
                detail = redact_secrets(f"{type(exc).__name__}: {exc}")
            else:
                if response.ok:
                    state = AttemptState.SUCCESS
                    logger.info(
                        "extraction.attempt_succeeded attempt=%d status=%d elapsed_ms=%.2f",
                        attempt,
                        response.status,
                        (perf_counter() - started) * 1000.0,
                    )
                    return RetryResult(response=response, attempts=attempt)
                classification = classify(response)
                detail = redact_secrets(f"HTTP {response.status}: {response.body[:_LOGGED_BODY_CHARS]}")

            state = AttemptState.RETRYABLE_FAILURE if classification.retryable else AttemptState.TERMINAL_FAILURE
            logger.warning(
                "extraction.attempt_failed attempt=%d state=%s kind=%s elapsed_ms=%.2f detail=%s",
                attempt,
                state.value,
                classification.kind.value,
                (perf_counter() - started) * 1000.0,
                detail,
            )
            if state is AttemptState.TERMINAL_FAILURE:
                raise TransportFailure(classification, attempts=attempt)
            if attempt >= self._policy.max_attempts:
                logger.error(
                    "extraction.retries_exhausted attempts=%d kind=%s",
                    attempt,
                    classification.kind.value,
                )
                raise TransportFailure(classification, attempts=attempt)
