"""Error taxonomy and classification for vocabulary extraction."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum

from lerndeutsch.extraction.transport import TransportResponse


class ErrorKind(str, Enum):
    CONFIGURATION = "ConfigurationError"
    INPUT = "InputError"
    OFFLINE = "Offline"
    TIMEOUT = "Timeout"
    RATE_LIMITED = "RateLimited"
    SERVER_TRANSIENT = "ServerTransient"
    CLIENT_ERROR = "ClientError"
    EMPTY_RESPONSE = "EmptyResponse"
    MALFORMED_RESPONSE = "MalformedResponse"
    UNKNOWN = "Unknown"
    UNEXPECTED = "UnexpectedError"


MISSING_API_KEY_MESSAGE = "Gemini API Key is not configured. Please check your .env file."
PROMPT_UNAVAILABLE_MESSAGE = "The extraction prompt could not be loaded. Please reinstall the application."
UNREADABLE_IMAGE_MESSAGE = "Could not read the selected image. Please try another photo."
OFFLINE_MESSAGE = "You appear to be offline. Check your connection and try again."
TIMEOUT_MESSAGE = "The AI service took too long to respond. Please try again."
BAD_REQUEST_MESSAGE = "The AI service could not process this image. Please try a different photo."
INVALID_CREDENTIAL_MESSAGE = "The Gemini API key is invalid or not authorized. Please check your configuration."
NOT_FOUND_MESSAGE = "The AI model endpoint was not found. Please check the configured model name."
RATE_LIMITED_MESSAGE = "Too many requests to the AI service. Please wait a moment and try again."
SERVER_TRANSIENT_MESSAGE = "The AI service is temporarily unavailable. Please try again shortly."
GENERIC_FAILURE_MESSAGE = "Something went wrong while contacting the AI service. Please try again."
EMPTY_RESPONSE_MESSAGE = "The AI service returned an empty response. Please try again with a clearer photo."
MALFORMED_RESPONSE_MESSAGE = "The AI response could not be understood. Please try again."
UNEXPECTED_FAILURE_MESSAGE = "An unexpected error occurred while extracting vocabulary."


@dataclass(frozen=True, slots=True)
class ErrorClassification:
    kind: ErrorKind
    message: str
    retryable: bool


_STATUS_CLASSIFICATIONS: dict[int, ErrorClassification] = {
    400: ErrorClassification(ErrorKind.CLIENT_ERROR, BAD_REQUEST_MESSAGE, False),
    401: ErrorClassification(ErrorKind.CLIENT_ERROR, INVALID_CREDENTIAL_MESSAGE, False),
    403: ErrorClassification(ErrorKind.CLIENT_ERROR, INVALID_CREDENTIAL_MESSAGE, False),
    404: ErrorClassification(ErrorKind.CLIENT_ERROR, NOT_FOUND_MESSAGE, False),
    429: ErrorClassification(ErrorKind.RATE_LIMITED, RATE_LIMITED_MESSAGE, True),
    500: ErrorClassification(ErrorKind.SERVER_TRANSIENT, SERVER_TRANSIENT_MESSAGE, True),
    502: ErrorClassification(ErrorKind.SERVER_TRANSIENT, SERVER_TRANSIENT_MESSAGE, True),
    503: ErrorClassification(ErrorKind.SERVER_TRANSIENT, SERVER_TRANSIENT_MESSAGE, True),
}
_TIMEOUT = ErrorClassification(ErrorKind.TIMEOUT, TIMEOUT_MESSAGE, True)
_GENERIC = ErrorClassification(ErrorKind.UNKNOWN, GENERIC_FAILURE_MESSAGE, False)


class ExtractionError(RuntimeError):
    """Raised inside the extraction pipeline; absorbed by the extractor facade."""

    def __init__(self, classification: ErrorClassification, *, raw_text: str | None = None) -> None:
        super().__init__(classification.message)
        self.classification = classification
        self.raw_text = raw_text

    @classmethod
    def of(cls, kind: ErrorKind, message: str, *, raw_text: str | None = None) -> "ExtractionError":
        return cls(ErrorClassification(kind, message, False), raw_text=raw_text)

    @property
    def kind(self) -> ErrorKind:
        return self.classification.kind

    @property
    def message(self) -> str:
        return self.classification.message

    @property
    def retryable(self) -> bool:
        return self.classification.retryable


def classify(outcome: TransportResponse | BaseException) -> ErrorClassification:
    """Map an HTTP response or a transport exception onto the error taxonomy.

    Only explicit HTTP statuses and timeouts are distinguished. Every other
    network failure (DNS, refused connection, TLS) is treated like an unmapped
    status: generic message, not retryable.
    """

    if isinstance(outcome, TransportResponse):
        return classify_status(outcome.status)
    if isinstance(outcome, (TimeoutError, asyncio.TimeoutError)):
        return _TIMEOUT
    return _GENERIC


def classify_status(status: int) -> ErrorClassification:
    if 200 <= status < 300:
        raise ValueError(f"status {status} is not a failure")
    return _STATUS_CLASSIFICATIONS.get(status, _GENERIC)
