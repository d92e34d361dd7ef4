"""Tests for mapping HTTP statuses and transport failures onto error kinds."""

from __future__ import annotations

import asyncio
import unittest

import aiohttp

from lerndeutsch.extraction.deadline import DeadlineExceeded
from lerndeutsch.extraction.errors import (
    BAD_REQUEST_MESSAGE,
    GENERIC_FAILURE_MESSAGE,
    INVALID_CREDENTIAL_MESSAGE,
    NOT_FOUND_MESSAGE,
    RATE_LIMITED_MESSAGE,
    SERVER_TRANSIENT_MESSAGE,
    TIMEOUT_MESSAGE,
    ErrorKind,
    classify,
    classify_status,
)
from lerndeutsch.extraction.transport import TransportResponse


class ClassifyStatusTests(unittest.TestCase):
    def test_permanent_client_errors_are_not_retryable(self) -> None:
        expected = {
            400: BAD_REQUEST_MESSAGE,
            401: INVALID_CREDENTIAL_MESSAGE,
            403: INVALID_CREDENTIAL_MESSAGE,
            404: NOT_FOUND_MESSAGE,
        }
        for status, message in expected.items():
            with self.subTest(status=status):
                classification = classify(TransportResponse(status=status, body="{}"))
                self.assertEqual(classification.kind, ErrorKind.CLIENT_ERROR)
                self.assertEqual(classification.message, message)
                self.assertFalse(classification.retryable)

    def test_rate_limit_is_retryable(self) -> None:
        classification = classify_status(429)
        self.assertEqual(classification.kind, ErrorKind.RATE_LIMITED)
        self.assertEqual(classification.message, RATE_LIMITED_MESSAGE)
        self.assertTrue(classification.retryable)

    def test_transient_server_errors_are_retryable(self) -> None:
        for status in (500, 502, 503):
            with self.subTest(status=status):
                classification = classify_status(status)
                self.assertEqual(classification.kind, ErrorKind.SERVER_TRANSIENT)
                self.assertEqual(classification.message, SERVER_TRANSIENT_MESSAGE)
                self.assertTrue(classification.retryable)

    def test_unmapped_statuses_get_generic_non_retryable_message(self) -> None:
        for status in (302, 409, 418, 501, 504):
            with self.subTest(status=status):
                classification = classify_status(status)
                self.assertEqual(classification.kind, ErrorKind.UNKNOWN)
                self.assertEqual(classification.message, GENERIC_FAILURE_MESSAGE)
                self.assertFalse(classification.retryable)

    def test_generic_failures_are_distinct_from_permanent_client_errors(self) -> None:
        generic = classify_status(418)
        unauthorized = classify_status(401)

        self.assertEqual(generic.kind, ErrorKind.UNKNOWN)
        self.assertEqual(unauthorized.kind, ErrorKind.CLIENT_ERROR)
        self.assertNotEqual(generic.kind, unauthorized.kind)

    def test_success_status_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            classify_status(200)


class ClassifyExceptionTests(unittest.TestCase):
    def test_timeouts_are_retryable(self) -> None:
        for exc in (DeadlineExceeded(30.0), asyncio.TimeoutError(), aiohttp.ServerTimeoutError()):
            with self.subTest(exc=type(exc).__name__):
                classification = classify(exc)
                self.assertEqual(classification.kind, ErrorKind.TIMEOUT)
                self.assertEqual(classification.message, TIMEOUT_MESSAGE)
                self.assertTrue(classification.retryable)

    def test_connection_failures_are_generic_and_not_retryable(self) -> None:
        for exc in (ConnectionRefusedError(), aiohttp.ClientPayloadError("truncated")):
            with self.subTest(exc=type(exc).__name__):
                classification = classify(exc)
                self.assertEqual(classification.kind, ErrorKind.UNKNOWN)
                self.assertEqual(classification.message, GENERIC_FAILURE_MESSAGE)
                self.assertFalse(classification.retryable)


if __name__ == "__main__":
    unittest.main()
