"""Tests for the HTTP extraction endpoint."""

from __future__ import annotations

import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from lerndeutsch.dependencies import get_extractor
from lerndeutsch.extraction.errors import MISSING_API_KEY_MESSAGE, ErrorKind
from lerndeutsch.extraction.extractor_interface import ExtractorInterface
from lerndeutsch.extraction.types import ExtractionOutcome, VocabularyCandidate
from lerndeutsch.main import app

class _RecordingExtractor(ExtractorInterface):
    def __init__(self, outcome: ExtractionOutcome) -> None:
        self.outcome = outcome
        self.seen: list[tuple[str, bytes]] = []

    async def extract(self, image_reference):  # noqa: ANN001
        path = Path(image_reference)
        self.seen.append((path.suffix, path.read_bytes()))
        return self.outcome

class ExtractionApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(app)
        self.addCleanup(app.dependency_overrides.clear)

    def _use(self, extractor: ExtractorInterface) -> None:
        app.dependency_overrides[get_extractor] = lambda: extractor

    def test_successful_extraction_is_wrapped_in_envelope(self) -> None:
        extractor = _RecordingExtractor(
            ExtractionOutcome.success(
                [VocabularyCandidate(word="Apfel", article="der", translation="apple", category="Noun", confidence=0.8)],
                raw_text="[]",
                attempts=1,
            )
        )
        self._use(extractor)

        response = self.client.post("/extract", files={"file": ("Einkauf.WEBP", b"webp-bytes", "image/webp")})

        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertTrue(data["succeeded"])
        self.assertEqual(data["candidates"][0]["word"], "Apfel")
        self.assertEqual(data["candidates"][0]["article"], "der")
        self.assertEqual(data["candidates"][0]["confidence"], 0.8)
        self.assertIsNone(data["failure_reason"])
        self.assertEqual(extractor.seen, [(".webp", b"webp-bytes")])

    def test_failed_outcome_is_reported_in_band(self) -> None:
        self._use(
            _RecordingExtractor(ExtractionOutcome.failure(MISSING_API_KEY_MESSAGE, ErrorKind.CONFIGURATION))
        )

        response = self.client.post("/extract", files={"file": ("photo.jpg", b"jpeg-bytes", "image/jpeg")})

        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertFalse(data["succeeded"])
        self.assertEqual(data["candidates"], [])
        self.assertEqual(data["failure_reason"], MISSING_API_KEY_MESSAGE)
        self.assertEqual(data["error_kind"], "ConfigurationError")

    def test_temporary_upload_is_removed(self) -> None:
        seen_paths: list[Path] = []

        class _PathExtractor(ExtractorInterface):
            async def extract(self, image_reference):  # noqa: ANN001
                seen_paths.append(Path(image_reference))
                return ExtractionOutcome.success([])

        self._use(_PathExtractor())

        response = self.client.post("/extract", files={"file": ("scan", b"bytes", "application/octet-stream")})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(seen_paths[0].suffix, "")
        self.assertFalse(seen_paths[0].exists())

    def test_missing_file_is_rejected(self) -> None:
        response = self.client.post("/extract")
        self.assertEqual(response.status_code, 422)

    def test_health(self) -> None:
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ok")


class GetExtractorTests(unittest.TestCase):
    def test_returns_extractor_instance_rather_than_generator(self) -> None:
        extractor = get_extractor()

        self.assertIsInstance(extractor, ExtractorInterface)
        self.assertNotIn("Yield", get_extractor.__doc__)


if __name__ == "__main__":
    unittest.main()
