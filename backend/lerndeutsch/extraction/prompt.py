"""Versioned instruction text for vocabulary extraction."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from lerndeutsch.extraction.errors import PROMPT_UNAVAILABLE_MESSAGE, ErrorKind, ExtractionError

VOCABULARY_PROMPT_VERSION = "vocabulary.v1"
_PROMPT_FILES: dict[str, Path] = {
    "vocabulary.v1": Path(__file__).resolve().parent / "prompts" / "vocabulary_v1.txt",
}


@lru_cache(maxsize=8)
def get_extraction_prompt(version: str = VOCABULARY_PROMPT_VERSION) -> str:
    """Return the instruction text sent alongside every image.

    The text is the same for every call; it is not templated per image.
    """

    prompt_file = _PROMPT_FILES.get(version)
    if prompt_file is None:
        raise ExtractionError.of(ErrorKind.CONFIGURATION, f"Extraction prompt version is not registered: {version}")
    try:
        prompt_text = prompt_file.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise ExtractionError.of(ErrorKind.CONFIGURATION, PROMPT_UNAVAILABLE_MESSAGE) from exc
    if not prompt_text:
        raise ExtractionError.of(ErrorKind.CONFIGURATION, PROMPT_UNAVAILABLE_MESSAGE)
    return prompt_text
