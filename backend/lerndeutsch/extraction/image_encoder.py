"""Local image loading and base64 encoding for inline Gemini payloads."""

from __future__ import annotations

import base64
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote, urlparse

from lerndeutsch.extraction.errors import UNREADABLE_IMAGE_MESSAGE, ErrorKind, ExtractionError

DEFAULT_MIME_TYPE = "image/jpeg"

_MIME_BY_SUFFIX: dict[str, str] = {
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
    ".heic": "image/heic",
    ".heif": "image/heic",
}

ImageReference = str | Path


@dataclass(frozen=True, slots=True)
class EncodedImage:
    data: str
    mime_type: str


def detect_mime_type(reference: ImageReference) -> str:
    """Guess the image MIME type from the reference's suffix, defaulting to JPEG."""

    lowered = str(reference).lower()
    for suffix, mime_type in _MIME_BY_SUFFIX.items():
        if lowered.endswith(suffix):
            return mime_type
    return DEFAULT_MIME_TYPE


def resolve_image_path(reference: ImageReference) -> Path:
    """Turn a filesystem path or ``file://`` URI into a Path."""

    if isinstance(reference, Path):
        return reference
    if reference.startswith("file://"):
        return Path(unquote(urlparse(reference).path))
    return Path(reference)


def encode_image(reference: ImageReference) -> EncodedImage:
    """Read the referenced image and return its base64 payload and MIME type."""

    path = resolve_image_path(reference)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ExtractionError.of(ErrorKind.INPUT, UNREADABLE_IMAGE_MESSAGE) from exc
    if not raw:
        raise ExtractionError.of(ErrorKind.INPUT, UNREADABLE_IMAGE_MESSAGE)
    return EncodedImage(
        data=base64.b64encode(raw).decode("ascii"),
        mime_type=detect_mime_type(reference),
    )
