"""Gemini generateContent wire client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

import aiohttp


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Raw HTTP outcome of one generateContent call."""

    status: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class GeminiTransport(Protocol):
    """Protocol for pluggable generateContent transports."""

    async def generate(self, payload: dict[str, Any]) -> TransportResponse:
        """Send one request and return the HTTP outcome.

        Network-level failures propagate as exceptions.
        """


@dataclass(slots=True)
class AiohttpGeminiTransport:
    """Minimal Gemini REST client using aiohttp; one session per request."""

    api_key: str
    model: str = "gemini-2.5-flash"
    base_url: str = "https://generativelanguage.googleapis.com"
    api_version: str = "v1"

    @property
    def endpoint_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.api_version}/models/{self.model}:generateContent"

    async def generate(self, payload: dict[str, Any]) -> TransportResponse:
        async with aiohttp.ClientSession() as session:
            async with session.post(
                self.endpoint_url,
                params={"key": self.api_key},
                json=payload,
                headers={"Content-Type": "application/json"},
            ) as resp:
                body = await resp.text()
                return TransportResponse(status=resp.status, body=body)


def build_generate_content_body(prompt: str, *, image_data: str, mime_type: str) -> dict[str, Any]:
    """Return the generateContent request body for one prompt plus one inline image."""

    return {
        "contents": [
            {
                "parts": [
                    {"text": prompt},
                    {
                        "inline_data": {
                            "mime_type": mime_type,
                            "data": image_data,
                        }
                    },
                ]
            }
        ]
    }
