"""Common API response schemas."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """JSON envelope shared by every endpoint: ``{"data": ...}``."""

    data: T


class HealthStatus(BaseModel):
    status: str = "ok"
    gemini_configured: bool
