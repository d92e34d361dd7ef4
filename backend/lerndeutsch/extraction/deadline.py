"""Deadline-bounded execution of awaitables."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

T = TypeVar("T")


class DeadlineExceeded(TimeoutError):
    """Raised when a bounded operation does not finish before its deadline."""

    def __init__(self, timeout_seconds: float) -> None:
        super().__init__(f"operation exceeded deadline of {timeout_seconds:g}s")
        self.timeout_seconds = timeout_seconds


async def run_with_deadline(operation: Awaitable[T], timeout_seconds: float) -> T:
    """Await ``operation``; cancel it and raise DeadlineExceeded once the deadline passes."""

    try:
        return await asyncio.wait_for(operation, timeout=timeout_seconds)
    except asyncio.TimeoutError as exc:
        raise DeadlineExceeded(timeout_seconds) from exc
