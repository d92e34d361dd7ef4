"""Connectivity capability consulted before any network attempt."""

from __future__ import annotations

from typing import Protocol


class ConnectivityProbe(Protocol):
    """Protocol for pluggable "is the network reachable" checks."""

    async def is_online(self) -> bool:
        """Return False only when the device is known to be offline."""


class AlwaysOnlineProbe:
    """Default probe for hosts without connectivity monitoring; never blocks an extraction."""

    async def is_online(self) -> bool:
        return True
