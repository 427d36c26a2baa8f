from __future__ import annotations

from .client import BridgeClient, NeoHubClient
from .discovery import discover_hub, seek_hub
from .mock_hub import MockNeoHub, MockZone, run_mock_hub

__all__ = [
    "BridgeClient",
    "MockNeoHub",
    "MockZone",
    "NeoHubClient",
    "discover_hub",
    "run_mock_hub",
    "seek_hub",
]
