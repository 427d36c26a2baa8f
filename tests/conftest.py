from __future__ import annotations

import asyncio
from typing import Any

import pytest

from neosmart.config import DriverConfig, Settings, get_settings
from neosmart.errors import BridgeError
from neosmart.models import DeviceData


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("NEOSMART_CONFIG", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def hub_entry(
    name: str, device_type: int = 1, set_point: Any = "21.0", measured: Any = "20.4"
) -> dict[str, Any]:
    return {
        "device": name,
        "DEVICE_TYPE": device_type,
        "CURRENT_SET_TEMPERATURE": set_point,
        "CURRENT_TEMPERATURE": measured,
    }


class FakeBridge:
    """In-memory stand-in for NeoHubClient."""

    def __init__(self, host: str = "10.0.0.5", payload: Any = None) -> None:
        self.host = host
        self.payload = payload if payload is not None else {"devices": []}
        self.info_calls = 0
        self.set_calls: list[tuple[int, str]] = []
        self.set_error: str | None = None
        self.info_error: str | None = None

    async def info(self) -> Any:
        self.info_calls += 1
        if self.info_error:
            raise BridgeError(self.info_error)
        return self.payload

    async def set_temperature(self, temperature: int, device_name: str) -> None:
        self.set_calls.append((temperature, device_name))
        if self.set_error:
            raise BridgeError(self.set_error)


class FakeHost:
    def __init__(self) -> None:
        self.realtime_events: list[tuple[str, str, float]] = []
        self.unavailable: list[tuple[str, str]] = []

    def set_unavailable(self, device_data: DeviceData, reason: str) -> None:
        self.unavailable.append((device_data.id, reason))

    def realtime(self, device_data: DeviceData, capability: str, value: float) -> None:
        self.realtime_events.append((device_data.id, capability, value))


class BridgeFactory:
    def __init__(self, bridge: FakeBridge) -> None:
        self.bridge = bridge
        self.hosts: list[str] = []

    def __call__(self, host: str) -> FakeBridge:
        self.hosts.append(host)
        self.bridge.host = host
        return self.bridge


def fast_settings(poll_interval: float = 60.0, pairing_timeout: float = 15.0) -> Settings:
    return Settings(
        driver=DriverConfig(poll_interval=poll_interval, pairing_timeout=pairing_timeout)
    )


async def never_discover():
    await asyncio.Event().wait()


@pytest.fixture
def bridge() -> FakeBridge:
    return FakeBridge()


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()
