"""Driver hooks called by the home-automation host."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Any, Protocol

from neosmart.bridge import BridgeClient, NeoHubClient, discover_hub
from neosmart.config import Settings, get_settings
from neosmart.core import (
    DeviceRecord,
    DeviceRegistry,
    Host,
    MeasureTemperature,
    PairingFlow,
    StateSynchronizer,
    TargetTemperature,
)
from neosmart.core.pairing import Discover
from neosmart.core.registry import ClientFactory
from neosmart.models import DeviceData, DiscoveredHub, as_device_data

logger = logging.getLogger(__name__)

HostDeviceData = DeviceData | Mapping[str, Any]


class PairingSession(Protocol):
    def on(self, event: str, handler: Callable[..., Awaitable[Any]]) -> None: ...


class NeoSmartDriver:
    """Heatmiser neoHub driver: one instance per host driver."""

    def __init__(
        self,
        host: Host,
        settings: Settings | None = None,
        client_factory: ClientFactory | None = None,
        discover: Discover | None = None,
        app_version: str | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.host = host

        self.registry = DeviceRegistry(
            self.settings.driver,
            client_factory or self._default_client,
            on_poll=self._poll,
        )
        self.synchronizer = StateSynchronizer(self.registry, host)
        self.capabilities = {
            "target_temperature": TargetTemperature(
                self.registry, self.synchronizer, self.settings.driver
            ),
            "measure_temperature": MeasureTemperature(
                self.registry, self.synchronizer
            ),
        }
        self.pairing = PairingFlow(
            discover or self._default_discover,
            timeout=self.settings.driver.pairing_timeout,
            app_version=app_version or _package_version(),
        )

    def _default_client(self, host: str) -> BridgeClient:
        bridge = self.settings.bridge
        return NeoHubClient(host, port=bridge.port, timeout=bridge.timeout)

    async def _default_discover(self) -> DiscoveredHub:
        return await discover_hub(self.settings.bridge)

    async def _poll(self, device_data: DeviceData) -> None:
        await self.synchronizer.refresh(device_data)

    async def init(self, saved_devices: Iterable[HostDeviceData]) -> bool:
        """Re-register the devices the host already has installed."""
        for device_data in saved_devices:
            self._add(as_device_data(device_data))
        logger.info("Restored %d device(s)", len(self.registry))
        return True

    def pair(self, session: PairingSession) -> None:
        session.on("list_devices", self._list_devices)

    async def _list_devices(self, *_args: Any) -> list[dict[str, object]]:
        descriptors = await self.pairing.list_devices()
        return [descriptor.to_host() for descriptor in descriptors]

    async def added(self, device_data: HostDeviceData) -> bool:
        self._add(as_device_data(device_data))
        return True

    async def deleted(self, device_data: HostDeviceData) -> None:
        await self.registry.remove(as_device_data(device_data).id)

    async def shutdown(self) -> None:
        await self.registry.close()

    def _add(self, device_data: DeviceData) -> DeviceRecord:
        is_new = device_data.id not in self.registry
        record = self.registry.add(device_data)
        if is_new and record.unavailable_reason:
            self.host.set_unavailable(device_data, record.unavailable_reason)
        return record


def _package_version() -> str:
    from neosmart import __version__

    return __version__
