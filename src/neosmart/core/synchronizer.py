from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol

from pydantic import ValidationError

from neosmart.models import DeviceData, HubInfo
from neosmart.utils.numbers import round_half_up

from .identity import generate_device_id
from .registry import DeviceRegistry

logger = logging.getLogger(__name__)

TARGET_TEMPERATURE = "target_temperature"
MEASURE_TEMPERATURE = "measure_temperature"


class Host(Protocol):
    """Callbacks the driver makes into the home-automation host."""

    def set_unavailable(self, device_data: DeviceData, reason: str) -> None: ...

    def realtime(
        self, device_data: DeviceData, capability: str, value: float
    ) -> None: ...


def parse_info(payload: Any) -> HubInfo | None:
    try:
        return HubInfo.model_validate(payload)
    except ValidationError as exc:
        logger.warning("Ignoring malformed INFO response: %s", exc)
        return None


class StateSynchronizer:
    """Pull zone state from the hub into the registry and notify the host."""

    def __init__(self, registry: DeviceRegistry, host: Host) -> None:
        self._registry = registry
        self._host = host

    async def refresh(
        self,
        device_data: DeviceData | None,
        on_done: Callable[[], None] | None = None,
    ) -> None:
        bridge = self._registry.bridge
        if bridge is None or device_data is None:
            return

        record = self._registry.lookup(device_data.id)
        if record is None:
            logger.debug("Refresh for unregistered device %s", device_data.id)
            if on_done:
                on_done()
            return
        sequence = record.next_sequence()

        info = parse_info(await bridge.info())
        if info is not None:
            self._apply(device_data, info, sequence)

        if on_done:
            on_done()

    def _apply(self, device_data: DeviceData, info: HubInfo, sequence: int) -> None:
        for hub_device in info.hub_devices():
            hub_id = generate_device_id(hub_device.name, hub_device.type_code)
            if hub_id != device_data.id:
                continue

            # the device may have been removed while INFO was in flight
            record = self._registry.lookup(device_data.id)
            if record is None:
                return
            if not record.accept(sequence):
                logger.debug(
                    "Discarding stale INFO #%d for %s", sequence, device_data.id
                )
                return

            target = hub_device.set_temperature
            measured = round_half_up(hub_device.current_temperature, 1)

            record.name = hub_device.name
            record.state.target_temperature = target
            record.state.measure_temperature = measured

            self._host.realtime(device_data, TARGET_TEMPERATURE, target)
            self._host.realtime(device_data, MEASURE_TEMPERATURE, measured)
            logger.debug(
                "%s: target=%s measured=%s", hub_device.name, target, measured
            )
            return
