"""Host-facing get/set handlers for thermostat capabilities."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from neosmart.config import DriverConfig
from neosmart.errors import (
    BridgeError,
    DeviceNotFoundError,
    MissingParameterError,
    TemperatureCommandError,
)
from neosmart.models import DeviceData, as_device_data
from neosmart.utils.numbers import clamp, round_half_up

from .registry import DeviceRecord, DeviceRegistry
from .synchronizer import StateSynchronizer

logger = logging.getLogger(__name__)

MISSING_TEMPERATURE = "missing_temperature_parameter"

# what the host hands to a capability handler
DeviceArg = DeviceData | Mapping[str, Any] | BaseException


class _Capability:
    def __init__(
        self, registry: DeviceRegistry, synchronizer: StateSynchronizer
    ) -> None:
        self._registry = registry
        self._synchronizer = synchronizer

    def _lookup(self, device_data: DeviceArg) -> DeviceRecord:
        if isinstance(device_data, BaseException):
            raise device_data
        data = as_device_data(device_data)
        record = self._registry.lookup(data.id)
        if record is None:
            raise DeviceNotFoundError(data.id)
        return record

    async def _refreshed(self, device_data: DeviceArg) -> DeviceRecord:
        record = self._lookup(device_data)
        await self._synchronizer.refresh(record.data)
        # look up again, the device may be gone by now
        return self._lookup(device_data)


class MeasureTemperature(_Capability):
    async def get(self, device_data: DeviceArg) -> float | None:
        record = await self._refreshed(device_data)
        return record.state.measure_temperature


class TargetTemperature(_Capability):
    def __init__(
        self,
        registry: DeviceRegistry,
        synchronizer: StateSynchronizer,
        config: DriverConfig,
    ) -> None:
        super().__init__(registry, synchronizer)
        self._config = config

    async def get(self, device_data: DeviceArg) -> float | None:
        record = await self._refreshed(device_data)
        return record.state.target_temperature

    async def set(
        self, device_data: DeviceArg, temperature: float | None
    ) -> float:
        """Send a new set point and return the clamped (unrounded) value."""
        record = self._lookup(device_data)
        if temperature is None:
            raise MissingParameterError(MISSING_TEMPERATURE)

        temperature = clamp(
            temperature, self._config.min_temperature, self._config.max_temperature
        )

        if record.name is None:
            # names are only learnt from the hub, e.g. after a restart
            record = await self._refreshed(device_data)
            if record.name is None:
                raise DeviceNotFoundError(record.id)

        bridge = self._registry.bridge
        if bridge is None:
            raise TemperatureCommandError("No hub connection", temperature)

        try:
            await bridge.set_temperature(int(round_half_up(temperature)), record.name)
        except BridgeError as exc:
            logger.warning("Setting %s to %s failed: %s", record.name, temperature, exc)
            raise TemperatureCommandError(str(exc), temperature) from exc
        return temperature
