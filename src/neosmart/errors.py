"""Exceptions raised by the neoHub driver."""

from __future__ import annotations


class NeoSmartError(Exception):
    """Base class for driver errors."""


class DeviceNotFoundError(NeoSmartError):
    """The device is not registered with the driver."""

    def __init__(self, device_id: str) -> None:
        super().__init__(f"Device {device_id!r} is not registered")
        self.device_id = device_id


class MissingParameterError(NeoSmartError):
    """A required capability value was not supplied."""

    def __init__(self, code: str) -> None:
        super().__init__(code)
        self.code = code


class BridgeError(NeoSmartError):
    """The hub could not be reached or rejected a command."""


class TemperatureCommandError(BridgeError):
    """A set-temperature command failed; carries the requested temperature."""

    def __init__(self, message: str, temperature: float) -> None:
        super().__init__(message)
        self.temperature = temperature
