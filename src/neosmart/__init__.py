"""neosmart - Heatmiser neoHub driver for neoStat thermostats."""

from __future__ import annotations

from importlib.metadata import version

from .config import BridgeConfig, DriverConfig, Settings, get_settings
from .driver import NeoSmartDriver
from .errors import (
    BridgeError,
    DeviceNotFoundError,
    MissingParameterError,
    NeoSmartError,
    TemperatureCommandError,
)
from .models import DeviceData, DeviceDescriptor, HubDevice

__all__ = [
    "BridgeConfig",
    "BridgeError",
    "DeviceData",
    "DeviceDescriptor",
    "DeviceNotFoundError",
    "DriverConfig",
    "HubDevice",
    "MissingParameterError",
    "NeoSmartDriver",
    "NeoSmartError",
    "Settings",
    "TemperatureCommandError",
    "__version__",
    "get_settings",
]

__version__ = version("neosmart")
