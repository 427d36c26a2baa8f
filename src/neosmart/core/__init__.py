from __future__ import annotations

from .capabilities import MeasureTemperature, TargetTemperature
from .identity import decode_device_id, generate_device_id
from .pairing import PairingFlow
from .polling import PollingTask
from .registry import DeviceRecord, DeviceRegistry, DeviceState
from .synchronizer import Host, StateSynchronizer, parse_info

__all__ = [
    "DeviceRecord",
    "DeviceRegistry",
    "DeviceState",
    "Host",
    "MeasureTemperature",
    "PairingFlow",
    "PollingTask",
    "StateSynchronizer",
    "TargetTemperature",
    "decode_device_id",
    "generate_device_id",
    "parse_info",
]
