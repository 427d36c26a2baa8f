"""Data models for neosmart."""

from neosmart.models.device import DeviceData, DeviceDescriptor, as_device_data
from neosmart.models.hub import DiscoveredHub, HubDevice, HubInfo

__all__ = [
    "DeviceData",
    "DeviceDescriptor",
    "DiscoveredHub",
    "HubDevice",
    "HubInfo",
    "as_device_data",
]
