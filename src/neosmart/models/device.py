from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DeviceData(BaseModel):
    """Device data persisted by the host and handed back on every call."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    bridge_ip: str | None = Field(default=None, alias="bridgeIP")
    paired_with_app_version: str | None = Field(
        default=None, alias="pairedWithAppVersion"
    )


class DeviceDescriptor(BaseModel):
    """Candidate device offered to the host during pairing."""

    model_config = ConfigDict(extra="forbid")

    id: str
    name: str
    data: DeviceData

    def to_host(self) -> dict[str, object]:
        return self.model_dump(by_alias=True, exclude_none=True)


def as_device_data(value: DeviceData | Mapping[str, Any]) -> DeviceData:
    """Accept device data as the host stores it (a plain mapping) or as a model."""
    if isinstance(value, DeviceData):
        return value
    return DeviceData.model_validate(value)
