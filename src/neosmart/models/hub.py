from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class HubDevice(BaseModel):
    """One zone as reported by the hub INFO command."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(alias="device")
    type_code: str = Field(alias="DEVICE_TYPE")
    set_temperature: float = Field(alias="CURRENT_SET_TEMPERATURE")
    current_temperature: float = Field(alias="CURRENT_TEMPERATURE")

    # the hub reports DEVICE_TYPE as a number
    @field_validator("type_code", mode="before")
    @classmethod
    def _type_code_to_str(cls, value: object) -> object:
        if isinstance(value, bool):
            return value
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, (int, float)):
            return str(value)
        return value


class HubInfo(BaseModel):
    """INFO response; entries stay raw so one odd zone cannot spoil the rest."""

    model_config = ConfigDict(extra="ignore")

    devices: list[Any]

    def hub_devices(self) -> list[HubDevice]:
        parsed: list[HubDevice] = []
        for entry in self.devices:
            try:
                parsed.append(HubDevice.model_validate(entry))
            except ValidationError as exc:
                name = entry.get("device") if isinstance(entry, dict) else entry
                logger.debug("Skipping hub entry %r: %s", name, exc)
        return parsed


class DiscoveredHub(BaseModel):
    model_config = ConfigDict(extra="forbid")

    host: str
    port: int
    devices: list[HubDevice] = Field(default_factory=list)
