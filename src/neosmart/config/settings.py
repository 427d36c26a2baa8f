from __future__ import annotations

import json
import os
import tomllib
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, model_validator

from .paths import default_config_path, expand_path

CONFIG_ENV_VAR = "NEOSMART_CONFIG"


class BridgeConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    port: int = Field(default=4242, ge=1, le=65535)
    timeout: float = Field(default=5.0, gt=0)
    discovery_port: int = Field(default=19790, ge=1, le=65535)
    broadcast_address: str = "255.255.255.255"


class DriverConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    poll_interval: float = Field(default=15.0, gt=0)
    pairing_timeout: float = Field(default=15.0, gt=0)
    min_paired_version: str = "1.1.4"
    min_temperature: float = 5.0
    max_temperature: float = 35.0

    @model_validator(mode="after")
    def _check_temperature_range(self) -> DriverConfig:
        if self.min_temperature > self.max_temperature:
            raise ValueError("min_temperature must not exceed max_temperature")
        return self


class Settings(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    bridge: BridgeConfig = Field(default_factory=BridgeConfig)
    driver: DriverConfig = Field(default_factory=DriverConfig)


def resolve_config_path(allow_missing: bool = False) -> tuple[Path, bool]:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = expand_path(env_path)
        if not allow_missing and not path.exists():
            raise FileNotFoundError(f"{CONFIG_ENV_VAR} points to missing file: {path}")
        return path, path.exists()

    path = default_config_path()
    return path, path.exists()


def load_settings(path: Path) -> Settings:
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in config file: {path}\n{exc}") from exc

    try:
        return Settings.model_validate(data or {})
    except ValidationError as exc:
        raise ValueError(f"Invalid config file: {path}\n{exc}") from exc


@lru_cache
def get_settings() -> Settings:
    path, exists = resolve_config_path(allow_missing=False)
    if exists:
        return load_settings(path)
    return Settings()


def _toml_string(value: str) -> str:
    return json.dumps(value)


def render_settings_toml(settings: Settings) -> str:
    lines = [
        "# neosmart configuration",
        "",
        "[bridge]",
        f"port = {settings.bridge.port}",
        f"timeout = {settings.bridge.timeout}",
        f"discovery_port = {settings.bridge.discovery_port}",
        f"broadcast_address = {_toml_string(settings.bridge.broadcast_address)}",
        "",
        "[driver]",
        f"poll_interval = {settings.driver.poll_interval}",
        f"pairing_timeout = {settings.driver.pairing_timeout}",
        f"min_paired_version = {_toml_string(settings.driver.min_paired_version)}",
        f"min_temperature = {settings.driver.min_temperature}",
        f"max_temperature = {settings.driver.max_temperature}",
        "",
    ]
    return "\n".join(lines)


def write_settings(settings: Settings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_settings_toml(settings))
