from __future__ import annotations

import pytest

from neosmart.config import (
    DriverConfig,
    Settings,
    get_settings,
    load_settings,
    resolve_config_path,
    write_settings,
)


def test_defaults_match_driver_constants():
    settings = Settings()
    assert settings.driver.poll_interval == 15.0
    assert settings.driver.pairing_timeout == 15.0
    assert settings.driver.min_paired_version == "1.1.4"
    assert settings.bridge.port == 4242
    assert settings.bridge.discovery_port == 19790


def test_config_roundtrip(tmp_path):
    path = tmp_path / "config.toml"
    write_settings(Settings(driver=DriverConfig(poll_interval=30.0)), path)

    loaded = load_settings(path)
    assert loaded.driver.poll_interval == 30.0
    assert loaded.bridge.port == 4242


def test_invalid_toml_raises_value_error(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[driver\n")
    with pytest.raises(ValueError, match="Invalid TOML"):
        load_settings(path)


def test_unknown_keys_rejected(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[driver]\npoll_every = 3\n")
    with pytest.raises(ValueError, match="Invalid config file"):
        load_settings(path)


def test_inverted_temperature_range_rejected():
    with pytest.raises(ValueError):
        DriverConfig(min_temperature=30, max_temperature=10)


def test_env_var_pointing_to_missing_file(tmp_path, monkeypatch):
    monkeypatch.setenv("NEOSMART_CONFIG", str(tmp_path / "nope.toml"))
    with pytest.raises(FileNotFoundError):
        resolve_config_path()


def test_get_settings_reads_env_file(tmp_path, monkeypatch):
    path = tmp_path / "config.toml"
    write_settings(Settings(driver=DriverConfig(pairing_timeout=5.0)), path)
    monkeypatch.setenv("NEOSMART_CONFIG", str(path))
    get_settings.cache_clear()

    assert get_settings().driver.pairing_timeout == 5.0
