"""Tests for FlashSettings and config file loading."""

import logging
from pathlib import Path

import pytest
import yaml

from glove80_flash.config.settings import (
    FlashSettings,
    generate_config_paths,
    load_settings,
    read_config_file,
)
from glove80_flash.core.errors import ConfigError
from glove80_flash.models.half import HalfName


def write_yaml(path: Path, data: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


class TestLoadSettings:
    def test_defaults_without_files(self, isolated_env):
        settings = load_settings()

        assert settings.device_timeout == 60
        assert settings.log_level == "WARNING"
        assert settings.get_log_level_int() == logging.WARNING

    def test_project_file_is_found(self, isolated_env):
        write_yaml(isolated_env / "glove80-flash.yaml", {"device_timeout": 90})

        assert load_settings().device_timeout == 90

    def test_hidden_project_file_is_found(self, isolated_env):
        write_yaml(isolated_env / ".glove80-flash.yml", {"poll_interval": 0.5})

        assert load_settings().poll_interval == 0.5

    def test_xdg_file_is_found(self, isolated_env, tmp_path):
        write_yaml(tmp_path / "xdg" / "glove80-flash" / "config.yaml", {"settle_delay": 1})

        assert load_settings().settle_delay == 1

    def test_first_file_wins(self, isolated_env, tmp_path):
        write_yaml(isolated_env / "glove80-flash.yaml", {"device_timeout": 90})
        write_yaml(
            tmp_path / "xdg" / "glove80-flash" / "config.yaml", {"device_timeout": 30}
        )

        assert load_settings().device_timeout == 90

    def test_explicit_file_beats_project_file(self, isolated_env, tmp_path):
        write_yaml(isolated_env / "glove80-flash.yaml", {"device_timeout": 90})
        explicit = write_yaml(tmp_path / "custom.yaml", {"device_timeout": 15})

        assert load_settings(explicit).device_timeout == 15

    def test_missing_explicit_file(self, isolated_env):
        with pytest.raises(ConfigError, match="Config file not found"):
            load_settings("does-not-exist.yaml")

    def test_environment_beats_file(self, isolated_env, monkeypatch):
        write_yaml(isolated_env / "glove80-flash.yaml", {"device_timeout": 90})
        monkeypatch.setenv("GLOVE80_FLASH_DEVICE_TIMEOUT", "45")

        assert load_settings().device_timeout == 45

    def test_invalid_value(self, isolated_env):
        write_yaml(isolated_env / "glove80-flash.yaml", {"poll_interval": 0})

        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_settings()

    def test_unknown_key(self, isolated_env):
        write_yaml(isolated_env / "glove80-flash.yaml", {"pol_interval": 1})

        with pytest.raises(ConfigError):
            load_settings()

    def test_halves_can_be_configured(self, isolated_env):
        write_yaml(
            isolated_env / "glove80-flash.yaml",
            {
                "halves": [
                    {"name": "right", "label": "GLV80RHBOOT"},
                    {"name": "left", "label": "GLV80LHBOOT"},
                ]
            },
        )

        config = load_settings().to_flash_config()

        assert config.get_half(HalfName.LEFT).fallback_label is None


class TestReadConfigFile:
    def test_empty_file_is_empty_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.touch()

        assert read_config_file(path) == {}

    def test_non_mapping_rejected(self, tmp_path):
        path = write_yaml(tmp_path / "config.yaml", ["a", "b"])

        with pytest.raises(ConfigError, match="must contain a mapping"):
            read_config_file(path)

    def test_invalid_yaml_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("device_timeout: [1, 2\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Could not read config file"):
            read_config_file(path)


class TestConfigPaths:
    def test_search_order(self, isolated_env, tmp_path):
        paths = generate_config_paths("custom.yaml")

        assert paths == [
            (isolated_env / "custom.yaml").resolve(),
            isolated_env / "glove80-flash.yaml",
            isolated_env / ".glove80-flash.yml",
            tmp_path / "xdg" / "glove80-flash" / "config.yaml",
            tmp_path / "xdg" / "glove80-flash" / "config.yml",
        ]


class TestToFlashConfig:
    def test_overrides_apply(self, isolated_env):
        config = FlashSettings().to_flash_config(device_timeout=10, poll_interval=1)

        assert config.device_timeout == 10
        assert config.poll_interval == 1

    def test_none_overrides_are_ignored(self, isolated_env):
        config = FlashSettings(device_timeout=90).to_flash_config(device_timeout=None)

        assert config.device_timeout == 90

    def test_invalid_override(self, isolated_env):
        with pytest.raises(ConfigError, match="Invalid flash configuration"):
            FlashSettings().to_flash_config(poll_interval=-1)

    def test_log_level_validated(self, isolated_env):
        assert FlashSettings(log_level="debug").log_level == "DEBUG"
        with pytest.raises(ValueError):
            FlashSettings(log_level="LOUD")
