#!/usr/bin/env python3
"""Tests for the ConfigManager module."""

import pytest
import yaml

from devwatch.core.constants import ErrorCode
from devwatch.infrastructure.config_manager import (
    ConfigError,
    ConfigManager,
    ConfigSource,
)


class TestConfigSource:
    """Tests for ConfigSource enum."""

    def test_precedence_order(self):
        sources = [
            ConfigSource.COMPILED_DEFAULTS,
            ConfigSource.USER_CONFIG,
            ConfigSource.ENVIRONMENT,
            ConfigSource.CLI_ARGS,
            ConfigSource.RUNTIME,
        ]
        for i in range(len(sources) - 1):
            assert sources[i].value < sources[i + 1].value


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_defaults(self):
        config = ConfigManager(environ={})
        assert config.get("devwatch.version") == "1.0"
        assert config.get("devwatch.logging.level") == "INFO"
        assert config.get("devwatch.resources") == []
        assert config.get("devwatch.missing", default=5) == 5

    def test_defaults_not_shared(self):
        first = ConfigManager(environ={})
        first.get_all()["devwatch"]["logging"]["level"] = "ERROR"
        first.get("devwatch.logging")["level"] = "ERROR"
        assert ConfigManager(environ={}).get("devwatch.logging.level") == "INFO"

    def test_load_file(self, config_file):
        config = ConfigManager(str(config_file), environ={})

        assert config.get("devwatch.logging.level") == "DEBUG"
        assert [r["name"] for r in config.get("devwatch.resources")] == ["api", "web"]
        assert config.config_file == config_file
        assert config.config_dir == str(config_file.parent)

    def test_config_dir_defaults_to_cwd(self, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        assert ConfigManager(environ={}).config_dir == str(temp_dir)

    def test_missing_file(self, temp_dir):
        with pytest.raises(ConfigError) as exc_info:
            ConfigManager(str(temp_dir / "nope.yaml"), environ={})
        assert exc_info.value.error_code == ErrorCode.NOT_FOUND

    def test_invalid_yaml(self, temp_dir):
        path = temp_dir / "bad.yaml"
        path.write_text("devwatch: [unclosed\n")
        with pytest.raises(ConfigError, match="YAML parse error") as exc_info:
            ConfigManager(str(path), environ={})
        assert exc_info.value.error_code == ErrorCode.INVALID_INPUT

    def test_non_mapping_yaml(self, temp_dir):
        path = temp_dir / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="Invalid config format"):
            ConfigManager(str(path), environ={})

    def test_environment_overrides_file(self, config_file):
        environ = {
            "DEVWATCH_LOGGING_LEVEL": "WARNING",
            "DEVWATCH_DISPATCH_MAX_WORKERS": "4",
            "OTHER_VAR": "ignored",
        }
        config = ConfigManager(str(config_file), environ=environ)

        assert config.get("devwatch.logging.level") == "WARNING"
        assert config.get("devwatch.dispatch.max_workers") == 4

    def test_env_value_parsing(self):
        config = ConfigManager(environ={})
        assert config._parse_env_value("true") is True
        assert config._parse_env_value("No") is False
        assert config._parse_env_value("1") == 1
        assert config._parse_env_value("2.5") == 2.5
        assert config._parse_env_value("/repo") == "/repo"

    def test_set_precedence(self, config_file):
        config = ConfigManager(str(config_file), environ={"DEVWATCH_LOGGING_LEVEL": "WARNING"})
        config.set("devwatch.logging.level", "ERROR", ConfigSource.CLI_ARGS)
        assert config.get("devwatch.logging.level") == "ERROR"

        config.set("devwatch.logging.level", "INFO")
        assert config.get("devwatch.logging.level") == "INFO"

    def test_section_deep_merges(self, config_file):
        config = ConfigManager(str(config_file), environ={})
        config.set("devwatch.dispatch.max_workers", 3)

        section = config.section()
        assert section["dispatch"]["max_workers"] == 3
        assert section["logging"]["level"] == "DEBUG"
        assert section["logging"]["file"] is None
        assert len(section["resources"]) == 2

    def test_load_dict(self):
        config = ConfigManager(environ={})
        data = {"devwatch": {"base_dir": "/repo"}}
        config.load_dict(data)
        data["devwatch"]["base_dir"] = "/changed"
        assert config.get("devwatch.base_dir") == "/repo"

    def test_yaml_roundtrip_of_sample(self, temp_dir, sample_config):
        path = temp_dir / "devwatch.yaml"
        path.write_text(yaml.safe_dump(sample_config))
        config = ConfigManager(str(path), environ={})
        assert config.section()["resources"] == sample_config["devwatch"]["resources"]
