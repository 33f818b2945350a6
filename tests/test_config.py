"""Tests for configuration management."""

import json
import os
from unittest.mock import patch

import pytest
import yaml

from tana_mcp.config import DEFAULT_ENDPOINT, ConfigError, TanaMCPConfig


class TestConfigEnvironmentVariables:
    """Test configuration loading from environment variables."""

    def test_config_loads_from_environment_variables(self):
        with patch.dict(os.environ, {
            "TANA_API_TOKEN": "  test-token-123  ",
            "TANA_API_ENDPOINT": "https://tana.test/api",
        }):
            config = TanaMCPConfig.from_environment()

            assert config.api_token == "test-token-123"
            assert config.endpoint == "https://tana.test/api"

    def test_config_uses_default_values_when_env_vars_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            config = TanaMCPConfig.from_environment()

            assert config.api_token is None
            assert config.endpoint == DEFAULT_ENDPOINT
            assert config.tools == {}

    def test_config_validates_required_token(self):
        with patch.dict(os.environ, {}, clear=True):
            config = TanaMCPConfig.from_environment()

            with pytest.raises(ConfigError, match="API token is required"):
                config.validate()
            assert config.is_valid is False

    def test_token_with_whitespace_rejected(self):
        config = TanaMCPConfig(api_token="abc def")
        with pytest.raises(ConfigError, match="whitespace"):
            config.validate()

    @pytest.mark.parametrize("endpoint", ["ftp://tana.test", "tana.test/api", "https://"])
    def test_invalid_endpoint_rejected(self, endpoint):
        config = TanaMCPConfig(api_token="token", endpoint=endpoint)
        with pytest.raises(ConfigError, match="Endpoint"):
            config.validate()

    def test_valid_config(self):
        config = TanaMCPConfig(api_token="token")
        config.validate()
        assert config.is_valid is True


class TestConfigFiles:
    """Test configuration loading from JSON and YAML files."""

    def test_json_file(self, tmp_path):
        config_file = tmp_path / "tana-mcp.json"
        config_file.write_text(json.dumps({
            "api_token": "file-token",
            "endpoint": "https://tana.test/api",
            "tools": {"create_file_node": False},
        }))

        config = TanaMCPConfig.from_file(config_file)

        assert config.api_token == "file-token"
        assert config.endpoint == "https://tana.test/api"
        assert config.is_tool_enabled("create_file_node") is False
        assert config.is_tool_enabled("create_plain_node") is True

    def test_yaml_file(self, tmp_path):
        config_file = tmp_path / "tana-mcp.yaml"
        config_file.write_text(yaml.safe_dump({
            "api_token": "file-token",
            "tools": {"set_node_name": "false", "create_field": True},
        }))

        config = TanaMCPConfig.from_file(config_file)

        assert config.endpoint == DEFAULT_ENDPOINT
        assert config.get_disabled_tools() == ["set_node_name"]
        assert config.get_enabled_tools() == ["create_field"]

    def test_file_data_is_not_modified(self):
        data = {"api_token": "file-token", "tools": {"set_node_name": "false"}}

        validated = TanaMCPConfig._validate_file_data(data)

        assert validated["tools"] == {"set_node_name": False}
        assert data["tools"] == {"set_node_name": "false"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            TanaMCPConfig.from_file(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        config_file = tmp_path / "tana-mcp.json"
        config_file.write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            TanaMCPConfig.from_file(config_file)

    def test_unsupported_format(self, tmp_path):
        config_file = tmp_path / "tana-mcp.toml"
        config_file.write_text("api_token = 'x'")
        with pytest.raises(ConfigError, match="Unsupported file format"):
            TanaMCPConfig.from_file(config_file)

    def test_wrong_types(self, tmp_path):
        config_file = tmp_path / "tana-mcp.json"
        config_file.write_text(json.dumps({"api_token": 123}))
        with pytest.raises(ConfigError, match="api_token"):
            TanaMCPConfig.from_file(config_file)

    def test_not_a_mapping(self, tmp_path):
        config_file = tmp_path / "tana-mcp.yaml"
        config_file.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="dictionary"):
            TanaMCPConfig.from_file(config_file)


class TestConfigLoad:
    """Test the combined loader."""

    def test_environment_overrides_file(self, tmp_path):
        config_file = tmp_path / "tana-mcp.json"
        config_file.write_text(json.dumps({
            "api_token": "file-token",
            "endpoint": "https://file.test/api",
        }))

        with patch.dict(os.environ, {"TANA_API_TOKEN": "env-token"}, clear=True):
            config = TanaMCPConfig.load(config_file)

        assert config.api_token == "env-token"
        assert config.endpoint == "https://file.test/api"

    def test_environment_only(self, clean_env, monkeypatch):
        monkeypatch.setattr(TanaMCPConfig, "discover_config_file", classmethod(lambda cls: None))
        monkeypatch.setenv("TANA_API_TOKEN", "env-token")

        config = TanaMCPConfig.load()

        assert config.api_token == "env-token"
        assert config.endpoint == DEFAULT_ENDPOINT


class TestConfigRepresentation:
    """The token never leaks through representations."""

    def test_to_dict_masks_token(self):
        config = TanaMCPConfig(api_token="secret")
        assert config.to_dict()["api_token"] == "***"

    def test_repr_masks_token(self):
        assert "secret" not in repr(TanaMCPConfig(api_token="secret"))

    def test_copy_with_overrides(self):
        config = TanaMCPConfig(api_token="secret", tools={"create_field": False})
        copy = config.copy(endpoint="https://tana.test/api")
        assert copy.api_token == "secret"
        assert copy.endpoint == "https://tana.test/api"
        assert copy.tools == {"create_field": False}
