"""Configuration management for Tana MCP server."""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from urllib.parse import urlparse

import yaml

DEFAULT_ENDPOINT = "https://europe-west1-tagr-prod.cloudfunctions.net/addToNodeV2"


class ConfigError(Exception):
    """Configuration-related errors."""

    pass


class ConfigParser:
    """Helper class for parsing configuration values."""

    @staticmethod
    def parse_bool(value: str) -> bool:
        """Parse boolean value from string."""
        value_lower = value.lower()
        if value_lower in ("true", "1", "yes"):
            return True
        elif value_lower in ("false", "0", "no"):
            return False
        else:
            raise ConfigError(f"Invalid boolean value: {value}")

    @staticmethod
    def get_env_var(name: str, prefix: str = "TANA_") -> Optional[str]:
        """Get environment variable and strip whitespace."""
        value = os.environ.get(f"{prefix}{name}")
        return value.strip() if value else None


class ConfigValidator:
    """Helper class for configuration validation."""

    @staticmethod
    def validate_token_format(token: Optional[str]) -> None:
        """Validate token format and provide guidance."""
        if not token or not token.strip():
            raise ConfigError(
                "API token is required. Set TANA_API_TOKEN or add 'api_token' to the config file"
            )

        if any(c.isspace() for c in token.strip()):
            raise ConfigError(
                "API token contains whitespace. Ensure it's properly copied from Tana's API token settings"
            )

    @staticmethod
    def validate_endpoint_format(endpoint: str) -> None:
        """Validate that the endpoint is an absolute http(s) URL."""
        if not endpoint or not endpoint.strip():
            raise ConfigError("Endpoint cannot be empty")

        parsed = urlparse(endpoint.strip())
        if parsed.scheme not in ("http", "https"):
            raise ConfigError(
                f"Endpoint must use http or https, got '{endpoint}'"
            )
        if not parsed.netloc:
            raise ConfigError(
                f"Endpoint must include a host name, got '{endpoint}'"
            )


class TanaMCPConfig:
    """Configuration for Tana MCP server."""

    # Default configuration paths for auto-discovery
    DEFAULT_CONFIG_PATHS = [
        Path.home() / ".config" / "tana-mcp" / "config.json",
        Path.home() / ".config" / "tana-mcp" / "config.yaml",
        Path.home() / ".config" / "tana-mcp" / "config.yml",
        Path.cwd() / "tana-mcp.json",
        Path.cwd() / "tana-mcp.yaml",
        Path.cwd() / "tana-mcp.yml",
    ]

    def __init__(
        self,
        api_token: Optional[str] = None,
        endpoint: str = DEFAULT_ENDPOINT,
        tools: Optional[Dict[str, bool]] = None,
    ):
        """Initialize configuration with default values."""
        self.api_token = api_token
        self.endpoint = endpoint
        self.tools = dict(tools) if tools else {}

    @classmethod
    def from_environment(cls, prefix: str = "TANA_") -> "TanaMCPConfig":
        """Load configuration from environment variables."""
        api_token = ConfigParser.get_env_var("API_TOKEN", prefix)
        endpoint = ConfigParser.get_env_var("API_ENDPOINT", prefix) or DEFAULT_ENDPOINT
        return cls(api_token=api_token, endpoint=endpoint)

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> "TanaMCPConfig":
        """Load configuration from a JSON or YAML file."""
        file_path = Path(file_path)

        if not file_path.exists():
            raise ConfigError(f"Configuration file not found: {file_path}")

        try:
            with open(file_path, encoding="utf-8") as f:
                content = f.read()
        except OSError as e:
            raise ConfigError(f"Error reading configuration file {file_path}: {e}")

        if file_path.suffix.lower() == ".json":
            try:
                data = json.loads(content)
            except json.JSONDecodeError as e:
                raise ConfigError(f"Invalid JSON in file {file_path}: {e}")
        elif file_path.suffix.lower() in (".yaml", ".yml"):
            try:
                data = yaml.safe_load(content)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in file {file_path}: {e}")
        else:
            raise ConfigError(
                f"Unsupported file format '{file_path.suffix}' for file {file_path}. Use .json, .yaml, or .yml files."
            )

        if not isinstance(data, dict):
            raise ConfigError(
                f"Configuration file {file_path} must contain a dictionary/object, got {type(data)}"
            )

        try:
            validated_data = cls._validate_file_data(data)
        except ConfigError as e:
            raise ConfigError(f"Error in file {file_path}: {e}")

        return cls(**validated_data)

    @classmethod
    def _validate_file_data(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """Validate and convert data types from configuration file."""
        validated = {}

        if data.get("api_token") is not None:
            if not isinstance(data["api_token"], str):
                raise ConfigError(
                    f"Invalid data type for 'api_token': expected string, got {type(data['api_token'])}"
                )
            validated["api_token"] = data["api_token"].strip()

        if data.get("endpoint") is not None:
            if not isinstance(data["endpoint"], str):
                raise ConfigError(
                    f"Invalid data type for 'endpoint': expected string, got {type(data['endpoint'])}"
                )
            validated["endpoint"] = data["endpoint"].strip()

        if data.get("tools") is not None:
            tools = data["tools"]
            if not isinstance(tools, dict):
                raise ConfigError(
                    f"Invalid data type for 'tools': expected mapping of tool name to boolean, got {type(tools)}"
                )
            validated_tools = {}
            for name, enabled in tools.items():
                if isinstance(enabled, str):
                    enabled = ConfigParser.parse_bool(enabled)
                if not isinstance(enabled, bool):
                    raise ConfigError(
                        f"Invalid value for tool '{name}': expected boolean, got {type(enabled)}"
                    )
                validated_tools[name] = enabled
            validated["tools"] = validated_tools

        return validated

    @classmethod
    def get_default_config_paths(cls) -> List[Path]:
        """Get list of default configuration file paths to search."""
        return cls.DEFAULT_CONFIG_PATHS.copy()

    @classmethod
    def discover_config_file(cls) -> Optional[Path]:
        """Return the first existing default configuration file, if any."""
        for path in cls.get_default_config_paths():
            if path.exists():
                return path
        return None

    @classmethod
    def load(
        cls, config_file: Optional[Union[str, Path]] = None, prefix: str = "TANA_"
    ) -> "TanaMCPConfig":
        """Load configuration from a file and override it with environment variables.

        Priority: environment > config_file (explicit or discovered) > defaults
        """
        if config_file is None:
            config_file = cls.discover_config_file()

        config = cls.from_file(config_file) if config_file else cls()
        env_config = cls.from_environment(prefix=prefix)

        if env_config.api_token:
            config.api_token = env_config.api_token
        if f"{prefix}API_ENDPOINT" in os.environ and env_config.endpoint:
            config.endpoint = env_config.endpoint

        return config

    def validate(self) -> None:
        """Validate configuration and raise ConfigError if invalid."""
        ConfigValidator.validate_token_format(self.api_token)
        ConfigValidator.validate_endpoint_format(self.endpoint)

    @property
    def is_valid(self) -> bool:
        """Check if configuration is valid without raising exceptions."""
        try:
            self.validate()
            return True
        except ConfigError:
            return False

    def is_tool_enabled(self, tool_name: str) -> bool:
        """Tools are enabled unless explicitly disabled."""
        return self.tools.get(tool_name, True)

    def get_enabled_tools(self) -> List[str]:
        return [name for name, enabled in self.tools.items() if enabled]

    def get_disabled_tools(self) -> List[str]:
        return [name for name, enabled in self.tools.items() if not enabled]

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary, hiding sensitive data."""
        return {
            "api_token": "***" if self.api_token else None,
            "endpoint": self.endpoint,
            "tools": dict(self.tools),
        }

    def copy(self, **overrides) -> "TanaMCPConfig":
        """Create a copy of this configuration with optional overrides."""
        current_values = {
            "api_token": self.api_token,
            "endpoint": self.endpoint,
            "tools": dict(self.tools),
        }
        current_values.update(overrides)
        return self.__class__(**current_values)

    def __repr__(self) -> str:
        """String representation, hiding sensitive data."""
        token_display = "***" if self.api_token else None
        return f"TanaMCPConfig(api_token={token_display}, endpoint='{self.endpoint}')"
