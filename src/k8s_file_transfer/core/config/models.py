"""Application configuration models."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

# XDG-compliant config location
CONFIG_DIR = Path.home() / ".config" / "kft"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

STATE_DIR = Path.home() / ".local" / "state" / "kft"
HISTORY_FILE = STATE_DIR / "history.json"


class ConfigError(Exception):
    """Raised when the configuration file cannot be read or validated."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.message} ({self.path})"
        return self.message


class KubectlConfig(BaseModel):
    """Settings for invoking the kubectl binary."""

    model_config = ConfigDict(extra="forbid")

    binary: str | None = None
    discovery_timeout: int = 30
    transfer_timeout: int = 3600
    retry_attempts: int = 3

    @field_validator("discovery_timeout", "transfer_timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @field_validator("retry_attempts")
    @classmethod
    def validate_retry_attempts(cls, v: int) -> int:
        """Validate retry_attempts is at least one attempt."""
        if v < 1:
            raise ValueError("retry_attempts must be at least 1")
        return v


class DefaultsConfig(BaseModel):
    """Default target used when a command does not name one."""

    model_config = ConfigDict(extra="forbid")

    context: str | None = None
    namespace: str | None = None
    pod_path: str = "/tmp"


class HistoryConfig(BaseModel):
    """Transfer history settings."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    max_entries: int = 50

    @field_validator("max_entries")
    @classmethod
    def validate_max_entries(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("max_entries must be positive")
        return v


class AppConfig(BaseModel):
    """Complete application configuration."""

    model_config = ConfigDict(extra="forbid")

    kubectl: KubectlConfig = KubectlConfig()
    defaults: DefaultsConfig = DefaultsConfig()
    history: HistoryConfig = HistoryConfig()
    output_format: Literal["table", "json", "yaml"] = "table"

    @classmethod
    def from_env(cls, base_config: dict[str, Any] | None = None) -> AppConfig:
        """Create configuration with environment variable overrides.

        Environment variables take precedence over base_config values.

        Supported environment variables:
            KFT_KUBECTL: Path to the kubectl binary
            KFT_CONTEXT: Default kubectl context
            KFT_NAMESPACE: Default namespace
            KFT_TRANSFER_TIMEOUT: Transfer timeout in seconds
            KFT_OUTPUT: Output format (table, json, yaml)
        """
        config_dict = dict(base_config) if base_config else {}
        kubectl = dict(config_dict.get("kubectl") or {})
        defaults = dict(config_dict.get("defaults") or {})

        if binary := os.environ.get("KFT_KUBECTL"):
            kubectl["binary"] = binary

        if context := os.environ.get("KFT_CONTEXT"):
            defaults["context"] = context

        if namespace := os.environ.get("KFT_NAMESPACE"):
            defaults["namespace"] = namespace

        if timeout := os.environ.get("KFT_TRANSFER_TIMEOUT"):
            kubectl["transfer_timeout"] = int(timeout)

        if output_format := os.environ.get("KFT_OUTPUT"):
            config_dict["output_format"] = output_format

        config_dict["kubectl"] = kubectl
        config_dict["defaults"] = defaults
        return cls.model_validate(config_dict)

    def to_yaml(self) -> str:
        """Serialize the configuration as YAML."""
        return yaml.safe_dump(self.model_dump(), default_flow_style=False, sort_keys=False)


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from YAML with environment overrides.

    A missing file yields the defaults.

    Args:
        path: Config file location. Defaults to ``CONFIG_FILE``.

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If the file is not valid YAML or fails validation.
    """
    config_path = path or CONFIG_FILE
    data: dict[str, Any] = {}

    if config_path.exists():
        try:
            loaded = yaml.safe_load(config_path.read_text())
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in configuration: {e}", path=config_path) from e
        if loaded is not None and not isinstance(loaded, dict):
            raise ConfigError("Configuration must be a mapping", path=config_path)
        data = loaded or {}

    try:
        return AppConfig.from_env(data)
    except (ValidationError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}", path=config_path) from e
