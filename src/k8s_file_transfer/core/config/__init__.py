"""Configuration management with Pydantic validation."""

from k8s_file_transfer.core.config.models import (
    CONFIG_DIR,
    CONFIG_FILE,
    HISTORY_FILE,
    AppConfig,
    ConfigError,
    DefaultsConfig,
    HistoryConfig,
    KubectlConfig,
    load_config,
)

__all__ = [
    "CONFIG_DIR",
    "CONFIG_FILE",
    "HISTORY_FILE",
    "AppConfig",
    "ConfigError",
    "DefaultsConfig",
    "HistoryConfig",
    "KubectlConfig",
    "load_config",
]
