"""
Configuration Management for AppShell

Settings are merged with a 3-tier precedence hierarchy:
environment → YAML file → system defaults.
"""

import logging
import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional, Union
from pydantic import BaseModel, Field, ConfigDict, ValidationError
from enum import Enum

logger = logging.getLogger(__name__)

# Opened when nothing else says where to go.
DEFAULT_URL = "https://meet.jit.si"


class ValidationLevel(Enum):
    """Configuration validation strictness levels"""
    STRICT = "strict"      # Fail fast on validation errors
    LENIENT = "lenient"    # Log warnings, use defaults


class AppConfig(BaseModel):
    """Navigation and container assembly"""
    model_config = ConfigDict(extra='forbid')

    default_url: str = Field(default=DEFAULT_URL, description="Fallback URL opened when nothing else applies")
    expose_legacy_store: bool = Field(default=False, description="Publish the container to a ContainerLocator")
    devtools: bool = Field(default=False, description="Install the action-logging inspection hook")


class StorageConfig(BaseModel):
    """Persistent storage"""
    model_config = ConfigDict(extra='forbid')

    path: Optional[str] = Field(default=None, description="JSON storage file; in-memory when unset")


class LoggingConfig(BaseModel):
    """Log output"""
    model_config = ConfigDict(extra='forbid')

    level: str = Field(default="DEBUG", description="File log level")
    file: str = Field(default="data/logs/appshell.log", description="Rotating log file path")
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024)
    backup_count: int = Field(default=5, ge=0, le=100)


class ShellConfig(BaseModel):
    """Complete shell configuration"""
    model_config = ConfigDict(extra='forbid')

    app: AppConfig = Field(default_factory=AppConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    schema_version: int = Field(default=1, description="Configuration schema version")


class ConfigManager:
    """Configuration loader with environment → file → defaults precedence"""

    ENV_MAP = {
        'APPSHELL_DEFAULT_URL': ('app', 'default_url'),
        'APPSHELL_EXPOSE_LEGACY_STORE': ('app', 'expose_legacy_store'),
        'APPSHELL_DEVTOOLS': ('app', 'devtools'),
        'APPSHELL_STORAGE_PATH': ('storage', 'path'),
        'LOG_LEVEL': ('logging', 'level'),
        'APPSHELL_LOG_FILE': ('logging', 'file'),
    }
    BOOLEAN_KEYS = {'expose_legacy_store', 'devtools'}

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        self.config_path = Path(config_path) if config_path else None
        self._file_config: Optional[Dict[str, Any]] = None

    def _load_yaml_file(self, file_path: Optional[Path]) -> Dict[str, Any]:
        """Load YAML configuration file"""
        if file_path is None or not file_path.exists():
            return {}

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.warning(f"Failed to load {file_path}: {e}")
            return {}

    def _load_file_config(self) -> Dict[str, Any]:
        if self._file_config is None:
            self._file_config = self._load_yaml_file(self.config_path)
        return self._file_config

    def _deep_merge(self, base: Dict[str, Any], updates: Dict[str, Any]) -> None:
        """Deep merge configuration dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _get_env_overrides(self) -> Dict[str, Any]:
        """Extract configuration overrides from environment variables"""
        overrides: Dict[str, Any] = {}
        for env_key, (section, config_key) in self.ENV_MAP.items():
            value = os.getenv(env_key)
            if value is None:
                continue
            if config_key in self.BOOLEAN_KEYS:
                overrides.setdefault(section, {})[config_key] = value.lower() in ('true', '1', 'yes', 'on')
            else:
                overrides.setdefault(section, {})[config_key] = value
        return overrides

    def _merge_configs(self) -> Dict[str, Any]:
        """Merge configurations with precedence: env → file → defaults"""
        merged = ShellConfig().model_dump()
        self._deep_merge(merged, self._load_file_config())
        self._deep_merge(merged, self._get_env_overrides())
        return merged

    def get_config(self, validation_level: ValidationLevel = ValidationLevel.STRICT) -> ShellConfig:
        """Get merged configuration with validation"""
        merged_config = self._merge_configs()

        try:
            return ShellConfig(**merged_config)
        except ValidationError as e:
            if validation_level == ValidationLevel.STRICT:
                raise ValueError(f"Configuration validation failed: {e}")
            logger.warning(f"Configuration validation failed, using defaults: {e}")
            return ShellConfig()


def get_config(
    config_path: Optional[Union[str, Path]] = None,
    validation_level: ValidationLevel = ValidationLevel.STRICT,
) -> ShellConfig:
    """Load configuration from ``config_path`` and the environment"""
    return ConfigManager(config_path).get_config(validation_level)
