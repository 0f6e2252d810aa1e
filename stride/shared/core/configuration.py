"""
Configuration Management System for Stride

This module provides a centralized configuration system that supports a 4-tier
precedence hierarchy: environment → project → user → system defaults.
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from stride.shared.config import SETTINGS_DIR

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

SortOrderName = Literal["givenName", "familyName", "none", "userDefault"]
ReloadPolicy = Literal["skip_if_loaded", "rebuild"]


class ValidationLevel(Enum):
    """Configuration validation strictness levels"""
    STRICT = "strict"      # Fail fast on validation errors
    LENIENT = "lenient"    # Log warnings, use defaults


class RosterConfig(BaseModel):
    """Contact picker and team selection settings"""
    model_config = ConfigDict(extra='forbid')

    max_selection: int = Field(default=11, ge=1, le=100, description="Team size limit")
    default_sort_order: SortOrderName = Field(default="familyName", description="Name used for bucketing")
    reload_policy: ReloadPolicy = Field(
        default="skip_if_loaded",
        description="What reloading a populated friend list does",
    )


class SessionConfig(BaseModel):
    """Launch and session settings"""
    model_config = ConfigDict(extra='forbid')

    health_check_enabled: bool = Field(default=True, description="Probe the backend once at launch")


class ServiceConfig(BaseModel):
    """Backend service endpoints"""
    model_config = ConfigDict(extra='forbid')

    base_url: str = Field(default="http://localhost:8080", description="Backend base URL")
    health_path: str = Field(default="/health", description="Reachability probe path")
    participants_path: str = Field(default="/participants", description="Participant creation path")
    timeout: float = Field(default=10.0, ge=0.5, le=120.0, description="Request timeout (seconds)")


class LoggingConfig(BaseModel):
    """Logging settings"""
    model_config = ConfigDict(extra='forbid')

    level: str = Field(default="INFO", description="File log level")
    console_level: str = Field(default="WARNING", description="Console log level")
    log_dir: str = Field(default="data/logs", description="Directory for rotating log files")

    @field_validator("level", "console_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level: {value}")
        return value


class SystemConfig(BaseModel):
    """Complete system configuration"""
    model_config = ConfigDict(extra='forbid')

    roster: RosterConfig = Field(default_factory=RosterConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    service: ServiceConfig = Field(default_factory=ServiceConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # Metadata
    schema_version: int = Field(default=1, description="Configuration schema version")


# env var -> (section, key, converter)
_ENV_MAP = {
    'STRIDE_MAX_SELECTION': ('roster', 'max_selection', int),
    'STRIDE_SORT_ORDER': ('roster', 'default_sort_order', str),
    'STRIDE_RELOAD_POLICY': ('roster', 'reload_policy', str),
    'STRIDE_HEALTH_CHECK_ENABLED': ('session', 'health_check_enabled', bool),
    'STRIDE_API_BASE_URL': ('service', 'base_url', str),
    'STRIDE_API_TIMEOUT': ('service', 'timeout', float),
    'LOG_LEVEL': ('logging', 'level', str),
}


class ConfigManager:
    """Centralized configuration manager with 4-tier precedence hierarchy"""

    def __init__(self, project_root: Optional[Path] = None):
        # Without an explicit root, read the settings shipped inside the package
        self.project_root = project_root or Path.cwd()
        if project_root is None:
            self.config_dir = SETTINGS_DIR
        else:
            self.config_dir = project_root / "stride" / "shared" / "config" / "settings"
        self._system_config: Optional[SystemConfig] = None
        self._user_config: Optional[Dict[str, Any]] = None
        self._project_config: Optional[Dict[str, Any]] = None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load YAML configuration file"""
        if not file_path.exists():
            return {}

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.warning(f"Failed to load {file_path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring {file_path}: top level is not a mapping")
            return {}
        return data

    def _save_yaml_file(self, file_path: Path, data: Dict[str, Any]) -> bool:
        """Save configuration to YAML file"""
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, 'w', encoding='utf-8') as f:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False, indent=2)
            return True
        except OSError as e:
            logger.error(f"Failed to save {file_path}: {e}")
            return False

    def _load_system_defaults(self) -> SystemConfig:
        """Load system default configuration"""
        if self._system_config is None:
            defaults_dict = self._load_yaml_file(self.config_dir / "defaults.yaml")

            try:
                self._system_config = SystemConfig(**defaults_dict)
            except ValidationError as e:
                logger.warning(f"System defaults validation failed: {e}")
                self._system_config = SystemConfig()

        return self._system_config

    def _load_user_config(self) -> Dict[str, Any]:
        """Load user-level configuration"""
        if self._user_config is None:
            self._user_config = self._load_yaml_file(self.config_dir / "user.yaml")
        return self._user_config

    def _load_project_config(self) -> Dict[str, Any]:
        """Load project-specific configuration"""
        if self._project_config is None:
            self._project_config = self._load_yaml_file(self.config_dir / "project.yaml")
        return self._project_config

    def _merge_configs(self) -> Dict[str, Any]:
        """Merge configurations with precedence: env → project → user → system"""
        merged = self._load_system_defaults().model_dump()
        self._deep_merge(merged, self._load_user_config())
        self._deep_merge(merged, self._load_project_config())
        self._deep_merge(merged, self._get_env_overrides())
        return merged

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
        for env_key, (section, config_key, convert) in _ENV_MAP.items():
            value = os.getenv(env_key)
            if value is None:
                continue

            if convert is bool:
                converted: Any = value.lower() in ('true', '1', 'yes', 'on')
            else:
                try:
                    converted = convert(value)
                except ValueError:
                    logger.warning(f"Ignoring {env_key}={value!r}: not a valid {convert.__name__}")
                    continue

            overrides.setdefault(section, {})[config_key] = converted

        return overrides

    def get_config(self, validation_level: ValidationLevel = ValidationLevel.STRICT) -> SystemConfig:
        """Get merged configuration with validation"""
        merged_config = self._merge_configs()

        try:
            return SystemConfig(**merged_config)
        except ValidationError as e:
            if validation_level == ValidationLevel.STRICT:
                raise ConfigurationError(f"Configuration validation failed: {e}") from e
            logger.warning(f"Configuration validation failed, using defaults: {e}")
            return SystemConfig()

    def save_project_config(self, config_updates: Dict[str, Any]) -> bool:
        """Save project-specific configuration updates"""
        project_path = self.config_dir / "project.yaml"

        existing_config = self._load_yaml_file(project_path)
        self._deep_merge(existing_config, config_updates)

        success = self._save_yaml_file(project_path, existing_config)
        if success:
            # Force reload on next read
            self._project_config = None

        return success

    def reload_config(self) -> None:
        """Clear cached configurations and reload from files"""
        self._system_config = None
        self._user_config = None
        self._project_config = None


# Global instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(project_root: Optional[Path] = None) -> ConfigManager:
    """Get global configuration manager instance"""
    global _config_manager
    if _config_manager is None or project_root is not None:
        _config_manager = ConfigManager(project_root)
    return _config_manager


def get_config(validation_level: ValidationLevel = ValidationLevel.STRICT) -> SystemConfig:
    """Get current system configuration"""
    return get_config_manager().get_config(validation_level)
