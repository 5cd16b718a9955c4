"""Configuration management for error_enhanced."""

from __future__ import annotations

import os
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from error_enhanced.core.exceptions.base import ConfigurationError
from error_enhanced.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".error_enhanced" / "config.toml"


@dataclass
class SerializationConfig:
    """Serializer defaults."""

    csv_delimiter: str = ","
    csv_quoted: bool = True
    json_indent: int | None = None
    xml_indent: str = "  "


@dataclass
class ApplicationStateConfig:
    """Application state capture and dependency discovery."""

    event_history_capacity: int = 10
    dependency_cache_ttl: int = 300
    package_managers: list[str] = field(default_factory=lambda: ["uv", "pip", "poetry"])
    command_timeout: int = 30
    environment_variable: str = "APP_ENV"


@dataclass
class StackCacheConfig:
    """Shared traceback parse cache."""

    max_size: int = 1024


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    file: str | None = None


@dataclass
class EnhancedErrorConfig:
    """Top-level configuration."""

    serialization: SerializationConfig = field(default_factory=SerializationConfig)
    application_state: ApplicationStateConfig = field(default_factory=ApplicationStateConfig)
    stack_cache: StackCacheConfig = field(default_factory=StackCacheConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> EnhancedErrorConfig:
        """Build a configuration from a nested dictionary."""
        return cls(
            serialization=SerializationConfig(**config_dict.get("serialization", {})),
            application_state=ApplicationStateConfig(**config_dict.get("application_state", {})),
            stack_cache=StackCacheConfig(**config_dict.get("stack_cache", {})),
            logging=LoggingConfig(**config_dict.get("logging", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a nested dictionary (``None`` values dropped for TOML)."""
        return {
            "serialization": _drop_none(asdict(self.serialization)),
            "application_state": _drop_none(asdict(self.application_state)),
            "stack_cache": _drop_none(asdict(self.stack_cache)),
            "logging": _drop_none(asdict(self.logging)),
        }


def _drop_none(section: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in section.items() if value is not None}


class ConfigManager:
    """Loads, updates and persists :class:`EnhancedErrorConfig`."""

    def __init__(self, config_path: Path | None = None, *, apply_env: bool = True):
        """Initialise the manager.

        Args:
            config_path: TOML file to read; defaults to ``~/.error_enhanced/config.toml``.
            apply_env: Whether ``ERROR_ENHANCED_*`` variables override the file.
        """
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self.apply_env = apply_env
        self.config = self._load_config()

    def _load_config(self) -> EnhancedErrorConfig:
        config_dict: dict[str, Any] = {}
        if self.config_path.exists():
            try:
                with open(self.config_path, "rb") as f:
                    config_dict = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                logger.warning("Failed to load config from {path}: {error}", path=str(self.config_path), error=str(e))
                config_dict = {}

        if self.apply_env:
            config_dict = _deep_update(config_dict, load_config_from_env())

        try:
            return EnhancedErrorConfig.from_dict(config_dict)
        except TypeError as e:
            logger.warning("Ignoring invalid configuration: {error}", error=str(e))
            return EnhancedErrorConfig()

    def get_config(self) -> EnhancedErrorConfig:
        """Return the current configuration."""
        return self.config

    def update_config(self, **updates: Any) -> None:
        """Deep-merge ``updates`` into the current configuration."""
        config_dict = _deep_update(self.config.to_dict(), updates)
        self.config = EnhancedErrorConfig.from_dict(config_dict)

    def save_config(self) -> None:
        """Write the configuration to :attr:`config_path`.

        Raises:
            ConfigurationError: The file could not be written.
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "wb") as f:
                tomli_w.dump(self.config.to_dict(), f)
        except OSError as e:
            raise ConfigurationError(
                f"Failed to save config to {self.config_path}: {e}", source=str(self.config_path)
            ) from e


def _deep_update(d: dict[str, Any], u: dict[str, Any]) -> dict[str, Any]:
    for k, v in u.items():
        if isinstance(v, dict):
            d[k] = _deep_update(dict(d.get(k, {})), v)
        else:
            d[k] = v
    return d


def load_config_from_env() -> dict[str, Any]:
    """Read ``ERROR_ENHANCED_*`` environment overrides."""
    config: dict[str, Any] = {}

    serialization: dict[str, Any] = {}
    csv_delimiter = os.getenv("ERROR_ENHANCED_CSV_DELIMITER")
    if csv_delimiter is not None:
        serialization["csv_delimiter"] = csv_delimiter
    csv_quoted = os.getenv("ERROR_ENHANCED_CSV_QUOTED")
    if csv_quoted is not None:
        serialization["csv_quoted"] = csv_quoted.lower() == "true"
    json_indent = os.getenv("ERROR_ENHANCED_JSON_INDENT")
    if json_indent is not None:
        serialization["json_indent"] = int(json_indent)
    if serialization:
        config["serialization"] = serialization

    application_state: dict[str, Any] = {}
    history_capacity = os.getenv("ERROR_ENHANCED_EVENT_HISTORY_CAPACITY")
    if history_capacity is not None:
        application_state["event_history_capacity"] = int(history_capacity)
    cache_ttl = os.getenv("ERROR_ENHANCED_DEPENDENCY_CACHE_TTL")
    if cache_ttl is not None:
        application_state["dependency_cache_ttl"] = int(cache_ttl)
    package_managers = os.getenv("ERROR_ENHANCED_PACKAGE_MANAGERS")
    if package_managers is not None:
        application_state["package_managers"] = [name.strip() for name in package_managers.split(",") if name.strip()]
    command_timeout = os.getenv("ERROR_ENHANCED_COMMAND_TIMEOUT")
    if command_timeout is not None:
        application_state["command_timeout"] = int(command_timeout)
    if application_state:
        config["application_state"] = application_state

    stack_cache_size = os.getenv("ERROR_ENHANCED_STACK_CACHE_SIZE")
    if stack_cache_size is not None:
        config["stack_cache"] = {"max_size": int(stack_cache_size)}

    logging_config: dict[str, Any] = {}
    logging_level = os.getenv("ERROR_ENHANCED_LOGGING_LEVEL")
    if logging_level is not None:
        logging_config["level"] = logging_level
    logging_file = os.getenv("ERROR_ENHANCED_LOGGING_FILE")
    if logging_file is not None:
        logging_config["file"] = logging_file
    if logging_config:
        config["logging"] = logging_config

    return config


_config_manager: ConfigManager | None = None


def get_config_manager() -> ConfigManager:
    """Return the process-wide configuration manager."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def get_config() -> EnhancedErrorConfig:
    """Return the process-wide configuration."""
    return get_config_manager().get_config()


def reset_config() -> None:
    """Drop the cached manager so the next access reloads configuration."""
    global _config_manager
    _config_manager = None
