"""Configuration management module."""

from error_enhanced.core.config.settings import (
    ApplicationStateConfig,
    ConfigManager,
    EnhancedErrorConfig,
    LoggingConfig,
    SerializationConfig,
    StackCacheConfig,
    get_config,
    get_config_manager,
    load_config_from_env,
    reset_config,
)

__all__ = [
    "ConfigManager",
    "EnhancedErrorConfig",
    "SerializationConfig",
    "ApplicationStateConfig",
    "StackCacheConfig",
    "LoggingConfig",
    "get_config",
    "get_config_manager",
    "load_config_from_env",
    "reset_config",
]
