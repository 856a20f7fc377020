"""Configuration management for the salary ingestion service."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import build_app_config, load_config, validate_config_file
from .models import (
    AdvancedConfig,
    AppConfig,
    FieldMapping,
    FieldType,
    LogFormat,
    LoggingConfig,
    LogLevel,
    NormalizationConfig,
    SourceConfig,
)
from .sources import DEFAULT_SOURCES, label_pattern

__all__ = [
    # Loader functions
    "build_app_config",
    "load_config",
    "load_environment_config",
    "validate_config_file",
    # Models
    "AdvancedConfig",
    "AppConfig",
    "EnvironmentConfig",
    "FieldMapping",
    "LoggingConfig",
    "NormalizationConfig",
    "SourceConfig",
    # Enums
    "FieldType",
    "LogFormat",
    "LogLevel",
    # Built-in sources
    "DEFAULT_SOURCES",
    "label_pattern",
    # Exceptions
    "ConfigurationError",
]
