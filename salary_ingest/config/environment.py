"""Environment variable overrides."""

import os
from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class EnvironmentConfig:
    """Settings that come from the process environment rather than YAML."""

    environment: str = "local"
    log_level: Optional[str] = None
    user_agent: Optional[str] = None


def load_environment_config() -> EnvironmentConfig:
    """Read and validate the optional environment overrides.

    Variables:
        ENVIRONMENT: Label stamped on every log record (default "local")
        LOG_LEVEL: Overrides logging.level from the config file
        USER_AGENT: Overrides advanced.user_agent for source requests

    Raises:
        ConfigurationError: If LOG_LEVEL is set to an unknown level
    """
    environment = os.getenv("ENVIRONMENT", "").strip() or "local"
    log_level = os.getenv("LOG_LEVEL", "").strip() or None
    user_agent = os.getenv("USER_AGENT", "").strip() or None

    if log_level and log_level.upper() not in VALID_LOG_LEVELS:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=[
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            ],
            suggestions=["Unset LOG_LEVEL or use one of the listed levels"],
        )

    return EnvironmentConfig(
        environment=environment,
        log_level=log_level.upper() if log_level else None,
        user_agent=user_agent,
    )
