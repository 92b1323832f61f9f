"""
Registry Configuration

Environment-based configuration for the registry service.
Command line flags override environment values in main.py.
"""

import os
from dataclasses import dataclass, replace
from typing import Any

from temp_file_registry.domain.errors import ConfigurationError

MB = 1 << 20

# Log verbosity levels accepted by --log-level
LOG_LEVEL_PANIC = 0
LOG_LEVEL_INFO = 1
LOG_LEVEL_DEBUG = 2


@dataclass(frozen=True)
class RegistryConfig:
    """
    Registry configuration, fixed at process start.

    Attributes:
        port: Listen port
        host: Listen address
        default_expiration_minutes: Expiry applied when uploads send none
        max_file_size_mb: Maximum upload body size in megabytes
        log_level: 0 (panic), 1 (info) or 2 (debug)
        sweep_interval_seconds: Delay between reaper sweeps
        reaper_enabled: Start the reaper thread with the app
    """

    port: int = 8888
    host: str = "0.0.0.0"
    default_expiration_minutes: int = 10
    max_file_size_mb: int = 1024
    log_level: int = LOG_LEVEL_DEBUG
    sweep_interval_seconds: float = 60.0
    reaper_enabled: bool = True

    def __post_init__(self):
        self.validate()

    @classmethod
    def from_env(cls) -> 'RegistryConfig':
        """
        Load configuration from environment variables.

        Returns:
            RegistryConfig instance with loaded configuration

        Raises:
            ConfigurationError: If a numeric variable cannot be parsed
        """
        defaults = cls()
        return cls(
            port=_env_int('TFR_PORT', defaults.port),
            host=os.getenv('TFR_HOST', defaults.host),
            default_expiration_minutes=_env_int(
                'TFR_EXPIRATION_MINUTES', defaults.default_expiration_minutes
            ),
            max_file_size_mb=_env_int('TFR_MAX_FILE_SIZE_MB', defaults.max_file_size_mb),
            log_level=_env_int('TFR_LOG_LEVEL', defaults.log_level),
            sweep_interval_seconds=_env_float(
                'TFR_SWEEP_INTERVAL_SECONDS', defaults.sweep_interval_seconds
            ),
            reaper_enabled=os.getenv('TFR_REAPER_ENABLED', 'true').lower() == 'true',
        )

    def with_overrides(self, **overrides: Any) -> 'RegistryConfig':
        """Return a copy with every non-None override applied."""
        changes = {name: value for name, value in overrides.items() if value is not None}
        return replace(self, **changes)

    @property
    def max_content_length(self) -> int:
        """Maximum request body size in bytes."""
        return self.max_file_size_mb * MB

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ConfigurationError: If any value is out of range
        """
        if not 1 <= self.port <= 65535:
            raise ConfigurationError(f"port must be between 1 and 65535, got {self.port}")
        if self.max_file_size_mb <= 0:
            raise ConfigurationError(
                f"max_file_size_mb must be positive, got {self.max_file_size_mb}"
            )
        if self.log_level not in (LOG_LEVEL_PANIC, LOG_LEVEL_INFO, LOG_LEVEL_DEBUG):
            raise ConfigurationError(f"log_level must be 0, 1 or 2, got {self.log_level}")
        if self.sweep_interval_seconds <= 0:
            raise ConfigurationError(
                f"sweep_interval_seconds must be positive, got {self.sweep_interval_seconds}"
            )


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == '':
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}", e)


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == '':
        return default
    try:
        return float(value)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {value!r}", e)
