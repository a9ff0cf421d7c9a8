"""Service settings, read from environment variables."""
import os
from dataclasses import dataclass

from name_analyzer.analyzer import DEFAULT_MAX_LENGTH

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """Invalid environment configuration."""


def _int_env(environ, key, default):
    raw = environ.get(key, default)
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    max_name_length: int = DEFAULT_MAX_LENGTH
    service_name: str = "name-analyzer"

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        environ = os.environ if environ is None else environ

        port = _int_env(environ, "PORT", 8080)
        if not 1 <= port <= 65535:
            raise ConfigError(f"PORT must be between 1 and 65535, got {port}")

        max_name_length = _int_env(environ, "MAX_NAME_LENGTH", DEFAULT_MAX_LENGTH)
        if max_name_length < 1:
            raise ConfigError(
                f"MAX_NAME_LENGTH must be positive, got {max_name_length}"
            )

        log_level = environ.get("LOG_LEVEL", "INFO").upper()
        if log_level not in LOG_LEVELS:
            raise ConfigError(
                f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}"
            )

        return cls(
            host=environ.get("HOST", "0.0.0.0"),
            port=port,
            log_level=log_level,
            max_name_length=max_name_length,
            service_name=environ.get("SERVICE_NAME", "name-analyzer"),
        )
