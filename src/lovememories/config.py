"""Configuration management for LoveMemories application.

This module provides centralized configuration management using environment variables
and Streamlit secrets as fallback. The shared PIN is read once here and never changes
while the process runs.
"""

import os
from pathlib import Path
from typing import Any

try:
    import streamlit as st

    STREAMLIT_AVAILABLE = True
except ImportError:
    STREAMLIT_AVAILABLE = False

from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_PIN = "4079"
DEFAULT_ERROR_DELAY_MS = 800
DEFAULT_MAX_UPLOAD_SIZE = 5 * 1024 * 1024  # 5MB


class Config:
    """Centralized configuration management using environment variables."""

    def __init__(self):
        """Initialize configuration."""
        self._cache = {}

    def get(self, key: str, default: Any = None, cast_type: type = str) -> Any:
        """Get configuration value from environment variables or Streamlit secrets.

        Args:
            key: Configuration key
            default: Default value if not found
            cast_type: Type to cast the value to (str, int, bool, float)

        Returns:
            Configuration value cast to the specified type
        """
        cache_key = f"{key}:{cast_type.__name__}"
        if cache_key in self._cache:
            return self._cache[cache_key]

        value = os.getenv(key)

        # Fallback to Streamlit secrets if available
        if value is None and STREAMLIT_AVAILABLE:
            try:
                value = st.secrets.get(key)
            except Exception:  # nosec B110
                # No secrets.toml or not running inside Streamlit
                pass

        if value is None:
            value = default

        if value is not None:
            try:
                if cast_type is bool:
                    if isinstance(value, str):
                        value = value.lower() in ("true", "1", "yes", "on")  # type: ignore[assignment]
                    else:
                        value = bool(value)  # type: ignore[assignment]
                elif cast_type is not str:
                    value = cast_type(value)
                else:
                    value = str(value)
            except (ValueError, TypeError) as e:
                logger.warning("config_cast_failed", key=key, cast_type=cast_type.__name__, error=str(e))
                value = default

        self._cache[cache_key] = value
        return value

    def is_development(self) -> bool:
        """Check if running in development mode."""
        environment = self.get("ENVIRONMENT", "development").lower()
        return environment in ["development", "dev", "local"]

    def clear_cache(self):
        """Clear configuration cache."""
        self._cache.clear()


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def get_env(key: str, default: Any = None, cast_type: type = str) -> Any:
    """Get environment variable with type casting.

    Args:
        key: Environment variable name
        default: Default value if not found
        cast_type: Type to cast the value to

    Returns:
        Environment variable value cast to the specified type
    """
    return get_config().get(key, default, cast_type)


def is_development() -> bool:
    """Check if running in development mode."""
    return get_config().is_development()


# Common configuration getters
def get_access_pin() -> str:
    """Get the shared PIN that unlocks the application."""
    return str(get_env("ACCESS_PIN", DEFAULT_PIN))


def get_pin_verify_mode() -> str:
    """Get how the PIN screen validates entries: 'local' or 'remote'."""
    mode = str(get_env("PIN_VERIFY_MODE", "local")).lower()
    if mode not in ("local", "remote"):
        logger.warning("unknown_pin_verify_mode", mode=mode, fallback="local")
        return "local"
    return mode


def get_pin_error_delay() -> float:
    """Get the delay in seconds before a rejected PIN entry is cleared."""
    return get_env("PIN_ERROR_DELAY_MS", DEFAULT_ERROR_DELAY_MS, int) / 1000


def get_api_base_url() -> str:
    """Get the base URL the UI uses to reach the API."""
    return str(get_env("API_BASE_URL", "http://localhost:8000")).rstrip("/")


def get_database_path() -> Path:
    """Get the DuckDB database file path."""
    return Path(get_env("DATABASE_PATH", "data/lovememories.db"))


def get_uploads_dir() -> Path:
    """Get the directory uploaded photos are written to."""
    return Path(get_env("UPLOADS_DIR", "uploads"))


def get_max_upload_size() -> int:
    """Get the upload size limit in bytes."""
    return int(get_env("MAX_UPLOAD_SIZE", DEFAULT_MAX_UPLOAD_SIZE, int))


def get_default_username() -> str:
    """Get the username seeded into a fresh database."""
    return str(get_env("DEFAULT_USERNAME", "coralieleo"))


def get_environment() -> str:
    """Get current environment."""
    return str(get_env("ENVIRONMENT", "development"))


def get_debug_mode() -> bool:
    """Get debug mode setting."""
    return get_env("DEBUG", False, bool) or is_development()
