# Path: retriever/core/config_loader.py
"""
Retriever Configuration Loader

Centralized configuration management for the Retriever module.
Loads environment variables (optionally from a .env file) with type safety
and defaults.

Architecture:
- Singleton pattern for global configuration
- Type-safe access with validation
- Sensible defaults, nothing required at load time
"""

import os
from typing import Any, Optional
from pathlib import Path
from dotenv import load_dotenv

from retriever.constants import (
    ENV_FILE,
    ENV_SOURCE_DIR,
    ENV_SERVICE_URL,
    ENV_ACCESS_TOKEN,
    ENV_REQUEST_TIMEOUT,
    ENV_CONNECT_TIMEOUT,
    ENV_MAX_ARCHIVE_SIZE,
    ENV_MAX_EXTRACTION_DEPTH,
    ENV_LOG_LEVEL,
    ENV_LOG_CONSOLE,
    ENV_LOG_DIR,
    DEFAULT_SOURCE_DIRNAME,
    DEFAULT_TIMEOUT,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_LOG_LEVEL,
    MAX_ARCHIVE_SIZE,
    MAX_EXTRACTION_DEPTH,
)


class ConfigLoader:
    """
    Singleton configuration loader.

    Loads configuration from environment variables with validation,
    type conversion, and sensible defaults.

    Example:
        config = ConfigLoader()
        source_dir = config.get('source_dir')
        timeout = config.get('request_timeout')
    """

    _instance: Optional['ConfigLoader'] = None
    _initialized: bool = False

    def __new__(cls) -> 'ConfigLoader':
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Initialize configuration loader.

        Only runs once due to singleton pattern.
        """
        if ConfigLoader._initialized:
            return

        # Explicit env file wins, otherwise .env in the working directory
        env_path = Path(os.getenv(ENV_FILE, '.env'))
        if env_path.exists():
            load_dotenv(dotenv_path=env_path, interpolate=True)

        self._config = self._load_configuration()
        ConfigLoader._initialized = True

    def _load_configuration(self) -> dict[str, Any]:
        """
        Load and validate all configuration from environment.

        Returns:
            Dictionary of validated configuration values
        """
        config = {
            # ================================================================
            # DIRECTORY PATHS
            # ================================================================
            'source_dir': self._get_path(ENV_SOURCE_DIR) or Path(DEFAULT_SOURCE_DIRNAME),
            'log_dir': self._get_path(ENV_LOG_DIR),

            # ================================================================
            # SERVICE CONFIGURATION
            # ================================================================
            'service_url': self._get_env(ENV_SERVICE_URL),
            'access_token': self._get_env(ENV_ACCESS_TOKEN),
            'request_timeout': self._get_int(ENV_REQUEST_TIMEOUT, DEFAULT_TIMEOUT),
            'connect_timeout': self._get_int(ENV_CONNECT_TIMEOUT, DEFAULT_CONNECT_TIMEOUT),

            # ================================================================
            # EXTRACTION CONFIGURATION
            # ================================================================
            'max_archive_size': self._get_int(ENV_MAX_ARCHIVE_SIZE, MAX_ARCHIVE_SIZE),
            'max_extraction_depth': self._get_int(ENV_MAX_EXTRACTION_DEPTH, MAX_EXTRACTION_DEPTH),

            # ================================================================
            # LOGGING CONFIGURATION
            # ================================================================
            'log_level': self._get_env(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL),
            'log_console': self._get_bool(ENV_LOG_CONSOLE, True),
        }

        return config

    def _get_env(self, key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
        """
        Get string environment variable.

        Args:
            key: Environment variable name
            default: Default value if not found
            required: If True, raises ValueError when missing

        Returns:
            Environment variable value or default

        Raises:
            ValueError: If required and not found
        """
        value = os.getenv(key)

        if value is None or not value.strip():
            if required:
                raise ValueError(f"Required environment variable not set: {key}")
            return default

        return value.strip()

    def _get_bool(self, key: str, default: bool) -> bool:
        """
        Get boolean environment variable.

        Args:
            key: Environment variable name
            default: Default value if not found

        Returns:
            Boolean value
        """
        value = os.getenv(key)
        if value is None:
            return default

        return value.strip().lower() in ('true', '1', 'yes', 'on')

    def _get_int(self, key: str, default: int) -> int:
        """
        Get integer environment variable.

        Args:
            key: Environment variable name
            default: Default value if not found or invalid

        Returns:
            Integer value
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value.strip())
        except ValueError:
            return default

    def _get_path(self, key: str, required: bool = False) -> Optional[Path]:
        """
        Get path environment variable.

        Args:
            key: Environment variable name
            required: If True, raises ValueError when missing

        Returns:
            Path object or None

        Raises:
            ValueError: If required and not found
        """
        value = os.getenv(key)

        if value is None or not value.strip():
            if required:
                raise ValueError(f"Required environment variable not set: {key}")
            return None

        return Path(value.strip())

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value.

        Args:
            key: Configuration key
            default: Default value if not found

        Returns:
            Configuration value or default
        """
        return self._config.get(key, default)

    def __getitem__(self, key: str) -> Any:
        """Dictionary-style access to configuration."""
        return self._config[key]

    def __contains__(self, key: str) -> bool:
        """Check if configuration key exists."""
        return key in self._config


__all__ = ['ConfigLoader']
