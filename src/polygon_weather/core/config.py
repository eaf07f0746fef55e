"""
Configuration module for polygon weather coloring.

Loads configuration from JSON file and environment variables.
"""

import copy
import json
import os
from typing import Dict, Any, Optional
from pathlib import Path

import pytz

from . import constants


DEFAULT_CONFIG: Dict[str, Any] = {
    "api": {
        "base_url": constants.DEFAULT_API_BASE_URL,
        "timeout": constants.DEFAULT_API_TIMEOUT,
        "max_retries": constants.DEFAULT_API_MAX_RETRIES,
        "verify_ssl": True,
    },
    "refresh": {
        "debounce_seconds": constants.DEFAULT_DEBOUNCE_SECONDS,
    },
    "processing": {
        "timezone": "UTC",
    },
    "logging": {
        "level": constants.DEFAULT_LOG_LEVEL,
        "file": constants.DEFAULT_LOG_FILE,
    },
}


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses CONFIG_FILE env var
                        or defaults to 'config.json'. A missing default file falls back
                        to built-in defaults; a missing explicit file is an error.
        """
        self._explicit = config_file is not None or bool(os.getenv("CONFIG_FILE"))
        self.config_file = config_file or os.getenv("CONFIG_FILE", "config.json")
        self.config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        self._load_config()
        self._override_from_env()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file and merge it over the defaults."""
        config_path = Path(self.config_file)
        if not config_path.exists():
            if self._explicit:
                raise FileNotFoundError(f"Configuration file not found: {self.config_file}")
            return

        with open(config_path, "r", encoding="utf-8") as f:
            loaded = json.load(f)

        for section, values in loaded.items():
            if isinstance(values, dict) and isinstance(self.config.get(section), dict):
                self.config[section].update(values)
            else:
                self.config[section] = values

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        if os.getenv("API_BASE_URL"):
            self.config["api"]["base_url"] = os.getenv("API_BASE_URL")

        if os.getenv("API_TIMEOUT"):
            self.config["api"]["timeout"] = float(os.getenv("API_TIMEOUT"))

        if os.getenv("API_MAX_RETRIES"):
            self.config["api"]["max_retries"] = int(os.getenv("API_MAX_RETRIES"))

        if os.getenv("REFRESH_DEBOUNCE_SECONDS"):
            self.config["refresh"]["debounce_seconds"] = float(
                os.getenv("REFRESH_DEBOUNCE_SECONDS")
            )

        if os.getenv("TIMEZONE"):
            self.config["processing"]["timezone"] = os.getenv("TIMEZONE")

        if os.getenv("LOG_LEVEL"):
            self.config["logging"]["level"] = os.getenv("LOG_LEVEL")

    def _validate_config(self) -> None:
        """Validate configuration values."""
        errors = []

        if not self.api_base_url:
            errors.append("api.base_url must not be empty")

        if self.api_timeout <= 0:
            errors.append(f"api.timeout must be positive, got {self.api_timeout}")

        if self.api_max_retries < 0:
            errors.append(f"api.max_retries must be >= 0, got {self.api_max_retries}")

        if self.debounce_seconds < 0:
            errors.append(
                f"refresh.debounce_seconds must be >= 0, got {self.debounce_seconds}"
            )

        if self.timezone not in pytz.all_timezones_set:
            errors.append(f"Unknown timezone: {self.timezone}")

        if errors:
            raise ValueError(f"Invalid configuration: {'; '.join(errors)}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'api.base_url')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def api_base_url(self) -> str:
        """Get weather API base URL."""
        return self.get("api.base_url", constants.DEFAULT_API_BASE_URL)

    @property
    def api_timeout(self) -> float:
        """Get API timeout in seconds."""
        return self.get("api.timeout", constants.DEFAULT_API_TIMEOUT)

    @property
    def api_max_retries(self) -> int:
        """Get maximum API retry attempts."""
        return self.get("api.max_retries", constants.DEFAULT_API_MAX_RETRIES)

    @property
    def api_verify_ssl(self) -> bool:
        """Get API SSL verification setting."""
        return self.get("api.verify_ssl", True)

    @property
    def debounce_seconds(self) -> float:
        """Get quiescence delay before a refresh cycle runs."""
        return self.get("refresh.debounce_seconds", constants.DEFAULT_DEBOUNCE_SECONDS)

    @property
    def timezone(self) -> str:
        """Get processing timezone."""
        return self.get("processing.timezone", "UTC")

    @property
    def log_level(self) -> str:
        """Get logging level."""
        return self.get("logging.level", constants.DEFAULT_LOG_LEVEL)

    @property
    def log_file(self) -> str:
        """Get log file path."""
        return self.get("logging.file", constants.DEFAULT_LOG_FILE)

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(file={self.config_file}, timezone={self.timezone})"
