"""
Configuration module for the geomagnetic timeseries dashboard.

Loads configuration from JSON file and environment variables.
"""

import json
import os
from typing import Dict, Any, List, Optional
from pathlib import Path

from . import constants


# Modes that can be selected at startup (custom needs a time range)
STARTUP_TIME_MODES = ("realtime", "pastday")


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses CONFIG_FILE env var
                        or defaults to 'config.json'. Only an explicitly requested file
                        must exist; otherwise built-in defaults are used.
        """
        self._explicit = bool(config_file or os.getenv("CONFIG_FILE"))
        self.config_file = config_file or os.getenv("CONFIG_FILE", "config.json")
        self.config: Dict[str, Any] = {}
        self._load_config()
        self._override_from_env()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file."""
        config_path = Path(self.config_file)
        if not config_path.exists():
            if self._explicit:
                raise FileNotFoundError(f"Configuration file not found: {self.config_file}")
            self.config = {}
            return

        with open(config_path, "r", encoding="utf-8") as f:
            self.config = json.load(f)

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        # API configuration
        if os.getenv("API_BASE_URL"):
            self.config.setdefault("api", {})["base_url"] = os.getenv("API_BASE_URL")

        if os.getenv("API_TIMEOUT"):
            try:
                self.config.setdefault("api", {})["timeout"] = int(os.getenv("API_TIMEOUT", ""))
            except ValueError:
                raise ValueError(f"Invalid API_TIMEOUT: {os.getenv('API_TIMEOUT')}")

        # Logging
        if os.getenv("LOG_LEVEL"):
            self.config.setdefault("logging", {})["level"] = os.getenv("LOG_LEVEL")

        if os.getenv("LOG_FILE"):
            self.config.setdefault("logging", {})["file"] = os.getenv("LOG_FILE")

    def _validate_config(self) -> None:
        """Validate configured values."""
        if self.default_time_mode not in STARTUP_TIME_MODES:
            raise ValueError(
                f"Invalid dashboard.default_time_mode: {self.default_time_mode} "
                f"(expected one of {', '.join(STARTUP_TIME_MODES)})"
            )

        if not self.channels:
            raise ValueError("dashboard.channels must not be empty")

        if not self.observatories:
            raise ValueError("dashboard.observatories must not be empty")

        if self.refresh_interval_ms <= 0:
            raise ValueError(
                f"dashboard.refresh_interval_ms must be positive: {self.refresh_interval_ms}"
            )

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
        """Get web service base URL."""
        return self.get("api.base_url", constants.DEFAULT_API_BASE_URL)

    @property
    def api_timeout(self) -> int:
        """Get API timeout in seconds."""
        return self.get("api.timeout", 30)

    @property
    def api_max_retries(self) -> int:
        """Get maximum API retry attempts."""
        return self.get("api.max_retries", 3)

    @property
    def api_verify_ssl(self) -> bool:
        """Get API SSL verification setting."""
        return self.get("api.verify_ssl", True)

    @property
    def channels(self) -> List[str]:
        """Get channels shown for a selected observatory."""
        return list(self.get("dashboard.channels", constants.DEFAULT_CHANNELS))

    @property
    def observatories(self) -> List[str]:
        """Get observatory codes queried for a selected channel."""
        return list(self.get("dashboard.observatories", constants.DEFAULT_OBSERVATORIES))

    @property
    def default_channel(self) -> str:
        """Get channel selected at startup."""
        return self.get("dashboard.default_channel", constants.DEFAULT_CHANNEL)

    @property
    def default_time_mode(self) -> str:
        """Get time mode selected at startup."""
        return self.get("dashboard.default_time_mode", constants.DEFAULT_TIME_MODE)

    @property
    def refresh_interval_ms(self) -> int:
        """Get auto-refresh period for live modes."""
        return self.get("dashboard.refresh_interval_ms", constants.DEFAULT_REFRESH_INTERVAL_MS)

    @property
    def log_level(self) -> str:
        """Get logging level."""
        return self.get("logging.level", "INFO")

    @property
    def log_file(self) -> Optional[str]:
        """Get log file path."""
        return self.get("logging.file")

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(file={self.config_file}, api={self.api_base_url})"
