"""
Configuration management utilities.

This module provides centralized loading of the optional TOML configuration
file whose ``[replay]`` section overrides staging directories and delays.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from .constants import DEFAULT_CONFIG_PATH


class ConfigManager:
    """
    Manages configuration loading and access.

    Example file::

        [replay]
        download_dir = "/var/tmp/indy/download"
        mount_path = "/mnt/replay-cache"
        settle_delay = 60
    """

    def __init__(self, config_path: Optional[str] = None) -> None:
        self.config_path = Path(config_path or DEFAULT_CONFIG_PATH).expanduser()
        self._config: Optional[Dict[str, Any]] = None

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from file.

        Returns:
            Dictionary containing configuration data

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid
        """
        if self._config is not None:
            return self._config

        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, "rb") as f:
                self._config = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in configuration file {self.config_path}: {e}") from e
        except OSError as e:
            raise ValueError(f"Failed to load configuration from {self.config_path}: {e}") from e

        logging.debug("Loaded configuration from %s", self.config_path)
        return self._config

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get an entire configuration section, or an empty dict if absent."""
        value = self.load().get(section, {})
        return value if isinstance(value, dict) else {}


__all__ = ["ConfigManager"]
