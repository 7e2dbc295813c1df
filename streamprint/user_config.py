"""
User configuration management for streamprint.

Supports configuration from multiple sources (in order of priority):
1. Runtime parameters (highest priority)
2. Environment variables
3. User config file (~/.streamprint/config.json)
4. Default values from config.py (lowest priority)

Configuration file location: ~/.streamprint/config.json

Example config.json:
{
    "threshold_low": 3,
    "threshold_high": 10,
    "hash_algorithm": "sha256",
    "ole_scan_bytes": 8192
}
"""

import json
import os
from pathlib import Path
from typing import Any, Optional
import logging

from .config import (
    CONFIG_DIR,
    DEFAULT_THRESHOLD_LOW,
    DEFAULT_THRESHOLD_HIGH,
    DEFAULT_HASH_ALGORITHM,
    OLE_SCAN_BYTES,
)

logger = logging.getLogger(__name__)


class UserConfig:
    """
    Manages user configuration from file and environment variables.

    The config file is lazy-loaded and cached; environment variables are
    read on every access.
    """

    _instance: Optional['UserConfig'] = None
    _config_data: Optional[dict] = None

    def __new__(cls):
        """Singleton pattern to ensure one config instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def config_dir(self) -> Path:
        """Get the configuration directory path."""
        env_dir = os.getenv('STREAMPRINT_CONFIG_DIR')
        if env_dir:
            return Path(env_dir)
        return Path(CONFIG_DIR)

    @property
    def config_file_path(self) -> Path:
        """Get the configuration file path."""
        return self.config_dir / 'config.json'

    def _load_config_file(self) -> dict:
        """Load configuration from JSON file."""
        if not self.config_file_path.exists():
            return {}

        try:
            with open(self.config_file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load config file {self.config_file_path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring config file {self.config_file_path}: expected a JSON object")
            return {}

        logger.debug(f"Loaded configuration from {self.config_file_path}")
        return data

    def _get_config_data(self) -> dict:
        """Get cached config data (lazy loading)."""
        if self._config_data is None:
            self._config_data = self._load_config_file()
        return self._config_data

    def reload(self):
        """Reload configuration from file."""
        self._config_data = None

    def get(self, key: str, default: Any = None, env_var: Optional[str] = None) -> Any:
        """
        Get a configuration value with priority:
        1. Environment variable (if env_var specified)
        2. Config file
        3. Default value

        Args:
            key: Configuration key
            default: Default value if not found
            env_var: Optional environment variable name to check

        Returns:
            Configuration value
        """
        if env_var:
            env_value = os.getenv(env_var)
            if env_value is not None:
                # Try to parse as JSON for numbers and other scalar types
                try:
                    return json.loads(env_value)
                except (json.JSONDecodeError, TypeError):
                    return env_value

        config_data = self._get_config_data()
        if key in config_data:
            return config_data[key]

        return default

    @property
    def threshold_low(self) -> int:
        """Maximum Hamming distance reported as a duplicate (0-64)."""
        return self.get(
            'threshold_low',
            default=DEFAULT_THRESHOLD_LOW,
            env_var='STREAMPRINT_THRESHOLD_LOW'
        )

    @property
    def threshold_high(self) -> int:
        """Maximum Hamming distance reported as similar (0-64)."""
        return self.get(
            'threshold_high',
            default=DEFAULT_THRESHOLD_HIGH,
            env_var='STREAMPRINT_THRESHOLD_HIGH'
        )

    @property
    def hash_algorithm(self) -> str:
        """Cryptographic digest used when none is given."""
        return str(self.get(
            'hash_algorithm',
            default=DEFAULT_HASH_ALGORITHM,
            env_var='STREAMPRINT_HASH_ALGORITHM'
        ))

    @property
    def ole_scan_bytes(self) -> int:
        """Raw bytes scanned when refining OLE compound documents (positive)."""
        value = self.get(
            'ole_scan_bytes',
            default=OLE_SCAN_BYTES,
            env_var='STREAMPRINT_OLE_SCAN_BYTES'
        )
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            logger.warning(f"Ignoring invalid ole_scan_bytes {value!r}, using {OLE_SCAN_BYTES}")
            return OLE_SCAN_BYTES
        return value

    def create_example_config(self) -> bool:
        """Create an example configuration file."""
        example_config = {
            "_comment": "streamprint user configuration",
            "threshold_low": DEFAULT_THRESHOLD_LOW,
            "threshold_high": DEFAULT_THRESHOLD_HIGH,
            "hash_algorithm": DEFAULT_HASH_ALGORITHM,
            "ole_scan_bytes": OLE_SCAN_BYTES,
        }

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, 'w', encoding='utf-8') as f:
                json.dump(example_config, f, indent=2)
        except OSError as e:
            logger.error(f"Failed to create example config: {e}")
            return False

        logger.info(f"Created example config file at {self.config_file_path}")
        self.reload()
        return True


# Global instance
_user_config = UserConfig()


def get_user_config() -> UserConfig:
    """Get the global UserConfig instance."""
    return _user_config
