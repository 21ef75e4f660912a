"""
Configuration Service

Service class for configuration management.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional

logger = logging.getLogger("M31Code.ConfigService")

DEFAULT_CONFIG_PATH = Path.home() / ".m31code" / "config.json"


class ConfigService:
    """
    Service class for configuration management.

    Provides:
    - Configuration loading
    - Configuration saving
    - Dot-notation access
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config service.

        Args:
            config_path: Path to config file
        """
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._config: Dict[str, Any] = {}

    def exists(self) -> bool:
        return self.config_path.exists()

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from file.

        Returns:
            Configuration dictionary

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid JSON or not an object
        """
        if not self.config_path.exists():
            logger.error(f"Config file not found at: {self.config_path}")
            raise FileNotFoundError(f"Config file not found at: {self.config_path}")

        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Error parsing {self.config_path.name}: {e}")
            raise ValueError(
                f"Error parsing {self.config_path}: {e}\n"
                "Please ensure the config file is valid JSON."
            ) from e

        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a JSON object: {self.config_path}")
        self._config = data
        logger.info(f"Configuration loaded from {self.config_path}")
        return self._config.copy()

    def save(self, data: Optional[Dict[str, Any]] = None) -> None:
        """
        Save configuration to file.

        Args:
            data: Optional data to save (uses internal config if None)
        """
        if data is not None:
            self._config = data

        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with self.config_path.open("w", encoding="utf-8") as f:
            json.dump(self._config, f, indent=4)
        logger.info(f"Configuration saved to {self.config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value.

        Args:
            key: Configuration key (supports dot notation: "openai.api_key")
            default: Default value if key not found

        Returns:
            Configuration value
        """
        value: Any = self._config
        for k in key.split("."):
            if not isinstance(value, dict):
                return default
            value = value.get(k)
            if value is None:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value.

        Args:
            key: Configuration key (supports dot notation)
            value: Value to set
        """
        keys = key.split(".")
        config = self._config
        for k in keys[:-1]:
            config = config.setdefault(k, {})
        config[keys[-1]] = value

    def get_all(self) -> Dict[str, Any]:
        return self._config.copy()
