"""Configuration management for image-selector."""

import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional

from image_selector.utils.logger import setup_logger

logger = setup_logger(__name__)


def _merge(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Manages user settings (never the source/destination folders)."""

    DEFAULT_CONFIG_DIR = Path.home() / ".image-selector"
    DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.json"

    DEFAULT_SETTINGS = {
        "scan": {
            "extension": ".png",  # matched case-sensitively against Path.suffix
            "show_progress": False,
        },
        "move": {"collision_separator": "_"},
        "logging": {"file": None},
    }

    def __init__(self, config_file: Optional[Path] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to config file (default: ~/.image-selector/config.json)
        """
        self.config_file = config_file or self.DEFAULT_CONFIG_FILE
        self.settings: Dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        """Load configuration from file or create with defaults."""
        if self.config_file.exists():
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    stored = json.load(f)
                if not isinstance(stored, dict):
                    raise ValueError("top-level value must be an object")
                self.settings = _merge(self.DEFAULT_SETTINGS, stored)
                logger.debug(f"Loaded configuration from {self.config_file}")
            except (json.JSONDecodeError, ValueError) as e:
                logger.warning(f"Invalid config file: {e}. Using defaults.")
                self.settings = copy.deepcopy(self.DEFAULT_SETTINGS)
        else:
            logger.info("No config file found. Creating with defaults.")
            self.settings = copy.deepcopy(self.DEFAULT_SETTINGS)
            self.save()

    def save(self) -> None:
        """Save configuration to file."""
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(self.settings, f, indent=2)
        logger.debug(f"Saved configuration to {self.config_file}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Configuration key (supports dot notation, e.g., 'scan.extension')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key.split(".")
        value = self.settings
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            key: Configuration key (supports dot notation)
            value: Value to set
        """
        keys = key.split(".")
        target = self.settings
        for k in keys[:-1]:
            if k not in target or not isinstance(target[k], dict):
                target[k] = {}
            target = target[k]
        target[keys[-1]] = value
        self.save()

    def _get_str(self, key: str) -> str:
        default = self.DEFAULT_SETTINGS
        for k in key.split("."):
            default = default[k]

        value = self.get(key, default)
        if not isinstance(value, str):
            logger.warning(
                f"Invalid value for {key}: {value!r}. Using {default!r}."
            )
            return default
        return value

    @property
    def extension(self) -> str:
        """Accepted image extension, including the leading dot."""
        return self._get_str("scan.extension")

    @property
    def collision_separator(self) -> str:
        return self._get_str("move.collision_separator")

    def get_log_file(self) -> Optional[Path]:
        """Get the configured log file path, if any."""
        log_file = self.get("logging.file")
        return Path(log_file).expanduser() if log_file else None
