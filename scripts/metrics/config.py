"""
Unified configuration management for red tag logging and analytics.

Provides centralized configuration with:
- JSON file loading with defaults
- Environment variable overrides
- Dot-notation access
- Feature enable/disable flags
"""

import copy
import json
import os
import sys
from pathlib import Path
from typing import Any, Optional


class RedTagConfig:
    """
    Singleton configuration manager for the red tag tools.

    Usage:
        from metrics.config import config

        if config.is_enabled('notifications'):
            # ... post the alert

        records_path = config.get('records.log_path')
    """

    _instance = None
    _config = None
    _config_loaded = False

    def __new__(cls):
        """Singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def load(self, config_path: Optional[Path] = None):
        """
        Load configuration from file.

        Values found in the file are merged over the defaults, so a partial
        file only needs to name the settings it changes.

        Args:
            config_path: Path to redtag_config.json (optional)
        """
        if self._config_loaded:
            return  # Already loaded

        if config_path is None:
            # Default path
            config_path = Path(__file__).parent.parent.parent / "config" / "redtag_config.json"

        self._config = self._get_defaults()

        if Path(config_path).exists():
            try:
                with open(config_path) as f:
                    self._merge(self._config, json.load(f))
            except (OSError, json.JSONDecodeError) as e:
                print(f"Warning: Failed to load config from {config_path}: {e}", file=sys.stderr)
                self._config = self._get_defaults()

        # Apply environment variable overrides
        self._apply_env_overrides()

        self._config_loaded = True

    def _get_defaults(self) -> dict:
        """
        Get default configuration.

        Returns:
            Dictionary with default settings
        """
        return {
            "version": "1.0.0",
            "records": {
                "log_path": "~/.redtag/records.jsonl",
            },
            "analysis": {
                "top_n": 5,
                "recent_window_days": 30,
                "increasing_threshold": 0.6,
            },
            "reporting": {
                "default_format": "markdown",
                "include_reasons": False,
            },
            "export": {
                "enabled": True,
                "output_dir": "~/.redtag/exports",
                "filename_prefix": "red-tag-export",
            },
            "notifications": {
                "enabled": False,
                "slack_webhook_url": None,
                "timeout_sec": 10,
            },
        }

    @classmethod
    def _merge(cls, base: dict, overrides: dict):
        """Recursively merge overrides into base."""
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                cls._merge(base[key], value)
            else:
                base[key] = value

    def _apply_env_overrides(self):
        """Apply environment variable overrides to configuration."""
        if "REDTAG_RECORDS_PATH" in os.environ:
            self._config["records"]["log_path"] = os.environ["REDTAG_RECORDS_PATH"]

        if "REDTAG_EXPORT_DIR" in os.environ:
            self._config["export"]["output_dir"] = os.environ["REDTAG_EXPORT_DIR"]

        # A webhook URL in the environment implies notifications are wanted
        if "REDTAG_SLACK_WEBHOOK_URL" in os.environ:
            self._config["notifications"]["slack_webhook_url"] = os.environ["REDTAG_SLACK_WEBHOOK_URL"]
            self._config["notifications"]["enabled"] = True

        # REDTAG_NOTIFICATIONS_ENABLED=false
        if "REDTAG_NOTIFICATIONS_ENABLED" in os.environ:
            value = os.environ["REDTAG_NOTIFICATIONS_ENABLED"].lower()
            self._config["notifications"]["enabled"] = value in ("true", "1", "yes")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value with dot notation.

        Args:
            key: Configuration key (e.g., "analysis.top_n")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        if not self._config_loaded:
            self.load()

        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default

        return value if value is not None else default

    def get_path(self, key: str, default: Optional[str] = None) -> Optional[Path]:
        """Get a configured filesystem path with ``~`` expanded."""
        value = self.get(key, default)
        if value is None:
            return None
        return Path(value).expanduser()

    def set(self, key: str, value: Any):
        """
        Set configuration value (runtime only, not persisted).

        Args:
            key: Configuration key (dot notation)
            value: Value to set
        """
        if not self._config_loaded:
            self.load()

        keys = key.split('.')
        config = self._config

        # Navigate to parent
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def is_enabled(self, feature: str) -> bool:
        """
        Check if a feature is enabled.

        Args:
            feature: Feature name (e.g., "notifications", "export")

        Returns:
            True if enabled, False otherwise
        """
        return bool(self.get(f"{feature}.enabled", False))

    def reload(self, config_path: Optional[Path] = None):
        """Force reload configuration from file."""
        self._config_loaded = False
        self.load(config_path)

    def get_all(self) -> dict:
        """
        Get entire configuration dictionary.

        Returns:
            Full configuration
        """
        if not self._config_loaded:
            self.load()
        return copy.deepcopy(self._config)


# Singleton instance for import
config = RedTagConfig()

# Auto-load on import
config.load()
