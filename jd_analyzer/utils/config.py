"""
Configuration management for JD Analyzer.
"""

from pathlib import Path
from typing import Optional
import copy
import json
import os


class Config:
    """Manages extraction, analysis and logging settings."""

    DEFAULT_CONFIG = {
        "extraction": {
            "min_recovered_chars": 100,
        },
        "analysis": {
            "partial_skill_threshold": 3,
            "max_workers": 4,
            "top_candidates": 5,
        },
        "output": {
            "indent": 2,
        },
        "logging": {
            "level": "WARNING",
        },
    }

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to config file (default: ~/.jd_analyzer/config.json)
        """
        if config_path:
            self.config_path = Path(config_path)
        else:
            self.config_path = Path.home() / ".jd_analyzer" / "config.json"

        self.config = self._load_config()

    def _load_config(self) -> dict:
        """Load configuration from file or fall back to defaults."""
        if self.config_path.exists():
            with open(self.config_path, 'r') as f:
                user_config = json.load(f)

            # Merge with defaults
            return self._deep_merge(copy.deepcopy(self.DEFAULT_CONFIG), user_config)

        return copy.deepcopy(self.DEFAULT_CONFIG)

    def _deep_merge(self, base: dict, override: dict) -> dict:
        """Deep merge two dictionaries."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def save(self) -> None:
        """Save current configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=2)

    def get(self, key: str, default=None):
        """
        Get a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "analysis.max_workers")
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value) -> None:
        """
        Set a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "analysis.max_workers")
            value: Value to set
        """
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def get_min_recovered_chars(self) -> int:
        """Minimum text length a PDF recovery strategy must produce."""
        return int(self.get("extraction.min_recovered_chars", 100))

    def get_partial_skill_threshold(self) -> int:
        """PDFs yielding fewer skills than this get a partial-extraction advisory."""
        return int(self.get("analysis.partial_skill_threshold", 3))

    def get_max_workers(self) -> int:
        return int(self.get("analysis.max_workers", 4))

    def get_top_candidates(self) -> int:
        return int(self.get("analysis.top_candidates", 5))

    def get_log_level(self) -> str:
        """
        Get the logging level name.

        The JD_ANALYZER_LOG_LEVEL environment variable takes precedence.
        """
        env_value = os.environ.get("JD_ANALYZER_LOG_LEVEL")
        if env_value:
            return env_value.upper()
        return str(self.get("logging.level", "WARNING")).upper()

    def print_config(self) -> None:
        """Print current configuration."""
        print(json.dumps(self.config, indent=2))

    @classmethod
    def create_default_config(cls, path: str = None) -> 'Config':
        """Create a new config file with default values."""
        config = cls(path)
        config.save()
        return config
