"""
Configuration management for the Pick-n-Pull inventory watch.
"""

import json
import os
from typing import Any, Dict, Optional

import yaml

from ..models.config import Configuration, SearchFilter, TelegramConfig


class ConfigurationManager:
    """Manages loading and validation of system configuration."""

    DEFAULT_PATHS = [
        "config/config.yaml",
        "config/config.yml",
        "config/config.json",
        "config.yaml",
        "config.yml",
        "config.json",
    ]

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file. If None, uses default paths.
        """
        self.config_path = config_path or self._find_config_file()

    def _find_config_file(self) -> str:
        """Find the configuration file in standard locations."""
        for path in self.DEFAULT_PATHS:
            if os.path.exists(path):
                return path

        if os.path.exists("config/config.example.yaml"):
            raise ValueError(
                "No configuration file found. Please copy 'config/config.example.yaml' "
                "to 'config/config.yaml' and customize it for your needs."
            )

        raise ValueError(
            "No configuration file found. Please create a configuration file "
            "at one of these locations: " + ", ".join(self.DEFAULT_PATHS)
        )

    def load_config(self) -> Configuration:
        """
        Load configuration from file.

        Returns:
            Configuration object with validated settings.

        Raises:
            ValueError: If configuration is invalid or file cannot be read.
            FileNotFoundError: If configuration file doesn't exist.
        """
        if not os.path.exists(self.config_path):
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                if self.config_path.endswith(".json"):
                    raw_config = json.load(f)
                else:
                    raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file: {e}")

        if not isinstance(raw_config, dict):
            raise ValueError("Configuration file must contain a mapping")

        raw_config = self._expand_env_vars(raw_config)
        config = self._parse_config(raw_config)
        config.validate()

        return config

    def _expand_env_vars(self, obj: Any) -> Any:
        """Recursively expand environment variables in configuration."""
        if isinstance(obj, dict):
            return {key: self._expand_env_vars(value) for key, value in obj.items()}
        elif isinstance(obj, list):
            return [self._expand_env_vars(item) for item in obj]
        elif isinstance(obj, str):
            # Expand ${VAR_NAME} patterns
            if obj.startswith("${") and obj.endswith("}"):
                var_name = obj[2:-1]
                env_value = os.getenv(var_name)
                if env_value is None:
                    raise ValueError(f"Environment variable '{var_name}' not found")
                return env_value
            return obj
        else:
            return obj

    def _parse_config(self, raw_config: Dict[str, Any]) -> Configuration:
        """Parse raw configuration dictionary into Configuration object."""
        search_data = raw_config.get("search") or {}
        telegram_data = raw_config.get("telegram") or {}
        storage_data = raw_config.get("storage") or {}
        system_data = raw_config.get("system") or {}

        search = SearchFilter(
            make=str(search_data.get("make", "")),
            model=str(search_data.get("model", "")),
            zip_code=str(search_data.get("zip", "")),
            distance=search_data.get("distance", 10),
            year="" if search_data.get("year") is None else str(search_data["year"]),
            label=search_data.get("label", "vehicles"),
        )

        telegram = TelegramConfig(
            bot_token=str(telegram_data.get("bot_token", "")),
            chat_id=str(telegram_data.get("chat_id", "")),
        )

        return Configuration(
            search=search,
            telegram=telegram,
            record_file=storage_data.get("record_file", "inventory_record.json"),
            log_dir=system_data.get("log_dir", "logs"),
            log_level=system_data.get("log_level", "INFO"),
            headless=system_data.get("headless", True),
            page_timeout=system_data.get("page_timeout", 10),
            polling_interval=system_data.get("polling_interval"),
        )
