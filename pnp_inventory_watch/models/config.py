"""
Configuration models for the system.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

SEARCH_BASE_URL = "https://www.picknpull.com/check-inventory/vehicle-search"


@dataclass
class SearchFilter:
    """The one inventory search being watched."""

    make: str
    model: str
    zip_code: str
    distance: int = 10
    year: str = ""
    label: str = "vehicles"

    def validate(self) -> bool:
        """Validate search filter configuration."""
        if not self.make or not str(self.make).strip():
            raise ValueError("Search make cannot be empty")

        if not self.model or not str(self.model).strip():
            raise ValueError("Search model cannot be empty")

        if not self.zip_code or not str(self.zip_code).strip():
            raise ValueError("Search zip cannot be empty")

        if not isinstance(self.distance, int) or self.distance <= 0:
            raise ValueError("Search distance must be a positive integer")

        if not self.label or not self.label.strip():
            raise ValueError("Search label cannot be empty")

        return True

    def build_url(self) -> str:
        """Build the vehicle search URL for this filter."""
        query = urlencode(
            {
                "make": self.make,
                "model": self.model,
                "distance": self.distance,
                "zip": self.zip_code,
                "year": self.year,
            }
        )
        return f"{SEARCH_BASE_URL}?{query}"


@dataclass
class TelegramConfig:
    """Telegram recipient and credentials."""

    bot_token: str
    chat_id: str

    def validate(self) -> bool:
        """Validate Telegram configuration."""
        if not self.bot_token or not str(self.bot_token).strip():
            raise ValueError("Telegram configuration must include 'bot_token'")

        if not self.chat_id or not str(self.chat_id).strip():
            raise ValueError("Telegram configuration must include 'chat_id'")

        return True


@dataclass
class Configuration:
    """System configuration."""

    search: SearchFilter
    telegram: TelegramConfig
    record_file: str = "inventory_record.json"
    log_dir: str = "logs"
    log_level: str = "INFO"
    headless: bool = True
    page_timeout: int = 10
    polling_interval: Optional[int] = None

    def validate(self) -> bool:
        """Validate system configuration."""
        if not self.record_file or not self.record_file.strip():
            raise ValueError("Record file path cannot be empty")

        if not self.log_dir or not self.log_dir.strip():
            raise ValueError("Log directory cannot be empty")

        if not isinstance(logging.getLevelName(str(self.log_level).upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

        if not isinstance(self.headless, bool):
            raise ValueError("headless must be a boolean")

        if not isinstance(self.page_timeout, int) or self.page_timeout <= 0:
            raise ValueError("Page timeout must be a positive integer")

        if self.polling_interval is not None:
            if not isinstance(self.polling_interval, int) or self.polling_interval < 60:
                raise ValueError("Polling interval must be at least 60 seconds")

        self.search.validate()
        self.telegram.validate()

        return True
