"""
Telegram delivery of inventory notifications.

Messages are posted to the Telegram Bot API with requests. The HTTP call is
blocking, so notify() runs it in the event loop's default executor.
"""

import asyncio
from datetime import datetime
from typing import Optional

import requests

from ..models.delivery import DeliveryResult
from ..utils.error_handling import NotifyError
from ..utils.logging import get_logger

TELEGRAM_API_URL = "https://api.telegram.org"


class TelegramNotifier:
    """Sends text messages to one Telegram chat."""

    def __init__(
        self,
        bot_token: str,
        chat_id: str,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize Telegram notifier.

        Args:
            bot_token: Telegram bot token
            chat_id: Target chat ID for messages
            timeout: Request timeout in seconds
            session: Optional requests session to reuse
        """
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.timeout = timeout
        self.base_url = f"{TELEGRAM_API_URL}/bot{bot_token}"
        self.session = session or requests.Session()
        self.logger = get_logger("notifier")

    async def notify(self, text: str) -> DeliveryResult:
        """
        Send a message to the configured chat.

        Failures are returned as an unsuccessful DeliveryResult, never raised.
        """
        self.logger.info("Sending Telegram notification.")
        try:
            await asyncio.get_running_loop().run_in_executor(
                None, self._send_message, text
            )
        except (requests.RequestException, NotifyError, ValueError) as e:
            error_msg = f"Error sending Telegram message: {self._redact(e)}"
            self.logger.error(error_msg)
            result = DeliveryResult(
                success=False, delivery_time=datetime.now(), error_message=error_msg
            )
            result.validate()
            return result

        self.logger.info("Telegram message sent successfully.")
        result = DeliveryResult(
            success=True, delivery_time=datetime.now(), error_message=None
        )
        result.validate()
        return result

    def _redact(self, error: Exception) -> str:
        """Error text with the bot token, which is part of every API URL, masked."""
        message = str(error)
        if self.bot_token:
            message = message.replace(self.bot_token, "<bot-token>")
        return message

    def _send_message(self, text: str) -> None:
        """Post sendMessage to the Bot API."""
        url = f"{self.base_url}/sendMessage"
        payload = {"chat_id": self.chat_id, "text": text}

        response = self.session.post(url, json=payload, timeout=self.timeout)

        try:
            result = response.json()
        except ValueError:
            response.raise_for_status()
            raise NotifyError("Telegram API returned a non-JSON response")

        if not result.get("ok"):
            raise NotifyError(
                f"Telegram API error: {result.get('description', 'Unknown error')}"
            )

    def test_connection(self) -> bool:
        """Test connection to Telegram Bot API."""
        try:
            response = self.session.get(f"{self.base_url}/getMe", timeout=10)
            response.raise_for_status()

            result = response.json()
            if result.get("ok"):
                bot_info = result.get("result", {})
                self.logger.info(
                    f"Connected to Telegram bot: {bot_info.get('username', 'Unknown')}"
                )
                return True

            self.logger.error(
                f"Telegram API error: {result.get('description', 'Unknown error')}"
            )
            return False

        except (requests.RequestException, ValueError) as e:
            self.logger.error(f"Failed to connect to Telegram: {self._redact(e)}")
            return False
