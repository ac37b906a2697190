"""Telegram sink - posts alerts to a chat through the Bot API."""
import logging
from typing import Dict

import requests

import config
from notifiers.delivery import delivery_result

logger = logging.getLogger(__name__)


class TelegramNotifier:
    """Sends alerts to a Telegram chat. One request per message, no retry."""

    def __init__(self, bot_token: str = None, chat_id: str = None):
        """
        Initialize notifier with Telegram credentials.

        Missing credentials are not an error here - deliver() reports them
        as an undelivered result instead.

        Args:
            bot_token: Telegram bot token
            chat_id: Destination chat/channel id
        """
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.base_url = f"{config.TELEGRAM_API_URL}/bot{self.bot_token}"

    @classmethod
    def from_config(cls) -> 'TelegramNotifier':
        return cls(config.TG_BOT_TOKEN, config.TG_CHAT_ID)

    @property
    def is_configured(self) -> bool:
        return bool(self.bot_token and self.chat_id)

    def deliver(self, message: str) -> Dict:
        """
        Send message to the Telegram chat.

        Args:
            message: Message text (Markdown)

        Returns:
            Delivery result; detail is the Telegram response on success,
            the failure reason otherwise
        """
        if not self.is_configured:
            logger.warning("Telegram credentials not set, skipping Telegram alert")
            return delivery_result(False, "Missing Telegram credentials")

        url = f"{self.base_url}/sendMessage"
        payload = {
            "chat_id": self.chat_id,
            "text": message,
            "parse_mode": "Markdown"
        }

        try:
            response = requests.post(url, json=payload, timeout=config.TELEGRAM_TIMEOUT_SECONDS)
            response.raise_for_status()
            data = response.json()
            logger.info("Telegram message sent successfully")
            return delivery_result(True, data)
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error(f"Failed to send Telegram message: {e}")
            return delivery_result(False, str(e))
