"""Telegram Bot API client used for outbound delivery."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import requests

from docbot.conf.config import Config

logger = logging.getLogger(__name__)


class DeliveryError(Exception):
    """Raised when the chat network does not accept a message."""


class BaseChannelClient(ABC):
    """Sends messages to one bot's chats on the external chat network."""

    @abstractmethod
    def send(self, conversation_id: int, chunk: str) -> None:
        """Send one message to a chat.

        Args:
            conversation_id: Chat to deliver to
            chunk: Message text, already within the network's length limit

        Raises:
            DeliveryError: If the message was not accepted
        """


class TelegramChannelClient(BaseChannelClient):
    """Channel client for the Telegram Bot API, bound to one bot token.

    Each call is a single HTTP request without retries.

    Attributes:
        api_url: Bot API base URL including the token
        timeout: Request timeout in seconds
        session: HTTP session used for all requests
    """

    def __init__(
        self,
        bot_token: str,
        api_base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize the client.

        Args:
            bot_token: Telegram bot token
            api_base_url: Bot API host. Defaults to Config.TELEGRAM_API_BASE_URL
            timeout: Request timeout in seconds. Defaults to Config.TELEGRAM_TIMEOUT
            session: Optional pre-configured requests session
        """
        base_url = (api_base_url or Config.TELEGRAM_API_BASE_URL).rstrip("/")
        self.api_url = f"{base_url}/bot{bot_token}"
        self.timeout = timeout or Config.TELEGRAM_TIMEOUT
        self.session = session or requests.Session()

    def send(self, conversation_id: int, chunk: str) -> None:
        self._call("sendMessage", {"chat_id": conversation_id, "text": chunk})
        logger.info(
            f"Sent message chunk to chat {conversation_id}: {chunk[:80]!r}"
        )

    def set_webhook(self, url: str) -> Dict[str, Any]:
        """Register the webhook URL Telegram should post updates to.

        Args:
            url: Public URL of the webhook endpoint

        Returns:
            Telegram's response body

        Raises:
            DeliveryError: If Telegram rejects the registration
        """
        result = self._call("setWebhook", {"url": url})
        logger.info(f"Telegram webhook set to {url}")
        return result

    def _call(self, method: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self.session.post(
                f"{self.api_url}/{method}", json=payload, timeout=self.timeout
            )
            result = response.json()
        except requests.exceptions.RequestException as e:
            raise DeliveryError(f"Telegram {method} request failed: {str(e)}") from e
        except ValueError as e:
            raise DeliveryError(
                f"Telegram {method} returned invalid JSON (status {response.status_code})"
            ) from e

        if not result.get("ok"):
            raise DeliveryError(
                f"Telegram {method} rejected: {result.get('description', 'unknown error')}"
            )
        return result
