"""Outbound chat channel package."""

from .telegram_client import BaseChannelClient, DeliveryError, TelegramChannelClient

__all__ = ["BaseChannelClient", "DeliveryError", "TelegramChannelClient"]
