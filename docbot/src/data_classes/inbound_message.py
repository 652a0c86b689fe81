"""Inbound chat message data class."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class InboundMessage:
    """One message received from the chat network.

    Attributes:
        message_id: Message id assigned by the channel
        sender_id: Id of the user who sent the message
        conversation_id: Id of the chat the message belongs to
        text: Body text, may be None for non-text messages
        timestamp: When the channel received the message (UTC)
        username: Display name of the sender
        raw: Original payload as received on the webhook
    """

    message_id: int
    sender_id: int
    conversation_id: int
    text: Optional[str]
    timestamp: datetime
    username: str = ""
    raw: Optional[Dict[str, Any]] = field(default=None, compare=False)

    def has_text(self) -> bool:
        """Whether the message carries any non-whitespace text."""
        return bool(self.text and self.text.strip())

    @staticmethod
    def timestamp_from_unix(value: int) -> datetime:
        """Convert a unix timestamp in seconds to an aware UTC datetime."""
        return datetime.fromtimestamp(value, tz=timezone.utc)
