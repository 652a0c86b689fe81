"""Conversation entry data class for the message ledger."""

from dataclasses import asdict, dataclass, replace
from datetime import datetime
from typing import Any, Dict, Optional

# Sender id recorded for turns written by the bot itself
BOT_SENDER_ID: int = 0


@dataclass(frozen=True)
class ConversationEntry:
    """A persisted turn of a conversation.

    Entries are append-only. Ordering is by timestamp, with the store-assigned
    sequence number breaking ties in insertion order.

    Attributes:
        bot_id: Bot the conversation belongs to
        conversation_id: Chat id assigned by the channel
        sender_id: User id, or BOT_SENDER_ID for bot turns
        text: Body text of the turn
        timestamp: When the turn happened (UTC)
        is_bot_response: True for turns authored by the bot
        message_id: Channel message id; negative synthetic id for bot turns
        username: Display name of the sender
        sequence: Insertion counter assigned by the store
    """

    bot_id: str
    conversation_id: int
    sender_id: int
    text: str
    timestamp: datetime
    is_bot_response: bool
    message_id: Optional[int] = None
    username: str = ""
    sequence: Optional[int] = None

    @property
    def sort_key(self) -> tuple:
        return (self.timestamp, self.sequence if self.sequence is not None else -1)

    def with_sequence(self, sequence: int) -> "ConversationEntry":
        """Return a copy carrying the store-assigned sequence number."""
        return replace(self, sequence=sequence)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the entry to a JSON-serializable dictionary."""
        result = asdict(self)
        result["timestamp"] = self.timestamp.isoformat()
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConversationEntry":
        """Create a ConversationEntry from a stored dictionary."""
        values = dict(data)
        values["timestamp"] = datetime.fromisoformat(values["timestamp"])
        return cls(**values)
