"""Interfaces of the stores consumed by the conversation pipeline.

The pipeline only relies on these contracts; the JSON implementations in this
package are one possible backing. Implementations raise StoreError on any
failure so callers can decide how to degrade.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from docbot.src.data_classes import BotProfile, ConversationEntry, KnowledgeSnippet


class StoreError(Exception):
    """Raised when a store cannot complete a read or write."""


class BaseContextStore(ABC):
    """Append-only ledger of conversation turns per (bot, conversation)."""

    @abstractmethod
    def append(self, entry: ConversationEntry) -> ConversationEntry:
        """Persist one turn.

        Args:
            entry: Turn to persist

        Returns:
            The stored entry, including its assigned sequence number

        Raises:
            StoreError: If the entry could not be written
        """

    @abstractmethod
    def recent(
        self, bot_id: str, conversation_id: int, limit: int
    ) -> List[ConversationEntry]:
        """Return the most recent turns of a conversation, newest first.

        Raises:
            StoreError: If the ledger could not be read
        """

    @abstractmethod
    def list_chats(self, bot_id: str) -> List[Dict[str, Any]]:
        """Summarize every conversation of a bot, most recently active first.

        Raises:
            StoreError: If the ledger could not be read
        """


class BaseKnowledgeStore(ABC):
    """Read-only lookup of documentation attached to bots."""

    @abstractmethod
    def for_bot(self, bot_id: str) -> List[KnowledgeSnippet]:
        """Return all documentation of a bot in no particular order.

        Raises:
            StoreError: If the documentation could not be read
        """


class BaseBotRegistry(ABC):
    """Flat api-key keyed lookup of bot profiles."""

    @abstractmethod
    def get_by_api_key(self, api_key: str) -> Optional[BotProfile]:
        """Return the bot registered under an api key, or None.

        Raises:
            StoreError: If the registry could not be read
        """
