"""Conversation ledger stored in a JSON file.

Turns of all bots and conversations live in one JSON array. Each append gets a
monotonically increasing sequence number, which orders turns that share a
timestamp in insertion order.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from docbot.conf.config import Config
from docbot.src.data_classes import ConversationEntry
from docbot.src.services.store.base import BaseContextStore, StoreError
from docbot.src.services.store.json_file import JsonFile, Records

logger = logging.getLogger(__name__)


class JsonContextStore(BaseContextStore):
    """Append-only conversation ledger backed by a JSON file.

    Attributes:
        storage (JsonFile): Locked access to the messages file
    """

    def __init__(self, file_path: Optional[Union[str, Path]] = None) -> None:
        """Initialize the ledger.

        Args:
            file_path: Path of the messages file. Defaults to Config.MESSAGES_PATH
        """
        self.storage = JsonFile(file_path or Config.MESSAGES_PATH)

    def append(self, entry: ConversationEntry) -> ConversationEntry:
        """Append a turn and return it with its sequence number.

        Args:
            entry: Turn to persist

        Returns:
            The stored entry

        Raises:
            StoreError: If the ledger could not be written
        """

        def _append(records: Records) -> ConversationEntry:
            sequence = 1 + max((r.get("sequence") or 0 for r in records), default=0)
            stored = entry.with_sequence(sequence)
            records.append(stored.to_dict())
            return stored

        stored = self.storage.update(_append)
        logger.debug(
            f"Stored turn {stored.sequence} for bot {stored.bot_id} "
            f"in chat {stored.conversation_id}"
        )
        return stored

    def recent(
        self, bot_id: str, conversation_id: int, limit: int
    ) -> List[ConversationEntry]:
        """Return up to `limit` turns of one conversation, newest first.

        Args:
            bot_id: Bot the conversation belongs to
            conversation_id: Chat id
            limit: Maximum number of turns to return

        Returns:
            Turns ordered by (timestamp, sequence) descending

        Raises:
            StoreError: If the ledger could not be read
        """
        entries = [
            entry
            for entry in self._entries()
            if entry.bot_id == bot_id and entry.conversation_id == conversation_id
        ]
        entries.sort(key=lambda e: e.sort_key, reverse=True)
        return entries[: max(limit, 0)]

    def list_chats(self, bot_id: str) -> List[Dict[str, Any]]:
        """Summarize the conversations of a bot, most recently active first.

        Each summary carries the latest turn's text and time plus the user who
        takes part in the chat.

        Args:
            bot_id: Bot whose conversations to list

        Returns:
            One dictionary per conversation

        Raises:
            StoreError: If the ledger could not be read
        """
        entries = [entry for entry in self._entries() if entry.bot_id == bot_id]
        entries.sort(key=lambda e: e.sort_key, reverse=True)

        chats: Dict[int, Dict[str, Any]] = {}
        for entry in entries:
            chat = chats.get(entry.conversation_id)
            if chat is None:
                chat = {
                    "chat_id": entry.conversation_id,
                    "telegram_user_id": None,
                    "telegram_username": None,
                    "last_message_text": entry.text,
                    "last_message_at": entry.timestamp.isoformat(),
                }
                chats[entry.conversation_id] = chat
            if chat["telegram_user_id"] is None and not entry.is_bot_response:
                chat["telegram_user_id"] = entry.sender_id
                chat["telegram_username"] = entry.username
        return list(chats.values())

    def _entries(self) -> List[ConversationEntry]:
        try:
            return [ConversationEntry.from_dict(r) for r in self.storage.read()]
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Malformed conversation record: {str(e)}") from e
