"""Unit tests for the JSON-backed conversation ledger."""

import json
import os
import shutil
import tempfile
import threading
import unittest
from datetime import datetime, timedelta, timezone

from docbot.src.data_classes import BOT_SENDER_ID, ConversationEntry
from docbot.src.services.store import JsonContextStore, StoreError


class TestJsonContextStore(unittest.TestCase):
    """Test cases for JsonContextStore."""

    def setUp(self) -> None:
        """Set up test fixtures before each test method."""
        self.temp_dir = tempfile.mkdtemp()
        self.file_path = os.path.join(self.temp_dir, "messages.json")
        self.store = JsonContextStore(self.file_path)
        self.start = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def tearDown(self) -> None:
        """Clean up temporary files."""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _entry(
        self,
        minute: int,
        text: str,
        conversation_id: int = 7,
        bot_id: str = "bot-1",
        from_bot: bool = False,
    ) -> ConversationEntry:
        return ConversationEntry(
            bot_id=bot_id,
            conversation_id=conversation_id,
            sender_id=BOT_SENDER_ID if from_bot else 42,
            text=text,
            timestamp=self.start + timedelta(minutes=minute),
            is_bot_response=from_bot,
            username="" if from_bot else "alice",
        )

    def test_file_is_initialized(self) -> None:
        """Test that a missing file is created as an empty array."""
        with open(self.file_path, "r", encoding="utf-8") as f:
            self.assertEqual(json.load(f), [])

    def test_append_assigns_increasing_sequence(self) -> None:
        """Test that every append gets the next sequence number."""
        first = self.store.append(self._entry(0, "one"))
        second = self.store.append(self._entry(1, "two"))

        self.assertEqual(first.sequence, 1)
        self.assertEqual(second.sequence, 2)

    def test_entries_survive_reload(self) -> None:
        """Test that a new store over the same file sees stored turns."""
        self.store.append(self._entry(0, "persisted"))

        reloaded = JsonContextStore(self.file_path)
        entries = reloaded.recent("bot-1", 7, 10)

        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].text, "persisted")
        self.assertEqual(entries[0].timestamp, self.start)

    def test_recent_is_newest_first_and_limited(self) -> None:
        """Test ordering, limit and conversation filtering of recent()."""
        for minute in range(5):
            self.store.append(self._entry(minute, f"m{minute}"))
        self.store.append(self._entry(10, "other chat", conversation_id=8))
        self.store.append(self._entry(11, "other bot", bot_id="bot-2"))

        entries = self.store.recent("bot-1", 7, 3)

        self.assertEqual([e.text for e in entries], ["m4", "m3", "m2"])

    def test_recent_breaks_timestamp_ties_by_insertion(self) -> None:
        """Test that turns sharing a timestamp keep insertion order."""
        self.store.append(self._entry(0, "first"))
        self.store.append(self._entry(0, "second", from_bot=True))

        entries = self.store.recent("bot-1", 7, 10)

        self.assertEqual([e.text for e in entries], ["second", "first"])

    def test_recent_with_zero_limit(self) -> None:
        """Test that a zero limit returns nothing."""
        self.store.append(self._entry(0, "one"))
        self.assertEqual(self.store.recent("bot-1", 7, 0), [])

    def test_list_chats(self) -> None:
        """Test per-chat summaries ordered by last activity."""
        self.store.append(self._entry(0, "hello", conversation_id=7))
        self.store.append(self._entry(1, "hi alice", conversation_id=7, from_bot=True))
        self.store.append(self._entry(5, "newer chat", conversation_id=8))

        chats = self.store.list_chats("bot-1")

        self.assertEqual([c["chat_id"] for c in chats], [8, 7])
        self.assertEqual(chats[1]["last_message_text"], "hi alice")
        self.assertEqual(chats[1]["telegram_user_id"], 42)
        self.assertEqual(chats[1]["telegram_username"], "alice")
        self.assertEqual(
            chats[1]["last_message_at"], (self.start + timedelta(minutes=1)).isoformat()
        )
        self.assertEqual(self.store.list_chats("bot-2"), [])

    def test_corrupt_file_raises_store_error(self) -> None:
        """Test that an unreadable ledger is reported as StoreError."""
        with open(self.file_path, "w", encoding="utf-8") as f:
            f.write("{not json")

        with self.assertRaises(StoreError):
            self.store.recent("bot-1", 7, 10)
        with self.assertRaises(StoreError):
            self.store.append(self._entry(0, "lost"))

    def test_non_array_file_raises_store_error(self) -> None:
        """Test that a JSON object instead of an array is rejected."""
        with open(self.file_path, "w", encoding="utf-8") as f:
            json.dump({"messages": []}, f)

        with self.assertRaises(StoreError):
            self.store.list_chats("bot-1")

    def test_concurrent_appends_are_not_lost(self) -> None:
        """Test that parallel appends all end up in the ledger."""

        def worker(index: int) -> None:
            self.store.append(self._entry(index, f"t{index}"))

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        entries = self.store.recent("bot-1", 7, 100)
        self.assertEqual(len(entries), 20)
        self.assertEqual(sorted(e.sequence for e in entries), list(range(1, 21)))


if __name__ == "__main__":
    unittest.main()
