"""Unit tests for the documentation store and bot registry."""

import json
import os
import shutil
import tempfile
import unittest

from docbot.src.services.store import JsonBotRegistry, JsonKnowledgeStore, StoreError


class TestJsonKnowledgeStore(unittest.TestCase):
    """Test cases for JsonKnowledgeStore."""

    def setUp(self) -> None:
        """Set up test fixtures before each test method."""
        self.temp_dir = tempfile.mkdtemp()
        self.file_path = os.path.join(self.temp_dir, "documentation.json")
        with open(self.file_path, "w", encoding="utf-8") as f:
            json.dump(
                [
                    {"bot_id": "bot-1", "file_name": "hours.txt", "document": "9-17"},
                    {"bot_id": "bot-2", "file_name": "other.txt", "document": "x"},
                    {"bot_id": "bot-1", "file_name": "map.txt", "document": "Floor 2"},
                ],
                f,
            )
        self.store = JsonKnowledgeStore(self.file_path)

    def tearDown(self) -> None:
        """Clean up temporary files."""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_for_bot_filters_and_keeps_order(self) -> None:
        """Test that only the bot's documents are returned in file order."""
        snippets = self.store.for_bot("bot-1")

        self.assertEqual([s.title for s in snippets], ["hours.txt", "map.txt"])
        self.assertEqual(snippets[1].body, "Floor 2")

    def test_for_unknown_bot(self) -> None:
        """Test that a bot without documentation gets an empty list."""
        self.assertEqual(self.store.for_bot("bot-9"), [])

    def test_malformed_record(self) -> None:
        """Test that a record that is not an object raises StoreError."""
        with open(self.file_path, "w", encoding="utf-8") as f:
            json.dump(["not a record"], f)

        with self.assertRaises(StoreError):
            self.store.for_bot("bot-1")


class TestJsonBotRegistry(unittest.TestCase):
    """Test cases for JsonBotRegistry."""

    def setUp(self) -> None:
        """Set up test fixtures before each test method."""
        self.temp_dir = tempfile.mkdtemp()
        self.file_path = os.path.join(self.temp_dir, "bots.json")
        with open(self.file_path, "w", encoding="utf-8") as f:
            json.dump(
                [
                    {
                        "id": 1,
                        "api_key": "123:abc",
                        "name": "Guide",
                        "ai_persona": {"tone": "warm"},
                        "fallback_response": None,
                    },
                    {"api_key": "456:def", "persona": "no id"},
                ],
                f,
            )
        self.registry = JsonBotRegistry(self.file_path)

    def tearDown(self) -> None:
        """Clean up temporary files."""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_lookup_by_api_key(self) -> None:
        """Test that a registered bot is found by its api key."""
        bot = self.registry.get_by_api_key("123:abc")

        self.assertIsNotNone(bot)
        assert bot is not None
        self.assertEqual(bot.id, "1")
        self.assertEqual(bot.name, "Guide")
        self.assertEqual(bot.persona, {"tone": "warm"})
        self.assertEqual(bot.fallback_response, "")

    def test_unknown_api_key(self) -> None:
        """Test that an unknown api key gives None."""
        self.assertIsNone(self.registry.get_by_api_key("nope"))

    def test_malformed_bot_record(self) -> None:
        """Test that a matching record without an id raises StoreError."""
        with self.assertRaises(StoreError):
            self.registry.get_by_api_key("456:def")


if __name__ == "__main__":
    unittest.main()
