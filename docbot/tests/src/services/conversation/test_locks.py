"""Unit tests for ConversationLocks."""

import threading
import time
import unittest
from typing import List

from docbot.src.services.conversation.locks import ConversationLocks


class TestConversationLocks(unittest.TestCase):
    """Test cases for the per-conversation lock registry."""

    def setUp(self) -> None:
        """Set up test fixtures before each test method."""
        self.locks = ConversationLocks()

    def test_entry_exists_only_while_held(self) -> None:
        """Test that a conversation is registered inside the block only."""
        self.assertFalse(self.locks.is_held("bot-1", 7))

        with self.locks.hold("bot-1", 7):
            self.assertTrue(self.locks.is_held("bot-1", 7))
            self.assertFalse(self.locks.is_held("bot-1", 8))
            self.assertEqual(len(self.locks), 1)

        self.assertFalse(self.locks.is_held("bot-1", 7))
        self.assertEqual(len(self.locks), 0)

    def test_registry_does_not_grow_with_finished_conversations(self) -> None:
        """Test that many finished conversations leave no entries behind."""
        for conversation_id in range(1000):
            with self.locks.hold("bot-1", conversation_id):
                pass

        self.assertEqual(len(self.locks), 0)

    def test_different_conversations_do_not_block(self) -> None:
        """Test that conversations and bots are isolated."""
        with self.locks.hold("bot-1", 7):
            with self.locks.hold("bot-1", 8):
                with self.locks.hold("bot-2", 7):
                    self.assertEqual(len(self.locks), 3)
        self.assertEqual(len(self.locks), 0)

    def test_hold_serializes_same_conversation(self) -> None:
        """Test that two holders of one conversation never overlap."""
        events: List[str] = []

        def worker(name: str) -> None:
            with self.locks.hold("bot-1", 7):
                events.append(f"{name}-start")
                time.sleep(0.05)
                events.append(f"{name}-end")

        threads = [threading.Thread(target=worker, args=(n,)) for n in ("a", "b")]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(len(events), 4)
        # Each start is directly followed by its own end
        self.assertEqual(events[0].split("-")[0], events[1].split("-")[0])
        self.assertEqual(events[2].split("-")[0], events[3].split("-")[0])
        self.assertEqual(len(self.locks), 0)

    def test_waiting_run_keeps_entry_alive(self) -> None:
        """Test that the entry survives while another run waits for it."""
        entered = threading.Event()
        release = threading.Event()
        order: List[str] = []

        def first() -> None:
            with self.locks.hold("bot-1", 7):
                order.append("first")
                entered.set()
                release.wait(5)

        def second() -> None:
            with self.locks.hold("bot-1", 7):
                order.append("second")

        t1 = threading.Thread(target=first)
        t1.start()
        entered.wait(5)
        t2 = threading.Thread(target=second)
        t2.start()
        time.sleep(0.05)
        self.assertEqual(order, ["first"])
        release.set()
        t1.join()
        t2.join()

        self.assertEqual(order, ["first", "second"])
        self.assertEqual(len(self.locks), 0)

    def test_hold_releases_on_exception(self) -> None:
        """Test that the entry is dropped when the block raises."""
        with self.assertRaises(RuntimeError):
            with self.locks.hold("bot-1", 7):
                raise RuntimeError("boom")

        self.assertEqual(len(self.locks), 0)
        # The conversation can be held again right away
        with self.locks.hold("bot-1", 7):
            pass


if __name__ == "__main__":
    unittest.main()
