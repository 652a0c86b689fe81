"""Per-conversation serialization of pipeline runs."""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Tuple

ConversationKey = Tuple[str, int]


class ConversationLocks:
    """Registry of one lock per (bot_id, conversation_id).

    Runs holding the same key execute one after another; runs for different
    conversations never wait on each other. An entry lives only while some
    run holds or waits for it, so the registry stays as small as the number of
    conversations currently being answered.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        # key -> [lock, number of runs holding or waiting for it]
        self._entries: Dict[ConversationKey, List] = {}

    def _acquire_entry(self, key: ConversationKey) -> threading.Lock:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = [threading.Lock(), 0]
                self._entries[key] = entry
            entry[1] += 1
            return entry[0]

    def _release_entry(self, key: ConversationKey) -> None:
        with self._guard:
            entry = self._entries[key]
            entry[1] -= 1
            if entry[1] == 0:
                del self._entries[key]

    @contextmanager
    def hold(self, bot_id: str, conversation_id: int) -> Iterator[None]:
        """Hold the lock of one conversation for the duration of the block."""
        key = (bot_id, conversation_id)
        lock = self._acquire_entry(key)
        try:
            with lock:
                yield
        finally:
            self._release_entry(key)

    def is_held(self, bot_id: str, conversation_id: int) -> bool:
        """Whether a run currently holds or waits for the conversation."""
        with self._guard:
            return (bot_id, conversation_id) in self._entries

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)
