"""Storage services package.

This package provides the stores consumed by the conversation pipeline:
- JsonContextStore: append-only conversation ledger
- JsonKnowledgeStore: documentation attached to bots
- JsonBotRegistry: bot profiles keyed by api key

The JSON-backed implementations handle concurrent access with one lock per file.
"""

from .base import BaseBotRegistry, BaseContextStore, BaseKnowledgeStore, StoreError
from .bot_registry import JsonBotRegistry
from .context_store import JsonContextStore
from .knowledge_store import JsonKnowledgeStore

__all__ = [
    "BaseBotRegistry",
    "BaseContextStore",
    "BaseKnowledgeStore",
    "StoreError",
    "JsonBotRegistry",
    "JsonContextStore",
    "JsonKnowledgeStore",
]
