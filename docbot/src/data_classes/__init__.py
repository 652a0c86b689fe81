"""Data classes module for the conversation pipeline.

Classes:
    - BotProfile: Configuration of one bot
    - InboundMessage: A message received on the webhook
    - ConversationEntry: A persisted turn of a conversation
    - KnowledgeSnippet: Reference documentation attached to a bot
    - DeliveryOutcome: Result of one pipeline run
Enums:
    - PipelineStage: States of a pipeline run
    - Degradation: Non-fatal failure kinds
Constants:
    - BOT_SENDER_ID: Sender id recorded for bot turns
"""

from docbot.src.data_classes.bot_profile import BotProfile
from docbot.src.data_classes.conversation_entry import BOT_SENDER_ID, ConversationEntry
from docbot.src.data_classes.delivery_outcome import (
    Degradation,
    DeliveryOutcome,
    PipelineStage,
)
from docbot.src.data_classes.inbound_message import InboundMessage
from docbot.src.data_classes.knowledge_snippet import KnowledgeSnippet

__all__ = [
    "BOT_SENDER_ID",
    "BotProfile",
    "ConversationEntry",
    "Degradation",
    "DeliveryOutcome",
    "InboundMessage",
    "KnowledgeSnippet",
    "PipelineStage",
]
