"""Conversation pipeline package."""

from docbot.src.services.conversation.conversation_pipeline import (
    ConversationPipeline,
)
from docbot.src.services.conversation.errors import (
    BotNotFoundError,
    MalformedInputError,
    PipelineError,
)

__all__ = [
    "ConversationPipeline",
    "PipelineError",
    "BotNotFoundError",
    "MalformedInputError",
]
