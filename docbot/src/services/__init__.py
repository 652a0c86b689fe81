"""Services package for backend functionality.

This package contains all service components for business logic.
"""

from .channel import BaseChannelClient, DeliveryError, TelegramChannelClient
from .conversation import (
    BotNotFoundError,
    ConversationPipeline,
    MalformedInputError,
    PipelineError,
)
from .factory import (
    create_bot_registry,
    create_channel_client,
    create_context_store,
    create_conversation_pipeline,
    create_knowledge_store,
    create_llm_service,
)
from .llm import BaseLLMService, DeepseekLLMService, GeminiLLMService
from .llm.vllm_client_service import VLLMClientService
from .store import (
    BaseBotRegistry,
    BaseContextStore,
    BaseKnowledgeStore,
    JsonBotRegistry,
    JsonContextStore,
    JsonKnowledgeStore,
    StoreError,
)

__all__ = [
    # LLM Services
    "BaseLLMService",
    "GeminiLLMService",
    "DeepseekLLMService",
    "VLLMClientService",
    # Stores
    "BaseBotRegistry",
    "BaseContextStore",
    "BaseKnowledgeStore",
    "JsonBotRegistry",
    "JsonContextStore",
    "JsonKnowledgeStore",
    "StoreError",
    # Channel
    "BaseChannelClient",
    "TelegramChannelClient",
    "DeliveryError",
    # Pipeline
    "ConversationPipeline",
    "PipelineError",
    "BotNotFoundError",
    "MalformedInputError",
    # Factory Functions
    "create_llm_service",
    "create_context_store",
    "create_knowledge_store",
    "create_bot_registry",
    "create_channel_client",
    "create_conversation_pipeline",
]
