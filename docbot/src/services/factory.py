"""Service factory module for centralized service instantiation.

This module provides factory methods for creating service instances,
keeping service initialization logic in one place.
"""

import logging
from typing import Optional

from docbot.conf.config import Config
from docbot.src.services.channel import BaseChannelClient, TelegramChannelClient
from docbot.src.services.conversation import ConversationPipeline
from docbot.src.services.llm import (
    BaseLLMService,
    DeepseekLLMService,
    GeminiLLMService,
)
from docbot.src.services.store import (
    BaseBotRegistry,
    BaseContextStore,
    BaseKnowledgeStore,
    JsonBotRegistry,
    JsonContextStore,
    JsonKnowledgeStore,
)

logger = logging.getLogger(__name__)


def create_llm_service() -> BaseLLMService:
    """Create and initialize the LLM service based on configuration."""
    try:
        if Config.LLM_SERVICE == "gemini":
            return GeminiLLMService()
        elif Config.LLM_SERVICE == "deepseek":
            return DeepseekLLMService()
        elif Config.LLM_SERVICE == "vllm":
            # Connect to an externally managed vLLM server
            from docbot.src.services.llm.vllm_client_service import VLLMClientService

            vllm_url = f"http://{Config.VLLM_HOST}:{Config.VLLM_PORT}"
            return VLLMClientService(api_base_url=vllm_url)
        else:
            raise ValueError(f"Unsupported LLM service: {Config.LLM_SERVICE}")
    except Exception as e:
        logger.error(f"Failed to create {Config.LLM_SERVICE} LLM service: {e}")
        raise e


def create_context_store() -> BaseContextStore:
    """Create the conversation ledger at Config.MESSAGES_PATH."""
    return JsonContextStore(Config.MESSAGES_PATH)


def create_knowledge_store() -> BaseKnowledgeStore:
    """Create the documentation store at Config.DOCUMENTATION_PATH."""
    return JsonKnowledgeStore(Config.DOCUMENTATION_PATH)


def create_bot_registry() -> BaseBotRegistry:
    """Create the bot registry at Config.BOTS_PATH."""
    return JsonBotRegistry(Config.BOTS_PATH)


def create_channel_client(bot_api_key: str) -> BaseChannelClient:
    """Create a Telegram client bound to one bot token.

    Args:
        bot_api_key: Telegram bot token of the bot that replies

    Returns:
        Channel client for that bot
    """
    return TelegramChannelClient(bot_token=bot_api_key)


def create_conversation_pipeline(
    llm_service: Optional[BaseLLMService] = None,
    context_store: Optional[BaseContextStore] = None,
    knowledge_store: Optional[BaseKnowledgeStore] = None,
    bot_registry: Optional[BaseBotRegistry] = None,
) -> ConversationPipeline:
    """Create and configure a ConversationPipeline instance.

    Args:
        llm_service: Backend used to generate replies
        context_store: Conversation ledger
        knowledge_store: Documentation store
        bot_registry: Bot profile lookup

    Returns:
        Configured ConversationPipeline instance
    """
    if llm_service is None:
        logger.info("No LLM service provided, creating new one")
        llm_service = create_llm_service()

    if context_store is None:
        context_store = create_context_store()

    if knowledge_store is None:
        knowledge_store = create_knowledge_store()

    if bot_registry is None:
        bot_registry = create_bot_registry()

    logger.info("Initializing ConversationPipeline with components")
    return ConversationPipeline(
        bot_registry=bot_registry,
        context_store=context_store,
        knowledge_store=knowledge_store,
        llm_service=llm_service,
        channel_client_factory=create_channel_client,
    )
