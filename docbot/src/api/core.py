"""Core API setup and configuration.

This module configures API middleware, error handling, and other global API components.
"""

import logging

from flask import Flask

from docbot.src.api.endpoints import register_endpoints
from docbot.src.api.middleware import register_middleware
from docbot.src.services import (
    BaseContextStore,
    BaseLLMService,
    ConversationPipeline,
)

logger = logging.getLogger(__name__)


def setup_api(
    app: Flask,
    pipeline: ConversationPipeline,
    llm_service: BaseLLMService,
    context_store: BaseContextStore,
) -> None:
    """Set up API with middleware and endpoints.

    Args:
        app: Flask application
        pipeline: Conversation pipeline behind the webhook
        llm_service: LLM service for raw generation requests
        context_store: Conversation ledger for the chat list
    """
    # Register middleware
    register_middleware(app)

    # Register endpoints
    register_endpoints(app, pipeline, llm_service, context_store)
