"""API endpoints package.

This package contains endpoint definitions for the API.
"""

from flask import Flask

from docbot.src.api.endpoints.bots import init_bot_routes
from docbot.src.api.endpoints.generate import init_generate_routes
from docbot.src.api.endpoints.webhook import init_webhook_routes
from docbot.src.services import (
    BaseContextStore,
    BaseLLMService,
    ConversationPipeline,
)


def register_endpoints(
    app: Flask,
    pipeline: ConversationPipeline,
    llm_service: BaseLLMService,
    context_store: BaseContextStore,
) -> None:
    """Register all API endpoints with the application.

    Args:
        app: Flask application
        pipeline: Conversation pipeline behind the webhook
        llm_service: LLM service for raw generation requests
        context_store: Conversation ledger for the chat list
    """
    app.register_blueprint(init_webhook_routes(pipeline))
    app.register_blueprint(init_generate_routes(llm_service))
    app.register_blueprint(init_bot_routes(context_store))
