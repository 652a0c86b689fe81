"""Flask application serving the Telegram webhook of document-grounded bots."""

import argparse
import logging
import os
import sys
from typing import Optional

from flask import Flask
from flask_cors import CORS

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from docbot.conf.config import Config
from docbot.src.api import setup_api
from docbot.src.services import (
    BaseBotRegistry,
    BaseContextStore,
    BaseKnowledgeStore,
    BaseLLMService,
    DeliveryError,
    create_bot_registry,
    create_channel_client,
    create_context_store,
    create_conversation_pipeline,
    create_knowledge_store,
    create_llm_service,
)

# Logging is configured in docbot/__init__.py
logger = logging.getLogger(__name__)


def create_app(
    llm_service: Optional[BaseLLMService] = None,
    context_store: Optional[BaseContextStore] = None,
    knowledge_store: Optional[BaseKnowledgeStore] = None,
    bot_registry: Optional[BaseBotRegistry] = None,
) -> Flask:
    """Create and configure the Flask application with the conversation pipeline."""
    logger.info("Starting application setup...")

    app = Flask(__name__)
    CORS(app)

    if llm_service is None:
        llm_service = create_llm_service()
        if not llm_service:
            raise ValueError(f"Failed to create {Config.LLM_SERVICE} LLM service")

    if context_store is None:
        context_store = create_context_store()
    if knowledge_store is None:
        knowledge_store = create_knowledge_store()
    if bot_registry is None:
        bot_registry = create_bot_registry()

    logger.info("Creating conversation pipeline")
    pipeline = create_conversation_pipeline(
        llm_service=llm_service,
        context_store=context_store,
        knowledge_store=knowledge_store,
        bot_registry=bot_registry,
    )

    logger.info("Setting up API routes")
    setup_api(app, pipeline, llm_service, context_store)

    logger.info("Application setup complete")
    return app


def register_webhook(api_key: str, url: str) -> bool:
    """Point a bot's Telegram webhook at this server.

    Args:
        api_key: Telegram bot token
        url: Public base URL of this server

    Returns:
        True when Telegram accepted the webhook
    """
    webhook_url = f"{url.rstrip('/')}/telegram?api_key={api_key}"
    try:
        create_channel_client(api_key).set_webhook(webhook_url)  # type: ignore
        return True
    except DeliveryError as e:
        logger.error(f"Failed to set Telegram webhook: {str(e)}")
        return False


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Run the bot webhook server (--llm, --port, --set-webhook, --api-key)"
    )
    parser.add_argument(
        "--llm",
        type=str,
        choices=Config.VALID_LLM_SERVICES,
        default=Config.LLM_SERVICE,
        help=f"LLM service to use (default: {Config.LLM_SERVICE})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=Config.FLASK_PORT,
        help=f"Port for the webhook server (default: {Config.FLASK_PORT})",
    )
    parser.add_argument(
        "--vllm-host",
        type=str,
        default=Config.VLLM_HOST,
        help="Hostname or IP of the vLLM server (default: localhost)",
    )
    parser.add_argument(
        "--vllm-port",
        type=int,
        default=Config.VLLM_PORT,
        help="Port for the vLLM server (default: 8001)",
    )
    parser.add_argument(
        "--serialize-conversations",
        action="store_true",
        help="Handle messages of the same chat one at a time",
    )
    parser.add_argument(
        "--set-webhook",
        type=str,
        metavar="PUBLIC_URL",
        help="Register the Telegram webhook for --api-key at this base URL and exit",
    )
    parser.add_argument(
        "--api-key",
        type=str,
        help="Telegram bot token used with --set-webhook",
    )

    args = parser.parse_args()

    if args.set_webhook:
        if not args.api_key:
            parser.error("--set-webhook requires --api-key")
        sys.exit(0 if register_webhook(args.api_key, args.set_webhook) else 1)

    # Set configuration from command line arguments
    Config.LLM_SERVICE = args.llm
    Config.FLASK_PORT = args.port
    Config.VLLM_HOST = args.vllm_host
    Config.VLLM_PORT = args.vllm_port
    if args.serialize_conversations:
        Config.SERIALIZE_CONVERSATIONS = True

    logger.info(f"Using LLM service: {Config.LLM_SERVICE}")

    try:
        llm_service = create_llm_service()
        logger.info(
            f"{Config.LLM_SERVICE.capitalize()} LLM service initialized successfully!"
        )
    except Exception as e:
        logger.error(f"Failed to initialize {Config.LLM_SERVICE} LLM service: {str(e)}")
        sys.exit(1)

    app = create_app(llm_service)
    app.run(host=Config.FLASK_HOST, port=Config.FLASK_PORT, threaded=True)
