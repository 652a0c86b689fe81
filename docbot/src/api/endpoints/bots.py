"""Bot conversation endpoints module.

Read-only views over the conversation ledger for the dashboard.
"""

import logging
from typing import Any, Dict, List, Tuple

from flask import Blueprint, Response, jsonify
from pydantic import BaseModel, Field

from docbot.src.api.middleware.exceptions import ServiceError
from docbot.src.services import BaseContextStore

logger = logging.getLogger(__name__)


class ChatListResponseModel(BaseModel):
    """Chat list response model."""

    data: List[Dict[str, Any]] = Field(
        default_factory=list, description="One summary per conversation"
    )


def init_bot_routes(context_store: BaseContextStore) -> Blueprint:
    """Initialize bot routes with the provided context store.

    Args:
        context_store: Conversation ledger

    Returns:
        Blueprint: Flask blueprint with bot routes
    """
    bots_bp = Blueprint("bots", __name__)

    @bots_bp.route("/bot/<bot_id>/chats", methods=["GET"])
    def list_chats(bot_id: str) -> Tuple[Response, int]:
        """List the conversations of a bot, most recently active first.

        Args:
            bot_id: Bot whose conversations to list

        Returns:
            Response with one summary per conversation
        """
        try:
            chats = context_store.list_chats(bot_id)
        except Exception as e:
            logger.error(f"Error fetching chats for bot {bot_id}: {str(e)}")
            raise ServiceError(message="Failed to fetch chats.", details=str(e))

        response = ChatListResponseModel(data=chats)
        return jsonify(response.model_dump()), 200

    return bots_bp
