"""Telegram webhook endpoint module.

Telegram posts every update for a bot to this endpoint. The bot is selected by
the `api_key` query parameter (or an `apiKey` field in the body), which is the
bot's Telegram token.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from flask import Blueprint, Response, jsonify, request
from pydantic import BaseModel, ConfigDict, Field

from docbot.src.api.middleware.exceptions import ValidationError
from docbot.src.data_classes import InboundMessage
from docbot.src.services import ConversationPipeline, MalformedInputError
from docbot.src.services.conversation.conversation_pipeline import NO_TEXT_INFO

logger = logging.getLogger(__name__)


# Schema definitions
class TelegramUser(BaseModel):
    """Sender of a Telegram message."""

    id: Optional[int] = None
    is_bot: Optional[bool] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    username: Optional[str] = None

    def display_name(self) -> str:
        """Username, or the full name when the user has none."""
        if self.username:
            return self.username
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


class TelegramChat(BaseModel):
    """Chat a Telegram message was sent in."""

    id: Optional[int] = None
    type: Optional[str] = None


class TelegramMessage(BaseModel):
    """Message object of a Telegram update."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    message_id: int = Field(..., description="Telegram message id")
    from_user: Optional[TelegramUser] = Field(
        None, alias="from", description="Sender of the message"
    )
    chat: Optional[TelegramChat] = Field(None, description="Chat of the message")
    date: int = Field(..., description="Unix timestamp of the message")
    text: Optional[str] = Field(None, description="Message text")

    def to_inbound(self, raw: Optional[Dict[str, Any]] = None) -> InboundMessage:
        """Convert to an InboundMessage.

        Raises:
            MalformedInputError: If the sender or chat id is missing
        """
        if (
            self.from_user is None
            or self.from_user.id is None
            or self.chat is None
            or self.chat.id is None
        ):
            raise MalformedInputError("Missing user or chat ID from Telegram.")

        return InboundMessage(
            message_id=self.message_id,
            sender_id=self.from_user.id,
            conversation_id=self.chat.id,
            text=self.text,
            timestamp=InboundMessage.timestamp_from_unix(self.date),
            username=self.from_user.display_name(),
            raw=raw,
        )


class WebhookEnvelope(BaseModel):
    """Telegram update as posted to the webhook."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    update_id: Optional[int] = None
    api_key: Optional[str] = Field(None, alias="apiKey")
    message: Optional[TelegramMessage] = None


class WebhookResponseModel(BaseModel):
    """Webhook response model."""

    ok: bool = Field(True, description="Whether the update was handled")
    info: Optional[str] = Field(None, description="Note for skipped updates")
    response_sent: Optional[str] = Field(
        None, description="Beginning of the delivered reply"
    )
    chunks_sent: Optional[int] = Field(None, description="Messages delivered")
    degradations: List[str] = Field(
        default_factory=list, description="Failures absorbed while handling"
    )


def init_webhook_routes(pipeline: ConversationPipeline) -> Blueprint:
    """Initialize webhook routes with the provided pipeline.

    Args:
        pipeline: Conversation pipeline handling inbound messages

    Returns:
        Blueprint: Flask blueprint with the webhook route
    """
    webhook_bp = Blueprint("webhook", __name__)

    @webhook_bp.route("/telegram", methods=["POST"])
    def telegram_webhook() -> Tuple[Response, int]:
        """Handle one Telegram update.

        Returns:
            `{ok: true, ...}` for every handled update

        Raises:
            ValidationError: If the body is not a JSON object
            MalformedInputError: If the api key, sender or chat id is missing
            BotNotFoundError: If no bot is registered under the api key
        """
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            raise ValidationError("Invalid JSON body.")

        envelope = WebhookEnvelope.model_validate(payload)
        api_key = request.args.get("api_key") or envelope.api_key
        if not api_key:
            raise MalformedInputError("Missing Telegram api_key for bot identification")

        logger.info(f"[Telegram] Received update {envelope.update_id}")

        if envelope.message is None:
            logger.info("No message in update, skipping.")
            response = WebhookResponseModel(info=NO_TEXT_INFO)
            return jsonify(response.model_dump(exclude_none=True)), 200

        inbound = envelope.message.to_inbound(raw=payload.get("message"))
        outcome = pipeline.handle(api_key, inbound)

        if outcome.info:
            response = WebhookResponseModel(info=outcome.info)
        else:
            response = WebhookResponseModel(
                response_sent=outcome.reply_text[:100] + "...",
                chunks_sent=outcome.chunks_sent,
                degradations=[d.value for d in outcome.degradations],
            )
        return jsonify(response.model_dump(exclude_none=True)), 200

    return webhook_bp
