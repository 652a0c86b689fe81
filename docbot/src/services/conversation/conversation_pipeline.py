"""Conversation pipeline handling one inbound chat message end to end.

For every message the pipeline:
1. Resolves the bot from the api key the webhook was called with
2. Skips messages without text
3. Stores the inbound turn
4. Loads recent conversation context
5. Loads the bot's documentation
6. Assembles the prompt
7. Generates a reply, falling back to the bot's fallback text
8. Stores the reply
9. Splits the reply and delivers it to the chat

Only a missing bot aborts a run. Every later step degrades: a failed store
read or write, generation call or chunk send is logged and the run continues
with the best substitute available. Nothing is retried.
"""

import logging
from contextlib import nullcontext
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from docbot.conf.config import Config
from docbot.src.data_classes import (
    BOT_SENDER_ID,
    BotProfile,
    ConversationEntry,
    Degradation,
    DeliveryOutcome,
    InboundMessage,
    KnowledgeSnippet,
    PipelineStage,
)
from docbot.src.services.channel import BaseChannelClient
from docbot.src.services.conversation.components import ContextAssembler, split_reply
from docbot.src.services.conversation.errors import BotNotFoundError
from docbot.src.services.conversation.locks import ConversationLocks
from docbot.src.services.conversation.pipeline_run import PipelineRun
from docbot.src.services.llm import BaseLLMService
from docbot.src.services.store import (
    BaseBotRegistry,
    BaseContextStore,
    BaseKnowledgeStore,
)

logger = logging.getLogger(__name__)

NO_TEXT_INFO = "no text to process"

ChannelClientFactory = Callable[[str], BaseChannelClient]


class ConversationPipeline:
    """Orchestrates context retrieval, generation, persistence and delivery.

    Attributes:
        bot_registry: Lookup of bot profiles by api key
        context_store: Conversation ledger
        knowledge_store: Documentation attached to bots
        llm_service: Text generation backend
        channel_client_factory: Builds a channel client for a bot's api key
        assembler: Context selection and prompt rendering
        context_limit: Turns fetched from the ledger per run
        max_message_length: Maximum characters per delivered message
        locks: Per-conversation locks, None when runs are not serialized
    """

    def __init__(
        self,
        bot_registry: BaseBotRegistry,
        context_store: BaseContextStore,
        knowledge_store: BaseKnowledgeStore,
        llm_service: BaseLLMService,
        channel_client_factory: ChannelClientFactory,
        assembler: Optional[ContextAssembler] = None,
        context_limit: Optional[int] = None,
        max_message_length: Optional[int] = None,
        serialize_conversations: Optional[bool] = None,
    ) -> None:
        assert bot_registry is not None, "Bot registry is required"
        assert context_store is not None, "Context store is required"
        assert knowledge_store is not None, "Knowledge store is required"
        assert llm_service is not None, "LLM service is required"
        assert channel_client_factory is not None, "Channel client factory is required"

        self.bot_registry = bot_registry
        self.context_store = context_store
        self.knowledge_store = knowledge_store
        self.llm_service = llm_service
        self.channel_client_factory = channel_client_factory
        self.assembler = assembler or ContextAssembler()
        self.context_limit = (
            Config.CONTEXT_LIMIT if context_limit is None else context_limit
        )
        self.max_message_length = max_message_length or Config.MAX_MESSAGE_LENGTH

        if serialize_conversations is None:
            serialize_conversations = Config.SERIALIZE_CONVERSATIONS
        self.locks: Optional[ConversationLocks] = (
            ConversationLocks() if serialize_conversations else None
        )

        logger.info(
            f"ConversationPipeline initialized (serialize_conversations={serialize_conversations})"
        )

    def handle(self, bot_api_key: str, inbound: InboundMessage) -> DeliveryOutcome:
        """Process one inbound message.

        Args:
            bot_api_key: Api key the webhook was called with
            inbound: Message received from the chat network

        Returns:
            DeliveryOutcome describing the terminal state of the run

        Raises:
            BotNotFoundError: If no bot is registered under the api key
        """
        run = PipelineRun()

        bot = self._resolve_bot(bot_api_key, run)
        run.advance(PipelineStage.BOT_RESOLVED)

        if not inbound.has_text():
            logger.info(
                f"Message {inbound.message_id} in chat {inbound.conversation_id} has no text, skipping"
            )
            run.advance(PipelineStage.SHORT_CIRCUITED)
            return DeliveryOutcome(
                state=run.stage,
                bot_id=bot.id,
                conversation_id=inbound.conversation_id,
                info=NO_TEXT_INFO,
            )

        guard = (
            self.locks.hold(bot.id, inbound.conversation_id)
            if self.locks is not None
            else nullcontext()
        )
        with guard:
            return self._answer(bot, bot_api_key, inbound, run)

    def _resolve_bot(self, bot_api_key: str, run: PipelineRun) -> BotProfile:
        try:
            bot = self.bot_registry.get_by_api_key(bot_api_key)
        except Exception as e:
            # An unreadable registry leaves nothing to answer with
            logger.error(f"Bot lookup failed: {str(e)}")
            run.advance(PipelineStage.FAILED)
            raise BotNotFoundError(details=str(e)) from e

        if bot is None:
            logger.error("Bot not found for the given api key")
            run.advance(PipelineStage.FAILED)
            raise BotNotFoundError()
        return bot

    def _answer(
        self,
        bot: BotProfile,
        bot_api_key: str,
        inbound: InboundMessage,
        run: PipelineRun,
    ) -> DeliveryOutcome:
        message_text = inbound.text or ""

        # Receipt time, never earlier than the whole-second Telegram date
        received_at = max(inbound.timestamp, datetime.now(timezone.utc))
        self._persist(
            ConversationEntry(
                bot_id=bot.id,
                conversation_id=inbound.conversation_id,
                sender_id=inbound.sender_id,
                text=message_text,
                timestamp=received_at,
                is_bot_response=False,
                message_id=inbound.message_id,
                username=inbound.username,
            ),
            run,
        )

        context = self._load_context(bot, inbound, run)
        knowledge = self._load_knowledge(bot, run)
        prompt = self.assembler.build_prompt(bot, context, message_text, knowledge)
        run.advance(PipelineStage.CONTEXT_ASSEMBLED)
        logger.debug(f"LLM prompt (snippet): {prompt[:500]}...")

        reply = self._generate(bot, prompt, run)
        run.advance(PipelineStage.GENERATED)
        logger.info(f"Response to be sent to chat {inbound.conversation_id}: {reply[:100]!r}")

        # Outbound turn, always ordered after the inbound one
        now = datetime.now(timezone.utc)
        self._persist(
            ConversationEntry(
                bot_id=bot.id,
                conversation_id=inbound.conversation_id,
                sender_id=BOT_SENDER_ID,
                text=reply,
                timestamp=max(now, received_at + timedelta(microseconds=1)),
                is_bot_response=True,
                message_id=-int(now.timestamp() * 1000),
            ),
            run,
        )
        run.advance(PipelineStage.PERSISTED)

        chunks = split_reply(reply, self.max_message_length)
        chunks_sent = self._deliver(bot_api_key, inbound.conversation_id, chunks, run)
        run.advance(PipelineStage.DELIVERED)

        return DeliveryOutcome(
            state=run.stage,
            bot_id=bot.id,
            conversation_id=inbound.conversation_id,
            reply_text=reply,
            chunks_total=len(chunks),
            chunks_sent=chunks_sent,
            degradations=list(run.degradations),
        )

    def _persist(self, entry: ConversationEntry, run: PipelineRun) -> None:
        kind = "bot response" if entry.is_bot_response else "incoming message"
        try:
            self.context_store.append(entry)
            logger.info(
                f"Stored {kind} for bot {entry.bot_id} in chat {entry.conversation_id}"
            )
        except Exception as e:
            logger.error(f"Failed to store {kind}: {str(e)}")
            run.degrade(Degradation.PERSISTENCE_FAILED)

    def _load_context(
        self, bot: BotProfile, inbound: InboundMessage, run: PipelineRun
    ) -> List[ConversationEntry]:
        try:
            recent = self.context_store.recent(
                bot.id, inbound.conversation_id, self.context_limit
            )
        except Exception as e:
            logger.error(f"Error fetching context messages: {str(e)}")
            run.degrade(Degradation.CONTEXT_UNAVAILABLE)
            return []

        context = self.assembler.select_context(
            list(recent)[: self.context_limit], inbound
        )
        logger.info(f"Loaded {len(context)} context messages")
        return context

    def _load_knowledge(
        self, bot: BotProfile, run: PipelineRun
    ) -> List[KnowledgeSnippet]:
        try:
            snippets = self.knowledge_store.for_bot(bot.id)
        except Exception as e:
            logger.error(f"Error fetching documentation for bot {bot.id}: {str(e)}")
            run.degrade(Degradation.KNOWLEDGE_UNAVAILABLE)
            return []
        return self.assembler.select_knowledge(snippets)

    def _generate(self, bot: BotProfile, prompt: str, run: PipelineRun) -> str:
        fallback = bot.fallback_response or Config.DEFAULT_FALLBACK_RESPONSE
        try:
            result = self.llm_service.generate(prompt)
        except Exception as e:
            logger.warning(f"Generation failed, using fallback: {str(e)}")
            run.degrade(Degradation.GENERATION_FAILED)
            return fallback

        if not isinstance(result, str) or not result.strip():
            logger.warning("LLM response was empty, using fallback")
            run.degrade(Degradation.GENERATION_FAILED)
            return fallback
        return result.strip()

    def _deliver(
        self,
        bot_api_key: str,
        conversation_id: int,
        chunks: List[str],
        run: PipelineRun,
    ) -> int:
        try:
            channel = self.channel_client_factory(bot_api_key)
        except Exception as e:
            logger.error(f"Could not create channel client: {str(e)}")
            run.degrade(Degradation.DELIVERY_FAILED)
            return 0

        sent = 0
        for index, chunk in enumerate(chunks):
            try:
                channel.send(conversation_id, chunk)
                sent += 1
            except Exception as e:
                logger.error(
                    f"Failed to send chunk {index + 1}/{len(chunks)} to chat {conversation_id}: {str(e)}"
                )
                run.degrade(Degradation.DELIVERY_FAILED)
        return sent
