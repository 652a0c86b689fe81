"""Component turning stored turns and documentation into a generation prompt.

All methods are pure: identical inputs always give identical output, so a
prompt can be rebuilt byte for byte from the same context and knowledge.
"""

import logging
from typing import List, Optional, Sequence

from docbot.conf.config import Config
from docbot.conf.prompts import (
    CONVERSATION_PROMPT_TEMPLATE,
    KNOWLEDGE_SECTION_HEADER,
    TRUNCATION_MARKER,
)
from docbot.src.data_classes import (
    BotProfile,
    ConversationEntry,
    InboundMessage,
    KnowledgeSnippet,
)

logger = logging.getLogger(__name__)


class ContextAssembler:
    """Selects context and knowledge and renders the prompt.

    Attributes:
        history_turns: Number of most recent turns placed in the prompt
        max_snippets: Maximum number of documentation snippets used
        snippet_max_chars: Characters kept from each snippet body
    """

    def __init__(
        self,
        history_turns: Optional[int] = None,
        max_snippets: Optional[int] = None,
        snippet_max_chars: Optional[int] = None,
    ) -> None:
        self.history_turns = (
            Config.PROMPT_HISTORY_TURNS if history_turns is None else history_turns
        )
        self.max_snippets = (
            Config.MAX_KNOWLEDGE_SNIPPETS if max_snippets is None else max_snippets
        )
        self.snippet_max_chars = (
            Config.KNOWLEDGE_SNIPPET_MAX_CHARS
            if snippet_max_chars is None
            else snippet_max_chars
        )

    def select_context(
        self, recent: Sequence[ConversationEntry], inbound: InboundMessage
    ) -> List[ConversationEntry]:
        """Turn newest-first ledger rows into chronological context.

        Rows matching the inbound message on sender and text are dropped, since
        the run already holds that message.

        Args:
            recent: Stored turns, newest first
            inbound: Message being handled

        Returns:
            Context turns, oldest first
        """
        context = [
            entry
            for entry in recent
            if not (entry.sender_id == inbound.sender_id and entry.text == inbound.text)
        ]
        context.reverse()
        return context

    def select_knowledge(
        self, snippets: Sequence[KnowledgeSnippet]
    ) -> List[KnowledgeSnippet]:
        """Keep the first snippets and truncate their bodies.

        Args:
            snippets: Documentation of the bot

        Returns:
            At most max_snippets snippets, each body cut to snippet_max_chars
            with a trailing marker when it was longer
        """
        selected: List[KnowledgeSnippet] = []
        for snippet in list(snippets)[: self.max_snippets]:
            body = snippet.body
            if len(body) > self.snippet_max_chars:
                body = body[: self.snippet_max_chars] + TRUNCATION_MARKER
            selected.append(
                KnowledgeSnippet(bot_id=snippet.bot_id, title=snippet.title, body=body)
            )
        return selected

    def build_prompt(
        self,
        bot: BotProfile,
        context: Sequence[ConversationEntry],
        message: str,
        knowledge: Sequence[KnowledgeSnippet],
    ) -> str:
        """Render the generation prompt.

        Args:
            bot: Bot answering the message
            context: Chronological context turns
            message: Text of the inbound message
            knowledge: Selected documentation snippets

        Returns:
            Prompt text
        """
        turns = list(context)[-self.history_turns :] if self.history_turns > 0 else []
        history = "\n".join(
            f"{'Bot' if entry.is_bot_response else 'User'}: {entry.text}"
            for entry in turns
        )

        knowledge_section = ""
        if knowledge:
            docs = "\n\n".join(
                f"Doc{i + 1} ({snippet.title}):\n{snippet.body}"
                for i, snippet in enumerate(knowledge)
            )
            knowledge_section = f"\n{KNOWLEDGE_SECTION_HEADER}\n{docs}\n"

        return CONVERSATION_PROMPT_TEMPLATE.format(
            persona=bot.persona_text(),
            history=history,
            message=message,
            knowledge=knowledge_section,
        )
