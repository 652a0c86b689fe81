"""Outcome of one conversation pipeline run."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class PipelineStage(str, Enum):
    """States a pipeline run moves through."""

    RECEIVED = "received"
    BOT_RESOLVED = "bot_resolved"
    SHORT_CIRCUITED = "short_circuited"
    CONTEXT_ASSEMBLED = "context_assembled"
    GENERATED = "generated"
    PERSISTED = "persisted"
    DELIVERED = "delivered"
    FAILED = "failed"


class Degradation(str, Enum):
    """Non-fatal failures absorbed by a run."""

    CONTEXT_UNAVAILABLE = "context_unavailable"
    KNOWLEDGE_UNAVAILABLE = "knowledge_unavailable"
    GENERATION_FAILED = "generation_failed"
    PERSISTENCE_FAILED = "persistence_failed"
    DELIVERY_FAILED = "delivery_failed"


@dataclass
class DeliveryOutcome:
    """Result of handling one inbound message.

    Attributes:
        state: Terminal stage reached by the run
        bot_id: Bot that handled the message
        conversation_id: Chat the reply was delivered to
        reply_text: Full reply text (generated or fallback)
        info: Human readable note, set for short-circuited runs
        chunks_total: Number of chunks the reply was split into
        chunks_sent: Number of chunks the channel accepted
        degradations: Non-fatal failures recorded during the run, in order
    """

    state: PipelineStage
    bot_id: Optional[str] = None
    conversation_id: Optional[int] = None
    reply_text: str = ""
    info: Optional[str] = None
    chunks_total: int = 0
    chunks_sent: int = 0
    degradations: List[Degradation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.state != PipelineStage.FAILED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "bot_id": self.bot_id,
            "conversation_id": self.conversation_id,
            "reply_text": self.reply_text,
            "info": self.info,
            "chunks_total": self.chunks_total,
            "chunks_sent": self.chunks_sent,
            "degradations": [d.value for d in self.degradations],
        }
