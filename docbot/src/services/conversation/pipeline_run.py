"""State tracking for one pass through the conversation pipeline."""

import logging
from typing import Dict, FrozenSet, List

from docbot.src.data_classes import Degradation, PipelineStage

logger = logging.getLogger(__name__)

# Allowed stage transitions
_TRANSITIONS: Dict[PipelineStage, FrozenSet[PipelineStage]] = {
    PipelineStage.RECEIVED: frozenset(
        {PipelineStage.BOT_RESOLVED, PipelineStage.FAILED}
    ),
    PipelineStage.BOT_RESOLVED: frozenset(
        {PipelineStage.SHORT_CIRCUITED, PipelineStage.CONTEXT_ASSEMBLED}
    ),
    PipelineStage.CONTEXT_ASSEMBLED: frozenset({PipelineStage.GENERATED}),
    PipelineStage.GENERATED: frozenset({PipelineStage.PERSISTED}),
    PipelineStage.PERSISTED: frozenset({PipelineStage.DELIVERED}),
    PipelineStage.SHORT_CIRCUITED: frozenset(),
    PipelineStage.DELIVERED: frozenset(),
    PipelineStage.FAILED: frozenset(),
}

TERMINAL_STAGES: FrozenSet[PipelineStage] = frozenset(
    stage for stage, targets in _TRANSITIONS.items() if not targets
)


class PipelineRun:
    """Tracks the stage and absorbed failures of a single run.

    Attributes:
        stage: Current stage of the run
        history: Every stage the run has been in, in order
        degradations: Non-fatal failures recorded so far
    """

    def __init__(self) -> None:
        self.stage: PipelineStage = PipelineStage.RECEIVED
        self.history: List[PipelineStage] = [PipelineStage.RECEIVED]
        self.degradations: List[Degradation] = []

    def advance(self, stage: PipelineStage) -> None:
        """Move to the next stage.

        Raises:
            AssertionError: If the transition is not allowed
        """
        assert stage in _TRANSITIONS[self.stage], (
            f"Invalid pipeline transition {self.stage.value} -> {stage.value}"
        )
        logger.debug(f"Pipeline stage {self.stage.value} -> {stage.value}")
        self.stage = stage
        self.history.append(stage)

    def degrade(self, kind: Degradation) -> None:
        """Record a failure that the run absorbed."""
        self.degradations.append(kind)

    def is_terminal(self) -> bool:
        return self.stage in TERMINAL_STAGES
