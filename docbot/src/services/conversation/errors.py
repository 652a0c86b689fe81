"""Errors raised by the conversation pipeline.

Only fatal errors leave the pipeline. Degraded failures are absorbed inside a
run and reported through DeliveryOutcome.degradations.
"""

from typing import Optional


class PipelineError(Exception):
    """Base class for fatal pipeline errors."""

    status_code = 500
    default_message = "Conversation pipeline error"

    def __init__(self, message: Optional[str] = None, details: Optional[str] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class BotNotFoundError(PipelineError):
    """No bot is registered under the given api key."""

    status_code = 404
    default_message = "Bot configuration not found."


class MalformedInputError(PipelineError):
    """The inbound envelope lacks data required to process it."""

    status_code = 400
    default_message = "Malformed webhook payload."
