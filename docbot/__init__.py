"""
Backend package for the document-grounded Telegram bot.

This package contains the core backend components including:
- Flask application and webhook routes
- Conversation pipeline (context, knowledge, generation, delivery)
- LLM integration for Gemini, DeepSeek and vLLM backends
- JSON-backed stores for bots, documentation and conversation history
- Configuration and prompt templates
"""

import logging
import os

# Configure logging with clickable paths before anything else imports logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(levelname)s: %(pathname)s:%(lineno)d %(message)s",
)


class ClickablePathFilter(logging.Filter):
    """Filter to make file paths clickable in the terminal."""

    def filter(self, record: logging.LogRecord) -> bool:
        if hasattr(record, "pathname"):
            # Convert absolute path to relative path from workspace root
            workspace_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
            try:
                record.pathname = os.path.relpath(record.pathname, workspace_root)
            except ValueError:
                # Path on a different drive
                pass
        return True


# Apply filter to root logger
logging.getLogger().addFilter(ClickablePathFilter())
