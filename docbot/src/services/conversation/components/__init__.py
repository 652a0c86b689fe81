"""Components of the conversation pipeline."""

from .context_assembler import ContextAssembler
from .reply_chunker import split_reply

__all__ = ["ContextAssembler", "split_reply"]
