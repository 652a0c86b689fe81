"""Splitting of replies into messages the chat network accepts."""

import math
from typing import List


def split_reply(text: str, max_length: int) -> List[str]:
    """Split a reply into chunks of at most `max_length` characters.

    Chunks end at the last line break within the limit, so the break starts
    the next chunk. The text is cut hard at the limit instead when there is no
    break, when the break sits in the first half of the window, or when
    splitting there would need more than ceil(len(text) / max_length) chunks
    in total. Joining the chunks gives back the original text.

    Args:
        text: Reply text
        max_length: Maximum characters per chunk

    Returns:
        Chunks in delivery order; empty for empty text

    Raises:
        ValueError: If max_length is not positive
    """
    if max_length <= 0:
        raise ValueError(f"max_length must be positive, got {max_length}")

    chunks: List[str] = []
    remaining = text
    while len(remaining) > max_length:
        # Characters the chunks after this one can still hold
        budget = (math.ceil(len(remaining) / max_length) - 1) * max_length
        split_at = remaining.rfind("\n", 0, max_length + 1)
        if split_at < max_length / 2 or len(remaining) - split_at > budget:
            split_at = max_length
        chunks.append(remaining[:split_at])
        remaining = remaining[split_at:]
    if remaining:
        chunks.append(remaining)
    return chunks
