"""Token counting using tiktoken."""

from __future__ import annotations

from typing import Any

import tiktoken

from ..config import TIKTOKEN_ENCODING

# Lazy-loaded encoder
_encoder: Any | None = None


def get_encoder() -> Any:
    """Get or create the tiktoken encoder."""
    global _encoder
    if _encoder is None:
        _encoder = tiktoken.get_encoding(TIKTOKEN_ENCODING)
    return _encoder


def count_tokens(text: str) -> int:
    """Count cl100k_base tokens in text."""
    if not text:
        return 0
    return len(get_encoder().encode(text))


def estimate_tokens(text: str) -> int:
    """Quick token estimate without full encoding.

    Uses heuristic: ~4 characters per token on average for English.
    Useful for progress output on large batches where exact counts are not needed.
    """
    return len(text) // 4


def reduction_percent(before: int, after: int) -> float:
    """Return how much smaller ``after`` is than ``before``, in percent."""
    if before <= 0:
        return 0.0
    return round((before - after) / before * 100.0, 1)
