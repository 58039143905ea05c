"""Token estimation and compression statistics."""

from __future__ import annotations

import dataclasses
import math


@dataclasses.dataclass(frozen=True, slots=True)
class CompressionStats:
    """Token-based size comparison between an original and a compressed text."""

    original_tokens: int       # estimate_tokens(original)
    compressed_tokens: int     # estimate_tokens(compressed)
    saved_tokens: int          # original_tokens - compressed_tokens (negative if inflated)
    saved_percentage: float    # saved_tokens / original_tokens * 100, 0.0 for empty input


def estimate_tokens(text: str) -> int:
    """Approximate the token count of ``text`` as one token per 4 characters.

    This is a size proxy, not a tokenizer: ``""`` is 0 tokens, 4 characters
    are 1 token and 5 characters are 2.
    """
    return math.ceil(len(text) / 4)


def compute_stats(original: str, compressed: str) -> CompressionStats:
    """Compare the estimated token counts of ``original`` and ``compressed``."""
    original_tokens = estimate_tokens(original)
    compressed_tokens = estimate_tokens(compressed)
    saved_tokens = original_tokens - compressed_tokens
    if original_tokens == 0:
        saved_percentage = 0.0
    else:
        saved_percentage = saved_tokens * 100 / original_tokens
    return CompressionStats(
        original_tokens=original_tokens,
        compressed_tokens=compressed_tokens,
        saved_tokens=saved_tokens,
        saved_percentage=saved_percentage,
    )
