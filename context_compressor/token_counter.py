"""Token counting utilities."""

from __future__ import annotations

import math
import re
from typing import Sequence

from .types import Message, MessageTokens, TokenBreakdown, TokenCounter

# ASCII word characters only: non-ASCII letters count as special characters
_SPECIAL_CHAR_RE = re.compile(r"[^A-Za-z0-9_\s]")

SAFETY_FACTOR = 1.75
BASE_OVERHEAD = 10
MESSAGE_OVERHEAD = 5


def estimate_tokens(text: str) -> int:
    """Conservative word-based estimate, deliberately above real tokenizers.

    Shorter average words cost fewer tokens per word, longer words more.
    Punctuation and non-ASCII characters add half a token each. A flat
    framing overhead is added and the total is scaled by SAFETY_FACTOR.
    """
    if not text:
        return 0
    stripped = text.strip()
    words = stripped.split()

    avg_word_length = len(stripped) / len(words) if words else 4
    if avg_word_length < 3:
        tokens_per_word = 1.1
    elif avg_word_length > 6:
        tokens_per_word = 1.5
    else:
        tokens_per_word = 1.3

    word_tokens = len(words) * tokens_per_word
    special_overhead = len(_SPECIAL_CHAR_RE.findall(text)) * 0.5
    return math.ceil((word_tokens + special_overhead + BASE_OVERHEAD) * SAFETY_FACTOR)


def count_tokens_in_messages(
    messages: Sequence[Message],
    token_counter: TokenCounter = estimate_tokens,
) -> int:
    """Sum of content estimates plus a per-message formatting overhead."""
    if not messages:
        return 0
    total = sum(token_counter(m.content) for m in messages)
    return total + len(messages) * MESSAGE_OVERHEAD


def get_token_breakdown(
    messages: Sequence[Message],
    token_counter: TokenCounter = estimate_tokens,
) -> TokenBreakdown:
    """Per-message token counts for debugging."""
    per_message = [
        MessageTokens(
            role=m.role,
            tokens=token_counter(m.content),
            preview=m.content[:100] + ("..." if len(m.content) > 100 else ""),
        )
        for m in messages
    ]
    return TokenBreakdown(
        total=count_tokens_in_messages(messages, token_counter),
        per_message=per_message,
    )


def create_token_counter(mode: str = "estimate") -> TokenCounter:
    """Factory for token counters.

    Modes:
        "estimate" - word heuristic above (zero deps)
        "tiktoken" - requires tiktoken package
        "callable:module.path:func" - custom callable
    """
    if mode == "estimate":
        return estimate_tokens

    if mode == "tiktoken":
        try:
            import tiktoken
        except ImportError:
            raise ImportError(
                "tiktoken not installed. Install with: pip install context-compressor[tiktoken]"
            )
        enc = tiktoken.encoding_for_model("gpt-4")
        return lambda text: len(enc.encode(text)) if text else 0

    if mode.startswith("callable:"):
        # Format: callable:module.path:func_name
        parts = mode[len("callable:"):].rsplit(":", 1)
        if len(parts) != 2:
            raise ValueError(f"Invalid callable spec: {mode}. Expected callable:module:func")
        module_path, func_name = parts
        import importlib
        mod = importlib.import_module(module_path)
        return getattr(mod, func_name)

    raise ValueError(f"Unknown token counter mode: {mode}")
