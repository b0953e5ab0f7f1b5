"""MessageCompressor: fit a conversation into a token ceiling role by role."""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Sequence

from ..token_counter import MESSAGE_OVERHEAD, count_tokens_in_messages, estimate_tokens
from ..types import CompressionResult, Message, TokenCounter
from .system_prompt import SystemPromptCompressor

TRUNCATED_SUFFIX = "... [truncated]"
STRICT_MESSAGE_LIMIT = 10_000


class MessageCompressor:
    """Compress a message list in order.

    System messages get a fixed share of the ceiling (55% for strict limits,
    70% otherwise). Each user/assistant message gets whatever the messages
    before it left over, and is cut only when it would not fit.
    """

    def __init__(self, token_counter: TokenCounter | None = None) -> None:
        self.token_counter = token_counter or estimate_tokens
        self.prompt_compressor = SystemPromptCompressor(self.token_counter)

    def compress(
        self,
        messages: Sequence[Message],
        max_tokens: int,
        force_compression: bool = False,
    ) -> CompressionResult:
        original_tokens = count_tokens_in_messages(messages, self.token_counter)
        if original_tokens <= max_tokens and not force_compression:
            return CompressionResult(
                messages=list(messages),
                original_token_count=original_tokens,
                compressed_token_count=original_tokens,
                compression_ratio=1.0,
                actions=["No compression needed"],
            )

        actions: list[str] = []
        compressed: list[Message] = []
        # Same total as count_tokens_in_messages(compressed), kept incrementally
        used_tokens = 0

        system_ratio = 0.55 if max_tokens <= STRICT_MESSAGE_LIMIT else 0.70
        system_limit = math.floor(max_tokens * system_ratio)

        for message in messages:
            if message.role == "system":
                result = self.prompt_compressor.compress(message.content, system_limit)
                kept = replace(message, content=result.prompt)
                actions.extend(result.actions)
            else:
                kept = self._fit_message(message, max_tokens - used_tokens, actions)

            compressed.append(kept)
            used_tokens += self.token_counter(kept.content) + MESSAGE_OVERHEAD

        compressed_tokens = count_tokens_in_messages(compressed, self.token_counter)
        ratio = compressed_tokens / original_tokens if original_tokens > 0 else 1.0

        return CompressionResult(
            messages=compressed,
            original_token_count=original_tokens,
            compressed_token_count=compressed_tokens,
            compression_ratio=ratio,
            actions=actions,
        )

    def _fit_message(self, message: Message, remaining: int, actions: list[str]) -> Message:
        message_tokens = self.token_counter(message.content)
        if message_tokens <= remaining or remaining <= 0:
            return message

        target_tokens = math.floor(remaining * 0.9)
        max_chars = math.floor(target_tokens * 3.5 * 0.9)
        truncated = message.content[:max_chars] + TRUNCATED_SUFFIX
        actions.append(
            f"Truncated {message.role} message from {message_tokens} to "
            f"{self.token_counter(truncated)} tokens"
        )
        return replace(message, content=truncated)
