"""SystemPromptCompressor: iteratively truncate a long prompt toward a target."""

from __future__ import annotations

import logging
import math

from ..token_counter import estimate_tokens
from ..types import PromptCompression, TokenCounter, TruncationResult

logger = logging.getLogger(__name__)

TRUNCATION_MARKER = "\n\n[Context truncated due to token limit]"
MAX_REFINEMENT_ITERATIONS = 5
STRICT_PROMPT_LIMIT = 6000


def truncate_to_target(
    text: str,
    target_tokens: int,
    max_chars: int,
    token_counter: TokenCounter = estimate_tokens,
    max_iterations: int = MAX_REFINEMENT_ITERATIONS,
) -> TruncationResult:
    """Cut ``text`` to ``max_chars`` and shrink until it fits ``target_tokens``.

    Each refinement scales the cut by ``target / actual * 0.9``. The loop stops
    after ``max_iterations`` refinements and accepts the last cut either way.
    """
    max_chars = max(0, max_chars)
    truncated = text[:max_chars]
    tokens = token_counter(truncated)

    iterations = 0
    while tokens > target_tokens and iterations < max_iterations:
        ratio = target_tokens / tokens
        max_chars = max(0, math.floor(max_chars * ratio * 0.9))
        truncated = text[:max_chars]
        tokens = token_counter(truncated)
        iterations += 1

    return TruncationResult(
        text=truncated,
        tokens=tokens,
        iterations=iterations,
        converged=tokens <= target_tokens,
    )


class SystemPromptCompressor:
    """Shrink a system prompt to roughly 70-75% of its token ceiling.

    Ceilings of STRICT_PROMPT_LIMIT or less get the lower ratio and a smaller
    chars-per-token guess. This is best-effort: the result is not guaranteed
    to be under the ceiling.
    """

    def __init__(self, token_counter: TokenCounter | None = None) -> None:
        self.token_counter = token_counter or estimate_tokens

    def compress(self, prompt: str, max_tokens: int) -> PromptCompression:
        actions: list[str] = []
        current_tokens = self.token_counter(prompt)
        if current_tokens <= max_tokens:
            return PromptCompression(prompt=prompt, actions=actions)

        strict = max_tokens <= STRICT_PROMPT_LIMIT
        target_ratio = 0.70 if strict else 0.75
        target_tokens = math.floor(max_tokens * target_ratio)
        chars_per_token = 3.2 if strict else 3.5
        max_chars = math.floor(target_tokens * chars_per_token * 0.95)

        result = truncate_to_target(prompt, target_tokens, max_chars, self.token_counter)
        truncated = result.text + TRUNCATION_MARKER
        new_tokens = self.token_counter(truncated)

        actions.append(
            f"Truncated system prompt from {current_tokens} to {new_tokens} tokens "
            f"(target: {target_tokens}, iterations: {result.iterations})"
        )
        if not result.converged:
            logger.warning(
                f"System prompt truncation stopped at {result.tokens} tokens "
                f"(target {target_tokens}) after {result.iterations} iterations"
            )
            actions.append(
                f"System prompt truncation did not converge within {result.iterations} iterations"
            )

        return PromptCompression(prompt=truncated, actions=actions, truncation=result)
