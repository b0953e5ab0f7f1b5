"""ExampleSetCompressor: keep the most similar few-shot examples."""

from __future__ import annotations

from typing import Sequence

from ..types import CompressionConfig, ExampleCompression, RankedExample


class ExampleSetCompressor:
    def __init__(self, config: CompressionConfig | None = None) -> None:
        self.config = config or CompressionConfig()

    def compress(
        self,
        examples: Sequence[RankedExample],
        config: CompressionConfig | None = None,
    ) -> ExampleCompression:
        """Sort by similarity (highest first) and keep ``max_examples``."""
        config = config or self.config
        actions: list[str] = []

        ranked = sorted(examples, key=lambda e: e.similarity, reverse=True)
        kept = ranked[: config.max_examples]
        if len(examples) > config.max_examples:
            actions.append(
                f"Limited examples from {len(examples)} to {config.max_examples} "
                f"(kept highest similarity)"
            )
        return ExampleCompression(examples=kept, actions=actions)
