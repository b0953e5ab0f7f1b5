"""RecommendationCompressor: keep the highest-priority tool recommendations."""

from __future__ import annotations

from dataclasses import replace

from ..types import CompressionConfig, RecommendationCompression, RecommendationSet


class RecommendationCompressor:
    def __init__(self, config: CompressionConfig | None = None) -> None:
        self.config = config or CompressionConfig()

    def compress(
        self,
        recommendations: RecommendationSet | None,
        config: CompressionConfig | None = None,
    ) -> RecommendationCompression:
        """Limit recommended tools (by priority) and tool chains (by position)."""
        config = config or self.config
        actions: list[str] = []

        if recommendations is None:
            return RecommendationCompression(recommendations=None, actions=actions)

        limit = config.max_recommendations
        tools = list(recommendations.recommended_tools)
        if len(tools) > limit:
            tools = sorted(tools, key=lambda r: r.priority, reverse=True)[:limit]
            actions.append(
                f"Limited tool recommendations from {len(recommendations.recommended_tools)} to {limit}"
            )

        # Chains keep their original order
        chains = list(recommendations.tool_chains)
        if len(chains) > limit:
            chains = chains[:limit]
            actions.append(f"Limited tool chains from {len(recommendations.tool_chains)} to {limit}")

        compressed = replace(
            recommendations,
            recommended_tools=tools,
            tool_chains=chains,
            memory_matches=list(recommendations.memory_matches),
        )
        return RecommendationCompression(recommendations=compressed, actions=actions)
