"""ContextAssembler: compress a registry listing into one prompt-ready bundle."""

from __future__ import annotations

from dataclasses import replace

from ..types import CompressionConfig, PromptDescriptor, RegistryCompression, RegistryContext
from .tools import ToolSetCompressor, shorten_description


class ContextAssembler:
    """Assemble tools, prompts and resources from a registry listing.

    - Tools go through ToolSetCompressor; missing schemas become ``{}``.
    - Prompt descriptions are shortened like tool descriptions, with no
      limit on the number of prompts.
    - Resources pass through unmodified.
    """

    def __init__(
        self,
        config: CompressionConfig | None = None,
        tool_compressor: ToolSetCompressor | None = None,
    ) -> None:
        self.config = config or CompressionConfig()
        self.tool_compressor = tool_compressor or ToolSetCompressor(self.config)

    def assemble(
        self,
        context: RegistryContext,
        config: CompressionConfig | None = None,
    ) -> RegistryCompression:
        config = config or self.config
        actions: list[str] = []

        tool_result = self.tool_compressor.compress(context.tools, config)
        actions.extend(tool_result.actions)
        tools = [
            t if t.input_schema is not None else replace(t, input_schema={})
            for t in tool_result.tools
        ]

        prompts = [self._compress_prompt(p, config) for p in context.prompts]

        assembled = RegistryContext(
            tools=tools,
            prompts=prompts,
            resources=list(context.resources),
        )
        return RegistryCompression(context=assembled, actions=actions)

    def _compress_prompt(self, prompt: PromptDescriptor, config: CompressionConfig) -> PromptDescriptor:
        if not (config.truncate_descriptions and prompt.description):
            return prompt
        description = shorten_description(prompt.description, config.max_description_length)
        if description is prompt.description:
            return prompt
        return replace(prompt, description=description)
