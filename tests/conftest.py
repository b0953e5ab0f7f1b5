"""Shared fixtures for context-compressor tests."""

from __future__ import annotations

import pytest

from context_compressor.types import (
    Message,
    PromptDescriptor,
    RankedExample,
    RecommendationSet,
    RegistryContext,
    ResourceDescriptor,
    ToolChain,
    ToolDescriptor,
    ToolRecommendation,
)


def words(word: str, count: int) -> str:
    """``count`` copies of ``word`` separated by single spaces."""
    return " ".join([word] * count)


@pytest.fixture
def long_description() -> str:
    return "Lists facilities. " + words("Returns permit, inspection and contaminant records", 20)


@pytest.fixture
def many_tools() -> list[ToolDescriptor]:
    return [
        ToolDescriptor(
            name=f"tool_{i}",
            description=f"Tool number {i}.",
            input_schema={"properties": {"query": {"type": "string"}}, "required": ["query"]},
        )
        for i in range(20)
    ]


@pytest.fixture
def wide_schema_tool() -> ToolDescriptor:
    """8 required + 4 unimportant optional params."""
    properties = {f"r{i}": {"type": "string"} for i in range(1, 9)}
    for name in ("verbose", "page", "limit", "offset"):
        properties[name] = {"type": "integer"}
    return ToolDescriptor(
        name="big_tool",
        description="Has many params.",
        input_schema={
            "type": "object",
            "properties": properties,
            "required": [f"r{i}" for i in range(1, 9)],
        },
    )


@pytest.fixture
def registry_context(long_description) -> RegistryContext:
    return RegistryContext(
        tools=[
            ToolDescriptor(name="list_facilities", description=long_description),
            ToolDescriptor(name="get_facility", description="Get one facility.", input_schema={
                "properties": {"facility_id": {"type": "string"}},
                "required": ["facility_id"],
            }),
        ],
        prompts=[
            PromptDescriptor(name="compliance_report", description=long_description),
            PromptDescriptor(name="short_prompt", description="Short."),
        ],
        resources=[
            ResourceDescriptor(uri="facility://all", name="Facilities", mime_type="application/json"),
        ],
    )


@pytest.fixture
def ranked_examples() -> list[RankedExample]:
    return [
        RankedExample(example={"query": f"q{s}"}, similarity=s)
        for s in (0.9, 0.5, 0.7, 0.3, 0.1)
    ]


@pytest.fixture
def recommendation_set() -> RecommendationSet:
    return RecommendationSet(
        recommended_tools=[
            ToolRecommendation(tool_name="low", priority=1),
            ToolRecommendation(tool_name="high", priority=5),
            ToolRecommendation(tool_name="mid", priority=3),
        ],
        tool_chains=[
            ToolChain(sequence=["list_facilities", "get_facility"], rationale="lookup"),
            ToolChain(sequence=["search", "get_facility"], rationale="search first"),
            ToolChain(sequence=["get_facility"], rationale="direct", success_rate=0.9),
        ],
        memory_matches=[{"query": "old query", "tools": ["get_facility"], "similarity": 0.8}],
    )


@pytest.fixture
def chat_messages() -> list[Message]:
    return [
        Message(role="system", content="You are a planning agent."),
        Message(role="user", content="Which facilities exceeded SO2 limits last month?"),
        Message(role="assistant", content="Let me check the emissions records."),
    ]
