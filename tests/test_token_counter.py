"""Tests for token estimation and the token counter factory."""

from typing import get_args

import pytest

from context_compressor.token_counter import (
    count_tokens_in_messages,
    create_token_counter,
    estimate_tokens,
    get_token_breakdown,
)
from context_compressor.types import Message, Role


class TestEstimateTokens:
    def test_empty_string(self):
        assert estimate_tokens("") == 0

    def test_whitespace_only_charges_base_overhead(self):
        # no words -> average length taken as 4, only the framing overhead remains
        assert estimate_tokens("   \n\t ") == 18  # ceil(10 * 1.75)

    def test_non_ascii_letters_count_as_special(self):
        # 1 word of 8 chars -> 1.5, each of the 8 characters adds 0.5
        assert estimate_tokens("日本語のテキスト") == 28  # ceil((1.5 + 4 + 10) * 1.75)
        assert estimate_tokens("café") == 21  # ceil((1.3 + 0.5 + 10) * 1.75)

    def test_single_word(self):
        # 1 word * 1.3 + 10 overhead, * 1.75 -> 19.775
        assert estimate_tokens("Test") == 20

    def test_punctuation_overhead(self):
        # avg word length 6.5 -> 1.5/word, two punctuation chars -> +1.0
        assert estimate_tokens("Hello, world!") == 25

    def test_short_words_use_lower_multiplier(self):
        # "a b" -> avg 1.5 -> 1.1/word
        assert estimate_tokens("a b") == 22  # ceil((2.2 + 10) * 1.75)

    def test_long_words_use_higher_multiplier(self):
        assert estimate_tokens("orchestration orchestration") == 23  # ceil((3 + 10) * 1.75)

    def test_longer_text_costs_more(self):
        short = "This is a sentence."
        long = short * 10
        assert estimate_tokens(long) > estimate_tokens(short)

    @pytest.mark.parametrize("text", ["x", "!!!", "日本語のテキスト", "a\nb\nc", "{'k': [1, 2]}"])
    def test_non_negative(self, text):
        assert estimate_tokens(text) >= 0

    def test_overestimates_characters_per_token(self):
        text = "The planner agent selects tools from the registry. " * 20
        assert estimate_tokens(text) > len(text) / 4


class TestCountTokensInMessages:
    def test_empty_list(self):
        assert count_tokens_in_messages([]) == 0

    def test_whitespace_message_is_not_free(self):
        assert count_tokens_in_messages([Message(role="user", content=" ")]) == 23

    def test_single_message_adds_overhead(self):
        messages = [Message(role="user", content="Test")]
        assert count_tokens_in_messages(messages) == estimate_tokens("Test") + 5

    def test_overhead_strictly_positive(self, chat_messages):
        content_total = sum(estimate_tokens(m.content) for m in chat_messages)
        assert count_tokens_in_messages(chat_messages) > content_total
        assert count_tokens_in_messages(chat_messages) == content_total + 5 * len(chat_messages)

    def test_more_messages_cost_more(self, chat_messages):
        assert count_tokens_in_messages(chat_messages) > count_tokens_in_messages(chat_messages[:1])

    def test_custom_counter(self):
        messages = [Message(role="user", content="abcd"), Message(role="assistant", content="ef")]
        assert count_tokens_in_messages(messages, token_counter=len) == 6 + 10


def test_token_breakdown(chat_messages):
    long = Message(role="user", content="x" * 150)
    breakdown = get_token_breakdown(chat_messages + [long])
    assert breakdown.total == count_tokens_in_messages(chat_messages + [long])
    assert [m.role for m in breakdown.per_message] == ["system", "user", "assistant", "user"]
    assert breakdown.per_message[0].tokens == estimate_tokens(chat_messages[0].content)
    assert breakdown.per_message[0].preview == chat_messages[0].content
    assert breakdown.per_message[3].preview == "x" * 100 + "..."


def test_token_breakdown_empty():
    breakdown = get_token_breakdown([])
    assert breakdown.total == 0
    assert breakdown.per_message == []


class TestCreateTokenCounter:
    def test_estimate_mode(self):
        assert create_token_counter("estimate") is estimate_tokens

    def test_default_mode(self):
        assert create_token_counter() is estimate_tokens

    def test_callable_mode(self):
        counter = create_token_counter("callable:context_compressor.token_counter:estimate_tokens")
        assert counter("Test") == 20

    def test_invalid_callable_spec(self):
        with pytest.raises(ValueError, match="Invalid callable spec"):
            create_token_counter("callable:no_function_part")

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="Unknown token counter mode"):
            create_token_counter("bpe")


def test_breakdown_roles_match_message_roles(chat_messages):
    breakdown = get_token_breakdown(chat_messages)
    assert {m.role for m in breakdown.per_message} <= set(get_args(Role))
