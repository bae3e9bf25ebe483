"""
Tests for the text case handler.
"""

import pytest

from quickanswer.search.handlers.text_case import CaseHandler, case_variants, split_words


class TestSplitWords:
    """Test word boundary detection."""

    @pytest.mark.parametrize("text, words", [
        ("hello world", ["hello", "world"]),
        ("helloWorld", ["hello", "World"]),
        ("HelloWorld", ["Hello", "World"]),
        ("snake_case_text", ["snake", "case", "text"]),
        ("kebab-case-text", ["kebab", "case", "text"]),
        ("  spaced   out ", ["spaced", "out"]),
    ])
    def test_split(self, text, words):
        assert split_words(text) == words


class TestCaseVariants:
    """Test every casing style."""

    def test_variants(self):
        assert case_variants("hello big world") == {
            "upper": "HELLO BIG WORLD",
            "lower": "hello big world",
            "title": "Hello Big World",
            "camel": "helloBigWorld",
            "pascal": "HelloBigWorld",
            "snake": "hello_big_world",
            "kebab": "hello-big-world",
            "constant": "HELLO_BIG_WORLD",
        }

    def test_from_camel_case(self):
        variants = case_variants("someVariableName")
        assert variants["snake"] == "some_variable_name"
        assert variants["kebab"] == "some-variable-name"


class TestCaseHandler:
    """Test matching and answers."""

    @pytest.mark.parametrize("query", [
        "case: hello world",
        "convert case hello",
        "uppercase hello",
        "snake_case helloWorld",
        "kebab-case hello world",
        "camelcase hello world",
    ])
    def test_matches(self, query):
        assert CaseHandler().can_handle(query) is True

    def test_no_match(self):
        assert CaseHandler().can_handle("hello world") is False

    @pytest.mark.asyncio
    async def test_answer(self):
        answer = await CaseHandler().handle("snakecase Hello World")
        assert answer.kind == "case"
        assert answer.data["snake"] == "hello_world"
        assert answer.data["input"] == "Hello World"
        assert "<code>hello_world</code>" in answer.content
