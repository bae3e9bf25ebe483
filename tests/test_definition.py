"""
Tests for the definition and dictionary handlers.

HTTP goes through httpx.MockTransport; nothing leaves the process.
"""

import asyncio

import httpx
import pytest

from quickanswer.search.handlers.definition import DefinitionHandler, DictionaryHandler


class TestDefinitionMatching:
    """Test query patterns."""

    @pytest.mark.parametrize("query, word", [
        ("define serendipity", "serendipity"),
        ("definition: serendipity", "serendipity"),
        ("meaning of serendipity", "serendipity"),
        ("what does serendipity mean?", "serendipity"),
        ("what is serendipity?", "serendipity"),
        ("What is serendipity", "serendipity"),
    ])
    def test_argument(self, query, word):
        h = DefinitionHandler()
        assert h.can_handle(query) is True
        assert h.argument(query) == word

    def test_no_match(self):
        assert DefinitionHandler().can_handle("serendipity") is False

    def test_dictionary_prefixes(self):
        h = DictionaryHandler()
        assert h.can_handle("dict serendipity") is True
        assert h.can_handle("lookup: serendipity") is True
        assert h.can_handle("define serendipity") is False


class TestDefinitionLookup:
    """Test rendering of API responses and failures."""

    @pytest.mark.asyncio
    async def test_found(self, dictionary_transport):
        h = DefinitionHandler(transport=dictionary_transport)
        answer = await h.handle("define serendipity")

        assert answer.kind == "definition"
        assert answer.title == "Definition: serendipity"
        assert answer.source == "Free Dictionary API"
        assert answer.source_url == "https://dictionaryapi.dev/"
        assert answer.data["phonetic"] == "/ˌsɛɹ.ən.ˈdɪp.ɪ.ti/"

        meaning = answer.data["meanings"][0]
        assert meaning["part_of_speech"] == "noun"
        assert len(meaning["definitions"]) == 3
        assert meaning["definitions"][0]["example"] == "Finding the book was pure serendipity."
        assert meaning["definitions"][1]["example"] == ""
        assert "<strong>Origin:</strong> Coined by Horace Walpole in 1754." in answer.content

    @pytest.mark.asyncio
    async def test_max_definitions(self, dictionary_transport):
        h = DefinitionHandler(max_definitions=1, transport=dictionary_transport)
        answer = await h.handle("define serendipity")
        assert len(answer.data["meanings"][0]["definitions"]) == 1
        assert "A third sense" not in answer.content

    @pytest.mark.asyncio
    async def test_request(self, dictionary_transport):
        h = DefinitionHandler(
            api_url="https://dict.example/entries/{word}",
            user_agent="TestAgent/1.0",
            transport=dictionary_transport,
        )
        await h.handle("define serendipity")

        request = dictionary_transport.requests[0]
        assert request.method == "GET"
        assert str(request.url) == "https://dict.example/entries/serendipity"
        assert request.headers["User-Agent"] == "TestAgent/1.0"

    @pytest.mark.asyncio
    async def test_word_is_url_quoted(self, dictionary_transport):
        h = DefinitionHandler(transport=dictionary_transport)
        await h.handle("define ice cream")
        assert dictionary_transport.requests[0].url.raw_path.endswith(b"/ice%20cream")

    @pytest.mark.asyncio
    async def test_not_found(self, dictionary_transport):
        h = DefinitionHandler(transport=dictionary_transport)
        answer = await h.handle("define flurbish")
        assert answer.content == "No definition found for 'flurbish'"
        assert answer.data == {}

    @pytest.mark.asyncio
    async def test_empty_result_list(self, dictionary_transport):
        h = DefinitionHandler(transport=dictionary_transport)
        answer = await h.handle("define empty")
        assert answer.content == "No definition found for 'empty'"

    @pytest.mark.asyncio
    async def test_invalid_json(self, dictionary_transport):
        h = DefinitionHandler(transport=dictionary_transport)
        answer = await h.handle("define garbage")
        assert answer.content == "Could not look up 'garbage' right now"

    @pytest.mark.asyncio
    async def test_connection_error(self, dictionary_transport):
        h = DefinitionHandler(transport=dictionary_transport)
        answer = await h.handle("define offline")
        assert answer.content == "Could not look up 'offline' right now"

    @pytest.mark.asyncio
    async def test_word_is_escaped(self, dictionary_transport):
        h = DefinitionHandler(transport=dictionary_transport)
        answer = await h.handle("define <b>")
        assert "<b>" not in answer.content
        assert "&lt;b&gt;" in answer.content

    @pytest.mark.asyncio
    async def test_dictionary_answers_as_definition(self, dictionary_transport):
        h = DictionaryHandler(transport=dictionary_transport)
        answer = await h.handle("dictionary serendipity")
        assert answer.kind == "definition"
        assert answer.data["word"] == "serendipity"

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        async def never_answers(request):
            await asyncio.sleep(3600)

        h = DefinitionHandler(transport=httpx.MockTransport(never_answers))
        task = asyncio.ensure_future(h.handle("define serendipity"))
        await asyncio.sleep(0.01)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
