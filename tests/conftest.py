"""
Shared test fixtures for the QuickAnswer test suite.

Provides settings files written to disk (no mocking of the filesystem)
and a canned Free Dictionary API transport.
"""

import json

import httpx
import pytest
import toml


@pytest.fixture
def tmp_settings(tmp_path):
    """Create a real settings TOML file with all sections."""
    settings_path = tmp_path / "settings.toml"
    data = {
        "logging": {"level": "DEBUG"},
        "search": {"disabled": []},
        "calculator": {"max_length": 100},
        "definition": {"timeout": 2.5, "max_definitions": 2},
    }
    settings_path.write_text(toml.dumps(data))
    return settings_path


DICTIONARY_ENTRY = [
    {
        "word": "serendipity",
        "phonetic": "/ˌsɛɹ.ən.ˈdɪp.ɪ.ti/",
        "meanings": [
            {
                "partOfSpeech": "noun",
                "definitions": [
                    {
                        "definition": "An unsought, unintended, and/or unexpected discovery.",
                        "example": "Finding the book was pure serendipity.",
                        "synonyms": [],
                    },
                    {"definition": "The faculty of making such discoveries."},
                    {"definition": "A third sense."},
                    {"definition": "A fourth sense that should be cut."},
                ],
            }
        ],
        "origin": "Coined by Horace Walpole in 1754.",
    }
]


@pytest.fixture
def dictionary_transport():
    """MockTransport answering like the Free Dictionary API; records requests."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        word = request.url.path.rsplit("/", 1)[-1]
        if word == "serendipity":
            return httpx.Response(200, content=json.dumps(DICTIONARY_ENTRY).encode("utf-8"))
        if word == "garbage":
            return httpx.Response(200, content=b"<html>not json</html>")
        if word == "empty":
            return httpx.Response(200, json=[])
        if word == "offline":
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(404, json={"title": "No Definitions Found"})

    transport = httpx.MockTransport(handler)
    transport.requests = requests
    return transport
