"""
Definition Handler - Word definitions from the Free Dictionary API.

Triggers:
  define serendipity       definition: word
  meaning of word          what is word?      what does word mean?

DictionaryHandler answers the same way for "dictionary", "dict" and
"lookup" prefixes.

This is the one handler that leaves the process. Lookup failures are shown
to the user as answer content; task cancellation propagates to the caller.
"""

from typing import Any, Optional
from urllib.parse import quote

import httpx
from loguru import logger

from quickanswer.search.router import Answer, PatternHandler
from quickanswer.utils.helpers import escape

DEFAULT_API_URL = "https://api.dictionaryapi.dev/api/v2/entries/en/{word}"


class DefinitionHandler(PatternHandler):
    """Look up a word in the Free Dictionary API."""

    name = "definition"
    PATTERNS = (
        r"^define[:\s]+(.+)$",
        r"^definition[:\s]+(.+)$",
        r"^meaning\s+of\s+(.+)$",
        r"^what\s+does\s+(.+)\s+mean\??$",
        r"^what\s+is\s+(.+?)\??$",
    )

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 10.0,
        max_definitions: int = 3,
        user_agent: str = "QuickAnswer/0.1",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__()
        self.api_url = api_url
        self.timeout = timeout
        self.max_definitions = max_definitions
        self.user_agent = user_agent
        self._transport = transport

    async def handle(self, query: str) -> Optional[Answer]:
        word = self.argument(query)
        if not word:
            return None

        url = self.api_url.format(word=quote(word, safe=""))

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
                transport=self._transport,
            ) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            logger.warning(f"Definition lookup for '{word}' failed: {e}")
            return self._message(query, word, f"Could not look up '{escape(word)}' right now")

        if response.status_code != 200:
            logger.debug(f"Dictionary API returned {response.status_code} for '{word}'")
            return self._not_found(query, word)

        try:
            entries = response.json()
        except ValueError:
            logger.warning(f"Dictionary API sent invalid JSON for '{word}'")
            return self._message(query, word, f"Could not look up '{escape(word)}' right now")

        if not isinstance(entries, list) or not entries or not isinstance(entries[0], dict):
            return self._not_found(query, word)

        return self._render(query, entries[0])

    def _render(self, query: str, entry: dict) -> Answer:
        word = str(entry.get("word") or "")
        phonetic = str(entry.get("phonetic") or "")
        origin = str(entry.get("origin") or "")
        meanings = self._meanings(entry)

        content = f"<strong>{escape(word)}</strong>"
        if phonetic:
            content += f' <span class="phonetic">{escape(phonetic)}</span>'
        content += "<br><br>"

        for meaning in meanings:
            content += f"<em>{escape(meaning['part_of_speech'])}</em><br>"
            for i, definition in enumerate(meaning["definitions"], start=1):
                content += f"{i}. {escape(definition['definition'])}<br>"
                if definition["example"]:
                    content += (
                        f'   <span class="example">Example: "{escape(definition["example"])}"</span><br>'
                    )
            content += "<br>"

        if origin:
            content += f"<strong>Origin:</strong> {escape(origin)}"

        return Answer(
            kind="definition",
            query=query,
            title=f"Definition: {word}",
            content=content,
            source="Free Dictionary API",
            source_url="https://dictionaryapi.dev/",
            data={
                "word": word,
                "phonetic": phonetic,
                "meanings": meanings,
            },
        )

    def _meanings(self, entry: dict) -> list[dict[str, Any]]:
        """Reduce the API's meanings to plain strings, capped per part of speech."""
        meanings = []
        for meaning in entry.get("meanings") or []:
            if not isinstance(meaning, dict):
                continue
            definitions = []
            for item in (meaning.get("definitions") or [])[:self.max_definitions]:
                if not isinstance(item, dict) or not item.get("definition"):
                    continue
                definitions.append({
                    "definition": str(item["definition"]),
                    "example": str(item.get("example") or ""),
                })
            meanings.append({
                "part_of_speech": str(meaning.get("partOfSpeech") or ""),
                "definitions": definitions,
            })
        return meanings

    def _not_found(self, query: str, word: str) -> Answer:
        return self._message(query, word, f"No definition found for '{escape(word)}'")

    def _message(self, query: str, word: str, content: str) -> Answer:
        return Answer(
            kind="definition",
            query=query,
            title=f"Definition: {word}",
            content=content,
        )


class DictionaryHandler(DefinitionHandler):
    """Same lookup as DefinitionHandler under dictionary-style prefixes."""

    name = "dictionary"
    PATTERNS = (
        r"^dictionary[:\s]+(.+)$",
        r"^dict[:\s]+(.+)$",
        r"^lookup[:\s]+(.+)$",
    )
