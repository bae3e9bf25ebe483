"""
Query Router - Dispatches queries to handlers in registration order.

Each handler declares a name, its regex patterns and a cheap can_handle()
predicate. The router strips the query, walks the handlers in the order
they were registered and hands the query to the first one that accepts it.
That handler's result is final, even when it is None.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from loguru import logger

from .errors import MalformedAnswerError


@dataclass
class Answer:
    """A single instant answer produced by a handler."""
    kind: str  # math, convert, hash, base64, url, case, definition, ...
    query: str
    title: str
    content: str = ""  # HTML fragment, user input already escaped
    data: dict[str, Any] = field(default_factory=dict)
    source: str = ""
    source_url: str = ""
    related_html: str = ""

    def __post_init__(self):
        _check_serializable(self.data, f"{self.kind}.data")

    def to_dict(self) -> dict[str, Any]:
        """Boundary shape for callers; empty optional fields are omitted."""
        result = {
            "kind": self.kind,
            "query": self.query,
            "title": self.title,
            "content": self.content,
        }
        if self.data:
            result["data"] = self.data
        if self.source:
            result["source"] = self.source
        if self.source_url:
            result["source_url"] = self.source_url
        if self.related_html:
            result["related_html"] = self.related_html
        return result


def _check_serializable(value: Any, path: str) -> None:
    """Raise MalformedAnswerError unless value is plain JSON data."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return
    if isinstance(value, (list, tuple)):
        for i, item in enumerate(value):
            _check_serializable(item, f"{path}[{i}]")
        return
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise MalformedAnswerError(f"{path} has non-string key {key!r}")
            _check_serializable(item, f"{path}.{key}")
        return
    raise MalformedAnswerError(
        f"{path} holds {type(value).__name__}, which is not JSON-serializable"
    )


class SearchHandler(ABC):
    """Base class for all answer handlers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Handler identifier."""
        ...

    @property
    @abstractmethod
    def patterns(self) -> tuple[re.Pattern, ...]:
        """Regexes that trigger this handler, for introspection."""
        ...

    @abstractmethod
    def can_handle(self, query: str) -> bool:
        """Return True if this handler should process the query. Must be pure."""
        ...

    @abstractmethod
    async def handle(self, query: str) -> Optional[Answer]:
        """Return an answer for the query, or None if there is nothing to say."""
        ...


class PatternHandler(SearchHandler):
    """
    Handler driven by an ordered list of regexes.

    Subclasses set `name` and `PATTERNS` (strings, compiled case-insensitive)
    and implement handle(). extract() re-runs the patterns, so can_handle()
    keeps no state between the two calls.
    """

    name = ""
    PATTERNS: tuple[str, ...] = ()

    def __init__(self):
        self._patterns = tuple(re.compile(p, re.IGNORECASE) for p in self.PATTERNS)

    @property
    def patterns(self) -> tuple[re.Pattern, ...]:
        return self._patterns

    def can_handle(self, query: str) -> bool:
        return any(p.search(query) for p in self._patterns)

    def extract(self, query: str) -> Optional[tuple[str, ...]]:
        """
        Return the trimmed capture groups of the first matching pattern.

        Returns:
            Tuple of group strings, or None when no pattern matches.
        """
        for pattern in self._patterns:
            match = pattern.search(query)
            if match:
                return tuple((g or "").strip() for g in match.groups())
        return None

    def argument(self, query: str) -> str:
        """First captured argument, trimmed. Empty string when nothing matched."""
        groups = self.extract(query)
        if not groups:
            return ""
        return groups[0]


class QueryRouter:
    """Routes queries to the first handler that accepts them."""

    def __init__(self):
        self._handlers: list[SearchHandler] = []

    @property
    def handlers(self) -> tuple[SearchHandler, ...]:
        return tuple(self._handlers)

    def register(self, handler: SearchHandler) -> None:
        """Append a handler. Registration order is dispatch order."""
        self._handlers.append(handler)

    def find_handler(self, query: str) -> Optional[SearchHandler]:
        """Return the handler that would win for query, without calling it."""
        query = query.strip()
        if not query:
            return None
        for handler in self._handlers:
            if handler.can_handle(query):
                return handler
        return None

    async def resolve(self, query: str) -> Optional[Answer]:
        """
        Resolve a query to an answer.

        Args:
            query: The raw search query string

        Returns:
            The winning handler's answer, or None if the query is empty,
            no handler matches, or the winning handler has nothing to say.
            Handler exceptions propagate unchanged.
        """
        query = query.strip()
        if not query:
            return None

        handler = self.find_handler(query)
        if handler is None:
            logger.debug(f"No handler for query '{query[:80]}'")
            return None

        logger.debug(f"Routing '{query[:80]}' to {handler.name}")
        return await handler.handle(query)
