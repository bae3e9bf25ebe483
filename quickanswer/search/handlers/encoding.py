"""
Encoding Handlers - Hashes, Base64 and URL encoding.

Triggers:
  md5 hello          sha256: hello        hash hello (all digests)
  base64 encode hi   b64 decode aGk=      decode base64 aGk=
  url encode a b     urldecode a%20b      parse url https://...
"""

import base64
import hashlib
from typing import Optional
from urllib.parse import quote_plus, unquote_plus, urlsplit

from quickanswer.search.router import Answer, PatternHandler
from quickanswer.utils.helpers import labeled

HASH_ALGORITHMS = ("md5", "sha1", "sha256", "sha512")


class HashHandler(PatternHandler):
    """Hex digests of the query text."""

    name = "hash"
    PATTERNS = (
        r"^(md5)[:\s]+(.+)$",
        r"^(sha1)[:\s]+(.+)$",
        r"^(sha256)[:\s]+(.+)$",
        r"^(sha512)[:\s]+(.+)$",
        r"^(hash)[:\s]+(.+)$",
    )

    async def handle(self, query: str) -> Optional[Answer]:
        groups = self.extract(query)
        if not groups or not groups[1]:
            return None

        algorithm, text = groups[0].lower(), groups[1]
        algorithms = HASH_ALGORITHMS if algorithm == "hash" else (algorithm,)

        digests = {
            name: hashlib.new(name, text.encode("utf-8")).hexdigest()
            for name in algorithms
        }

        content = labeled("Input", text) + "<br>"
        content += "".join(labeled(name.upper(), digest, code=True) for name, digest in digests.items())

        return Answer(
            kind="hash",
            query=query,
            title="Hash Generator",
            content=content,
            data={"input": text, **digests},
        )


class Base64Handler(PatternHandler):
    """Base64 encode or decode the query text."""

    name = "base64"
    PATTERNS = (
        r"^(?:base64|b64)\s+(encode|decode)[:\s]+(.+)$",
        r"^(encode|decode)\s+base64[:\s]+(.+)$",
    )

    async def handle(self, query: str) -> Optional[Answer]:
        groups = self.extract(query)
        if not groups or not groups[1]:
            return None

        operation, text = groups[0].lower(), groups[1]

        if operation == "decode":
            try:
                result = base64.b64decode(text, validate=True).decode("utf-8", errors="replace")
            except ValueError:
                return Answer(
                    kind="base64",
                    query=query,
                    title="Base64 Decoder",
                    content="Error: Invalid base64 string",
                )
            label = "Decoded"
        else:
            result = base64.b64encode(text.encode("utf-8")).decode("ascii")
            label = "Encoded"

        return Answer(
            kind="base64",
            query=query,
            title=f"Base64 {label}",
            content=labeled("Input", text) + "<br>" + labeled(label, result, code=True),
            data={
                "input": text,
                "output": result,
                "operation": label.lower(),
            },
        )


class URLHandler(PatternHandler):
    """URL encode, decode or parse the query text."""

    name = "url"
    PATTERNS = (
        r"^url\s*(encode|decode)[:\s]+(.+)$",
        r"^(parse)\s+url[:\s]+(.+)$",
    )

    async def handle(self, query: str) -> Optional[Answer]:
        groups = self.extract(query)
        if not groups or not groups[1]:
            return None

        operation, text = groups[0].lower(), groups[1]

        if operation == "parse":
            return self._parse(query, text)

        if operation == "decode":
            result = unquote_plus(text)
            label = "Decoded"
        else:
            result = quote_plus(text)
            label = "Encoded"

        return Answer(
            kind="url",
            query=query,
            title=f"URL {label}",
            content=labeled("Input", text) + "<br>" + labeled(label, result, code=True),
            data={
                "input": text,
                "output": result,
                "operation": label.lower(),
            },
        )

    def _parse(self, query: str, text: str) -> Answer:
        try:
            parts = urlsplit(text)
        except ValueError:
            return Answer(
                kind="url",
                query=query,
                title="URL Parser",
                content="Error: Invalid URL",
            )

        fields = {
            "scheme": parts.scheme,
            "host": parts.netloc,
            "path": parts.path,
            "query": parts.query,
            "fragment": parts.fragment,
        }

        content = labeled("URL", text) + "<br>"
        content += labeled("Scheme", parts.scheme)
        content += labeled("Host", parts.netloc)
        content += labeled("Path", parts.path)
        if parts.query:
            content += labeled("Query", parts.query)
        if parts.fragment:
            content += labeled("Fragment", parts.fragment)

        return Answer(
            kind="url",
            query=query,
            title="URL Parser",
            content=content,
            data={"input": text, **fields},
        )
