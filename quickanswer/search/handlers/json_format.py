"""
JSON Handler - Validate, pretty-print and minify JSON.

Triggers:
  json {"a": 1}            json: [1, 2]          format json {...}
  validate json {...}      prettify json {...}   minify json {...}
  json format {...}        json validate {...}   json minify {...}

Invalid input is answered with the parser's message and the line and
column it stopped at.
"""

import json
import math
import re
from typing import Any, Optional

from quickanswer.search.router import Answer, PatternHandler
from quickanswer.utils.helpers import escape

MINIFY_QUERY = re.compile(r"^(?:minify\s+json|json\s+minify)\b", re.IGNORECASE)
MINIFY_PREFIX = re.compile(r"^minify\s+", re.IGNORECASE)

TYPE_NAMES = (
    (dict, "Object"),
    (list, "Array"),
    (str, "String"),
    (bool, "Boolean"),
    (int, "Number"),
    (float, "Number"),
)


def _parse_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number {text} is out of range")
    return value


def _reject_constant(name: str):
    raise ValueError(f"invalid literal {name}")


def parse_json(text: str) -> Any:
    """Strict json.loads: no NaN, Infinity or out-of-range numbers."""
    return json.loads(text, parse_float=_parse_float, parse_constant=_reject_constant)


def type_name(value: Any) -> str:
    if value is None:
        return "Null"
    for cls, name in TYPE_NAMES:
        if isinstance(value, cls):
            return name
    return "Unknown"


def _children(value: Any) -> list:
    if isinstance(value, dict):
        return list(value.values())
    if isinstance(value, list):
        return value
    return []


def tree_depth(value: Any) -> int:
    """Nesting depth; scalars are 0, an empty object or array is 1."""
    if not isinstance(value, (dict, list)):
        return 0
    return 1 + max((tree_depth(child) for child in _children(value)), default=0)


def count_keys(value: Any) -> int:
    own = len(value) if isinstance(value, dict) else 0
    return own + sum(count_keys(child) for child in _children(value))


def count_containers(value: Any, cls: type) -> int:
    own = 1 if isinstance(value, cls) else 0
    return own + sum(count_containers(child, cls) for child in _children(value))


def with_line_numbers(text: str) -> str:
    return "\n".join(f"{i:3d} | {line}" for i, line in enumerate(text.split("\n"), start=1))


class JSONHandler(PatternHandler):
    """Validate JSON and show it formatted or minified."""

    name = "json"
    # Mode words come first so they are not mistaken for the payload
    PATTERNS = (
        r"^(?:format|validate|prettify|minify)\s+json[:\s]+(.+)$",
        r"^json\s+(?:format|validate|prettify|minify)[:\s]+(.+)$",
        r"^json[:\s]+(.+)$",
    )

    async def handle(self, query: str) -> Optional[Answer]:
        text = self.argument(query)
        minify = bool(MINIFY_QUERY.match(query))
        if MINIFY_PREFIX.match(text):
            minify = True
            text = MINIFY_PREFIX.sub("", text, count=1)
        if not text:
            return None

        try:
            parsed = parse_json(text)
            pretty = json.dumps(parsed, indent=2, ensure_ascii=False)
            minified = json.dumps(parsed, separators=(",", ":"), ensure_ascii=False)
            stats = {
                "type": type_name(parsed),
                "depth": tree_depth(parsed),
                "keys": count_keys(parsed),
                "objects": count_containers(parsed, dict),
                "arrays": count_containers(parsed, list),
            }
        except json.JSONDecodeError as e:
            return self._invalid(query, text, e.msg, e.lineno, e.colno)
        except RecursionError:
            return self._invalid(query, text, "nested too deeply", 1, 1)
        except ValueError as e:
            return self._invalid(query, text, str(e), 1, 1)

        output, title = (minified, "JSON Minifier") if minify else (pretty, "JSON Formatter")

        content = (
            '<div class="json-result">\n'
            "<strong>Status:</strong> Valid JSON<br><br>\n"
            "<strong>Statistics:</strong><br>\n<ul>\n"
            f"<li>Type: {stats['type']}</li>\n"
            f"<li>Size (formatted): {len(pretty.encode('utf-8'))} bytes</li>\n"
            f"<li>Size (minified): {len(minified.encode('utf-8'))} bytes</li>\n"
            f"<li>Depth: {stats['depth']}</li>\n"
            f"<li>Total keys: {stats['keys']}</li>\n"
            f"<li>Objects: {stats['objects']}</li>\n"
            f"<li>Arrays: {stats['arrays']}</li>\n"
            "</ul>\n"
            f"<strong>Output:</strong><br>\n<pre><code>{escape(output)}</code></pre>\n"
            "</div>"
        )

        return Answer(
            kind="json",
            query=query,
            title=title,
            content=content,
            data={
                "valid": True,
                "input": text,
                "pretty": pretty,
                "minified": minified,
                **stats,
            },
        )

    def _invalid(self, query: str, text: str, message: str, line: int, position: int) -> Answer:
        detail = f"{message} (line {line}, position {position})"
        return Answer(
            kind="json",
            query=query,
            title="JSON Validator",
            content=(
                '<div class="json-result json-error">\n'
                "<strong>Status:</strong> Invalid JSON<br><br>\n"
                f"<strong>Error:</strong> {escape(detail)}<br><br>\n"
                f"<strong>Input:</strong><br>\n<pre><code>{escape(with_line_numbers(text))}</code></pre>\n"
                "</div>"
            ),
            data={
                "valid": False,
                "error": message,
                "line": line,
                "position": position,
                "input": text,
            },
        )
