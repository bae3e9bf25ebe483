"""
Escape Handler - A string escaped for ten target formats, or unescaped.

Triggers:
  escape it's <b>           html escape ...        js escape ...
  sql escape ...            regex escape ...       shell escape ...
  csv escape ...            xml escape ...         unescape a%20b
"""

import csv
import html
import io
import re
import shlex
from typing import Optional
from urllib.parse import quote_plus, unquote_plus
from xml.sax.saxutils import escape as xml_escape

from quickanswer.search.router import Answer, PatternHandler
from quickanswer.utils.helpers import escape, labeled

JS_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
    "<": "\\x3C",
    ">": "\\x3E",
    "/": "\\/",
}

SQL_ESCAPES = {
    "'": "''",
    "\\": "\\\\",
    "\x00": "\\0",
    "\n": "\\n",
    "\r": "\\r",
    "\x1a": "\\Z",
}

BACKSLASH_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "\\": "\\",
    "'": "'",
    '"': '"',
}
BACKSLASH_SEQUENCE = re.compile(r"\\(u[0-9A-Fa-f]{4}|[nrt\\'\"])")


def escape_javascript(text: str) -> str:
    out = []
    for c in text:
        if c in JS_ESCAPES:
            out.append(JS_ESCAPES[c])
        elif " " <= c <= "~":
            out.append(c)
        elif ord(c) <= 0xFFFF:
            out.append(f"\\u{ord(c):04X}")
        else:
            # surrogate pair
            code = ord(c) - 0x10000
            out.append(f"\\u{0xD800 + (code >> 10):04X}\\u{0xDC00 + (code & 0x3FF):04X}")
    return "".join(out)


def escape_sql(text: str) -> str:
    return "".join(SQL_ESCAPES.get(c, c) for c in text)


def escape_csv(text: str) -> str:
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="\n").writerow([text])
    return buffer.getvalue()[:-1]


def escape_unicode(text: str) -> str:
    return "".join(c if ord(c) < 128 else f"\\u{ord(c):04X}" for c in text)


def escape_all(text: str) -> dict[str, str]:
    """Every escaped form of text, keyed by target format."""
    return {
        "html": html.escape(text),
        "javascript": escape_javascript(text),
        "url": quote_plus(text),
        "sql": escape_sql(text),
        "regex": re.escape(text),
        "shell": shlex.quote(text),
        "csv": escape_csv(text),
        "xml": xml_escape(text, {'"': "&quot;", "'": "&apos;"}),
        "unicode": escape_unicode(text),
        "hex": text.encode("utf-8").hex(),
    }


def _replace_backslash(match: re.Match) -> str:
    sequence = match.group(1)
    if sequence.startswith("u"):
        return chr(int(sequence[1:], 16))
    return BACKSLASH_ESCAPES[sequence]


def unescape_text(text: str) -> str:
    """
    Undo the most likely escaping.

    Percent-encoding wins when decoding it changes the text; otherwise
    backslash sequences and HTML entities are resolved.
    """
    decoded = unquote_plus(text)
    if decoded != text:
        return decoded
    return html.unescape(BACKSLASH_SEQUENCE.sub(_replace_backslash, text))


LABELS = (
    ("html", "HTML"),
    ("javascript", "JavaScript"),
    ("url", "URL"),
    ("sql", "SQL"),
    ("regex", "Regex"),
    ("shell", "Shell"),
    ("csv", "CSV"),
    ("xml", "XML"),
    ("unicode", "Unicode"),
    ("hex", "Hex"),
)


class EscapeHandler(PatternHandler):
    """Escape a string for HTML, JavaScript, SQL and other targets."""

    name = "escape"
    PATTERNS = (
        r"^(unescape)[:\s]+(.+)$",
        r"^(escape)[:\s]+(.+)$",
        r"^(html|js|javascript|sql|regex|shell|csv|xml)\s+escape[:\s]+(.+)$",
    )

    async def handle(self, query: str) -> Optional[Answer]:
        groups = self.extract(query)
        if not groups or not groups[1]:
            return None

        mode, text = groups[0].lower(), groups[1]

        if mode == "unescape":
            result = unescape_text(text)
            return Answer(
                kind="escape",
                query=query,
                title="String Unescaper",
                content=labeled("Input", text, code=True) + labeled("Unescaped", result, code=True),
                data={"input": text, "output": result},
            )

        variants = escape_all(text)
        rows = "\n".join(
            f"<tr><td><strong>{label}:</strong></td><td><code>{escape(variants[key])}</code></td></tr>"
            for key, label in LABELS
        )

        return Answer(
            kind="escape",
            query=query,
            title="String Escaper",
            content=(
                f'<div class="escape-result">\n<strong>Input:</strong> <code>{escape(text)}</code><br><br>\n'
                f'<table class="escape-table">\n{rows}\n</table>\n</div>'
            ),
            data={"input": text, **variants},
        )
