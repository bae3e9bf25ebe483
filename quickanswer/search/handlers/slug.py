"""
Slug Handler - URL-friendly versions of a phrase.

Triggers on "slug", "slugify", "url slug", "to slug", "make slug".
Accents are stripped before slugging, so "Crème Brûlée" becomes
"creme-brulee".
"""

import re
import unicodedata
from typing import Optional

from quickanswer.search.router import Answer, PatternHandler
from quickanswer.utils.helpers import escape

TRUNCATE_AT = 50
NON_ALNUM = re.compile(r"[^a-zA-Z0-9]+")


def strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    kept = "".join(c for c in decomposed if unicodedata.category(c) != "Mn")
    return unicodedata.normalize("NFC", kept)


def slugify(text: str, separator: str = "-") -> str:
    """
    Lower-case slug with runs of separators collapsed.

    Spaces, hyphens and underscores become the separator; any other
    character that is not a letter or digit is dropped.
    """
    text = strip_accents(text).lower()
    chars = []
    for c in text:
        if c.isalnum():
            chars.append(c)
        elif c in " -_" and chars and chars[-1] != separator:
            chars.append(separator)
    return "".join(chars).strip(separator)


def camel_slug(text: str) -> str:
    words = [w for w in NON_ALNUM.split(strip_accents(text)) if w]
    return "".join(
        w.lower() if i == 0 else w[:1].upper() + w[1:].lower()
        for i, w in enumerate(words)
    )


def truncated_slug(text: str, limit: int = TRUNCATE_AT) -> str:
    """Standard slug cut back to the last whole word within limit."""
    slug = slugify(text)
    if len(slug) <= limit:
        return slug
    cut = slug[:limit]
    last_hyphen = cut.rfind("-")
    return cut[:last_hyphen] if last_hyphen > 0 else cut


class SlugHandler(PatternHandler):
    """Generate URL slugs."""

    name = "slug"
    PATTERNS = (
        r"^slug(?:ify)?[:\s]+(.+)$",
        r"^url\s+slug[:\s]+(.+)$",
        r"^(?:to|make)\s+slug[:\s]+(.+)$",
    )

    async def handle(self, query: str) -> Optional[Answer]:
        text = self.argument(query)
        if not text:
            return None

        variants = {
            "slug": slugify(text),
            "underscore": slugify(text, "_"),
            "camel": camel_slug(text),
            "truncated": truncated_slug(text),
        }
        labels = (
            ("slug", "Standard Slug"),
            ("underscore", "Underscore Slug"),
            ("camel", "CamelCase"),
            ("truncated", f"Truncated ({TRUNCATE_AT} chars)"),
        )
        rows = "\n".join(
            f"<tr><td><strong>{label}:</strong></td><td><code>{escape(variants[key])}</code></td></tr>"
            for key, label in labels
        )

        return Answer(
            kind="slug",
            query=query,
            title="URL Slug Generator",
            content=(
                f'<div class="slug-result">\n<strong>Input:</strong> {escape(text)}<br><br>\n'
                f'<table class="slug-table">\n{rows}\n</table>\n</div>'
            ),
            data={"input": text, **variants},
        )
