"""
Text Case Handler - Show a phrase in every common casing style.

Triggers on "case:", "convert case", "text case", "uppercase", "lowercase",
"titlecase", "camelcase", "snakecase", "snake_case", "kebabcase",
"kebab-case". All variants are shown whichever trigger was used.
"""

import re
from typing import Optional

from quickanswer.search.router import Answer, PatternHandler
from quickanswer.utils.helpers import escape

CAMEL_BOUNDARY = re.compile(r"(?<=[a-z])(?=[A-Z])")


def split_words(text: str) -> list[str]:
    """Split on spaces, underscores, hyphens and camelCase boundaries."""
    text = text.replace("_", " ").replace("-", " ")
    return CAMEL_BOUNDARY.sub(" ", text).split()


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def case_variants(text: str) -> dict[str, str]:
    """Every casing style for text, keyed by style name."""
    words = split_words(text)
    return {
        "upper": text.upper(),
        "lower": text.lower(),
        "title": " ".join(_capitalize(w) for w in words),
        "camel": "".join(w.lower() if i == 0 else _capitalize(w) for i, w in enumerate(words)),
        "pascal": "".join(_capitalize(w) for w in words),
        "snake": "_".join(w.lower() for w in words),
        "kebab": "-".join(w.lower() for w in words),
        "constant": "_".join(w.upper() for w in words),
    }


LABELS = (
    ("upper", "UPPERCASE"),
    ("lower", "lowercase"),
    ("title", "Title Case"),
    ("camel", "camelCase"),
    ("pascal", "PascalCase"),
    ("snake", "snake_case"),
    ("kebab", "kebab-case"),
    ("constant", "CONSTANT_CASE"),
)


class CaseHandler(PatternHandler):
    """Convert text between casing styles."""

    name = "case"
    PATTERNS = (
        r"^case[:\s]+(.+)$",
        r"^convert\s+case[:\s]+(.+)$",
        r"^text\s+case[:\s]+(.+)$",
        r"^(?:upper|lower|title|camel|snake|kebab)case[:\s]+(.+)$",
        r"^(?:snake_case|kebab-case)[:\s]+(.+)$",
    )

    async def handle(self, query: str) -> Optional[Answer]:
        text = self.argument(query)
        if not text:
            return None

        variants = case_variants(text)
        rows = "\n".join(
            f"<tr><td><strong>{label}:</strong></td><td><code>{escape(variants[key])}</code></td></tr>"
            for key, label in LABELS
        )
        content = (
            f'<div class="case-result">\n<strong>Input:</strong> {escape(text)}<br><br>\n'
            f'<table class="case-table">\n{rows}\n</table>\n</div>'
        )

        return Answer(
            kind="case",
            query=query,
            title="Text Case Converter",
            content=content,
            data={"input": text, **variants},
        )
