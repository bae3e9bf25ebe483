"""
Convert Handler - Unit conversion answers.

Triggers on:
  100 km to miles
  convert 50 kg to pounds
  10 meters in feet
  5 gb -> mb
  32 °f = ? °c
"""

from typing import Optional

from loguru import logger

from quickanswer.search.errors import UnknownConversionError
from quickanswer.search.router import Answer, PatternHandler
from quickanswer.services.arithmetic import format_number
from quickanswer.services.units import category_of, convert, normalize_unit, suggest_unit
from quickanswer.utils.helpers import escape


class ConvertHandler(PatternHandler):
    """Convert a quantity between two units of the same category."""

    name = "convert"
    PATTERNS = (
        r"^(?:convert\s+)?(\d+(?:\.\d+)?)\s*([a-z°]+)\s+(?:to|in|->)\s+([a-z°]+)$",
        r"^(\d+(?:\.\d+)?)\s*([a-z°]+)\s*=\s*\?\s*([a-z°]+)$",
    )

    async def handle(self, query: str) -> Optional[Answer]:
        groups = self.extract(query)
        if not groups or not all(groups):
            return None

        value = float(groups[0])
        from_unit = normalize_unit(groups[1])
        to_unit = normalize_unit(groups[2])

        try:
            result = convert(value, from_unit, to_unit)
        except UnknownConversionError:
            logger.debug(f"No conversion from {from_unit} to {to_unit}")
            return Answer(
                kind="convert",
                query=query,
                title="Unit Conversion",
                content=self._unknown_message(from_unit, to_unit),
            )

        return Answer(
            kind="convert",
            query=query,
            title="Unit Conversion",
            content=(
                f'<div class="conversion-result">{format_number(value)} {escape(from_unit)}'
                f" = <strong>{format_number(result)} {escape(to_unit)}</strong></div>"
            ),
            data={
                "value": value,
                "from_unit": from_unit,
                "to_unit": to_unit,
                "result": result,
                "category": category_of(from_unit),
            },
        )

    def _unknown_message(self, from_unit: str, to_unit: str) -> str:
        """Explain a failed conversion, suggesting a unit when one is close."""
        message = f"Cannot convert {escape(from_unit)} to {escape(to_unit)}: unknown conversion"

        hints = []
        for unit in (from_unit, to_unit):
            if category_of(unit) is None:
                suggestion = suggest_unit(unit)
                if suggestion:
                    hints.append(f"{escape(unit)} → {escape(suggestion)}")
        if hints:
            message += f" (did you mean {', '.join(hints)}?)"

        return message
