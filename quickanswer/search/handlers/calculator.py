"""
Calculator Handler - Inline math evaluation.

Triggers on an explicit prefix ("calc", "calculate", "math", "eval",
"evaluate", "compute"), on "P% of V", or on a bare expression made only of
digits and operators ("2 + 2", "(1+2)*3", "2^10").

Evaluation goes through services.arithmetic, never eval().
"""

import re
from typing import Optional

from loguru import logger

from quickanswer.search.errors import (
    DivisionByZeroError,
    InvalidExpressionError,
    NumericRangeError,
)
from quickanswer.search.router import Answer, PatternHandler
from quickanswer.services.arithmetic import evaluate, format_number
from quickanswer.utils.helpers import escape

BARE_EXPRESSION = re.compile(r"^[\d\s+\-*/().^%]+$")
OPERATORS = ("+", "-", "*", "/", "^", "%")

ERROR_KINDS = {
    InvalidExpressionError: "invalid_expression",
    DivisionByZeroError: "division_by_zero",
    NumericRangeError: "out_of_range",
}


class CalculatorHandler(PatternHandler):
    """Evaluate arithmetic expressions."""

    name = "math"
    PATTERNS = (
        r"^calc(?:ulate)?[:\s]+(.+)$",
        r"^math[:\s]+(.+)$",
        r"^eval(?:uate)?[:\s]+(.+)$",
        r"^compute[:\s]+(.+)$",
        r"^(\d+(?:\.\d+)?\s*%\s*of\s+\d+(?:\.\d+)?)$",
    )

    def __init__(self, max_length: int = 500):
        super().__init__()
        self.max_length = max_length

    def can_handle(self, query: str) -> bool:
        if super().can_handle(query):
            return True
        return self._looks_like_math(query)

    def _looks_like_math(self, query: str) -> bool:
        """Digits and operators only, at least three characters, one operator."""
        cleaned = query.replace(" ", "")
        if len(cleaned) <= 2 or not BARE_EXPRESSION.match(cleaned):
            return False
        return any(op in cleaned for op in OPERATORS)

    async def handle(self, query: str) -> Optional[Answer]:
        groups = self.extract(query)
        expr = groups[0] if groups is not None else query.strip()
        if not expr:
            return None

        if len(expr) > self.max_length:
            return self._error_answer(
                query, expr, "invalid_expression",
                f"expression is longer than {self.max_length} characters",
            )

        try:
            result = evaluate(expr)
        except (InvalidExpressionError, DivisionByZeroError, NumericRangeError) as e:
            logger.debug(f"Calculator rejected '{expr[:60]}': {e}")
            return self._error_answer(query, expr, ERROR_KINDS[type(e)], str(e))

        display = format_number(result)
        return Answer(
            kind="math",
            query=query,
            title="Calculator",
            content=(
                f'<div class="math-result"><span class="expression">{escape(expr)}</span>'
                f' = <span class="result">{display}</span></div>'
            ),
            data={
                "expression": expr,
                "result": result,
                "formatted": display,
            },
        )

    def _error_answer(self, query: str, expr: str, kind: str, message: str) -> Answer:
        return Answer(
            kind="math",
            query=query,
            title="Calculator",
            content=f"Error: {escape(message)}",
            data={
                "expression": expr,
                "error": kind,
            },
        )
