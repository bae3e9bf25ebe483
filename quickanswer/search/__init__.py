"""
Search package - Query routing and handler framework.

Provides a pluggable answer system where queries are dispatched to
handlers in registration order (calculator, conversion, encoders, etc.).
"""

from .errors import (
    AnswerError,
    DivisionByZeroError,
    InvalidExpressionError,
    MalformedAnswerError,
    NumericRangeError,
    UnknownConversionError,
)
from .router import Answer, PatternHandler, QueryRouter, SearchHandler

__all__ = [
    "Answer",
    "AnswerError",
    "DivisionByZeroError",
    "InvalidExpressionError",
    "MalformedAnswerError",
    "NumericRangeError",
    "PatternHandler",
    "QueryRouter",
    "SearchHandler",
    "UnknownConversionError",
]
