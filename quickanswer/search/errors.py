"""
Answer Errors - Failure kinds raised by the evaluator, converter and handlers.

Expected failures (bad expression, unknown units) are raised by the
services and rendered into Answer content by the handlers. The router
never catches anything.
"""


class AnswerError(Exception):
    """Base class for all quickanswer errors."""


class InvalidExpressionError(AnswerError, ValueError):
    """Arithmetic input is not well-formed."""

    def __init__(self, expression: str, fragment: str = "", reason: str = ""):
        self.expression = expression
        self.fragment = fragment or expression
        self.reason = reason
        message = "invalid expression"
        if self.fragment:
            message = f"{message}: {self.fragment}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class DivisionByZeroError(AnswerError, ZeroDivisionError):
    """Division or modulo by a zero right operand."""

    def __init__(self, message: str = "division by zero"):
        super().__init__(message)


class NumericRangeError(AnswerError, ArithmeticError):
    """Result overflowed or is not a real number."""


class UnknownConversionError(AnswerError, ValueError):
    """No category table (or temperature pair) holds both units."""

    def __init__(self, from_unit: str, to_unit: str):
        self.from_unit = from_unit
        self.to_unit = to_unit
        super().__init__(f"unknown conversion: {from_unit} to {to_unit}")


class MalformedAnswerError(AnswerError, TypeError):
    """A handler put a non-serializable value into Answer.data."""
