"""
Arithmetic Service - Safe evaluation of calculator expressions.

Expressions are tokenized and parsed into a small AST, then evaluated by a
post-order walk. Nothing is ever handed to eval(), so names, calls and
attribute access are simply not part of the language.

Supported:
  numbers       3, 2.5, .5, 1e3, 1.5e-05
  operators     + - * / % and ^ (or **) for powers
  unary         -x, +x
  grouping      ( ... )
  percentages   "50% of 200" and a bare "15%"

Precedence, lowest first: + -, then * / %, then unary, then ^. Powers are
right-associative and take a signed exponent, so 2^2^2 is 16, -2^2 is -4
and 2^-1 is 0.5.
"""

import math
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from quickanswer.search.errors import DivisionByZeroError, InvalidExpressionError, NumericRangeError

NUMBER = r"(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"

PERCENT_OF = re.compile(r"(\d+(?:\.\d+)?)\s*%\s*of\s*(\d+(?:\.\d+)?)", re.IGNORECASE)

BARE_PERCENT = re.compile(rf"^([-+]?{NUMBER})\s*%$")

TOKEN = re.compile(
    rf"(?P<number>{NUMBER})"
    r"|(?P<op>\*\*|[-+*/%^()])"
)


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class UnaryOp:
    op: str
    operand: "Node"


@dataclass(frozen=True)
class Grouping:
    inner: "Node"


Node = Union[Number, BinaryOp, UnaryOp, Grouping]


@dataclass(frozen=True)
class Token:
    kind: str  # "number", "op" or "end"
    text: str
    pos: int


def tokenize(expression: str) -> list[Token]:
    """Split an expression into number and operator tokens."""
    tokens = []
    pos = 0
    length = len(expression)

    while pos < length:
        if expression[pos].isspace():
            pos += 1
            continue

        match = TOKEN.match(expression, pos)
        if not match:
            fragment = expression[pos:].split()[0]
            raise InvalidExpressionError(expression, fragment, "unexpected character")

        if match.lastgroup == "number":
            tokens.append(Token("number", match.group(), pos))
        else:
            # ** is an alias for ^
            text = "^" if match.group() == "**" else match.group()
            tokens.append(Token("op", text, pos))
        pos = match.end()

    tokens.append(Token("end", "", length))
    return tokens


class _Parser:
    """Recursive descent parser over a token list."""

    def __init__(self, expression: str):
        self.expression = expression
        self.tokens = tokenize(expression)
        self.index = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def _at(self, *ops: str) -> bool:
        return self.current.kind == "op" and self.current.text in ops

    def _fail(self, token: Token, reason: str):
        fragment = self.expression[token.pos:].strip() or self.expression.strip()
        raise InvalidExpressionError(self.expression, fragment, reason)

    def parse(self) -> Node:
        if self.current.kind == "end":
            self._fail(self.current, "empty expression")
        node = self._expression()
        if self.current.kind != "end":
            if self._at(")"):
                self._fail(self.current, "unbalanced parentheses")
            self._fail(self.current, "unexpected token")
        return node

    def _expression(self) -> Node:
        node = self._term()
        while self._at("+", "-"):
            op = self._advance().text
            node = BinaryOp(op, node, self._term())
        return node

    def _term(self) -> Node:
        node = self._unary()
        while self._at("*", "/", "%"):
            op = self._advance().text
            node = BinaryOp(op, node, self._unary())
        return node

    def _unary(self) -> Node:
        if self._at("+", "-"):
            op = self._advance().text
            return UnaryOp(op, self._unary())
        return self._power()

    def _power(self) -> Node:
        base = self._primary()
        if self._at("^"):
            self._advance()
            # Exponent goes back through _unary, which makes ^ right-associative
            return BinaryOp("^", base, self._unary())
        return base

    def _primary(self) -> Node:
        token = self.current

        if token.kind == "number":
            self._advance()
            return Number(float(token.text))

        if self._at("("):
            self._advance()
            inner = self._expression()
            if not self._at(")"):
                self._fail(token, "unbalanced parentheses")
            self._advance()
            return Grouping(inner)

        if token.kind == "end":
            self._fail(token, "missing operand")
        self._fail(token, "expected a number")


def parse(expression: str) -> Node:
    """Parse an expression into an AST."""
    try:
        return _Parser(expression).parse()
    except RecursionError:
        raise InvalidExpressionError(expression, expression.strip(), "nested too deeply") from None


def evaluate_node(node: Node) -> float:
    """Evaluate an AST node."""
    if isinstance(node, Number):
        return node.value

    if isinstance(node, Grouping):
        return evaluate_node(node.inner)

    if isinstance(node, UnaryOp):
        operand = evaluate_node(node.operand)
        return -operand if node.op == "-" else operand

    if isinstance(node, BinaryOp):
        left = evaluate_node(node.left)
        right = evaluate_node(node.right)

        if node.op == "+":
            return left + right
        if node.op == "-":
            return left - right
        if node.op == "*":
            return left * right
        if node.op == "/":
            if right == 0:
                raise DivisionByZeroError()
            return left / right
        if node.op == "%":
            if right == 0:
                raise DivisionByZeroError("modulo by zero")
            if math.isinf(left):
                raise NumericRangeError("result is too large")
            return math.fmod(left, right)
        if node.op == "^":
            return _power(left, right)

        raise InvalidExpressionError(str(node), node.op, "unsupported operator")

    raise InvalidExpressionError(str(node), type(node).__name__, "unsupported node")


def _power(base: float, exponent: float) -> float:
    if base == 0 and exponent < 0:
        raise DivisionByZeroError("zero raised to a negative power")
    try:
        return math.pow(base, exponent)
    except OverflowError:
        raise NumericRangeError("result is too large") from None
    except ValueError:
        raise NumericRangeError("result is not a real number") from None


def evaluate(expression: str) -> float:
    """
    Evaluate an arithmetic expression.

    Args:
        expression: Expression text, e.g. "2 + 3 * 4" or "15% of 80"

    Returns:
        The result as a finite float

    Raises:
        InvalidExpressionError: Input is not a well-formed expression
        DivisionByZeroError: Division, modulo or negative power of zero
        NumericRangeError: Result overflows or is not a real number
    """
    expr = expression.strip()

    match = PERCENT_OF.search(expr)
    if match:
        return (float(match.group(1)) / 100) * float(match.group(2))

    match = BARE_PERCENT.match(expr)
    if match:
        return float(match.group(1)) / 100

    try:
        result = evaluate_node(parse(expr))
    except RecursionError:
        raise InvalidExpressionError(expression, expr, "nested too deeply") from None

    if not math.isfinite(result):
        raise NumericRangeError("result is too large")
    return result


def format_number(n: float) -> str:
    """
    Format a number for display.

    Examples:
        4.0     → "4"
        0.5     → "0.5"
        1e16    → "1e+16"
        1.5e-05 → "1.5e-05"
    """
    if not math.isfinite(n):
        return repr(n)

    if n == math.trunc(n) and abs(n) <= 1e15:
        return str(int(n))

    if abs(n) < 1e-4 or abs(n) >= 1e10:
        return _scientific(n)

    return f"{n:.10f}".rstrip("0").rstrip(".")


def _scientific(n: float) -> str:
    """Shortest round-trip digits in exponent form, exponent padded to two digits."""
    text = format(Decimal(repr(n)).normalize(), "e")
    mantissa, exponent = text.split("e")
    return f"{mantissa}e{exponent[0]}{exponent[1:].zfill(2)}"
