"""
Arithmetic evaluation for the calculator display.

The raw display text is checked against the allowed character set, normalized
(percent rewriting, operator collapsing) and then parsed by a small
recursive-descent parser:

    expression := term (("+" | "-") term)*
    term       := unary (("*" | "/") unary)*
    unary      := ("-" | "+") unary | primary
    primary    := NUMBER | "(" expression ")"

Numbers are IEEE doubles. Division by zero gives infinity or NaN instead of
raising, so the display can show those as sentinels.
"""
import math
from decimal import Decimal

from app.projects.calculator.core.constants import ALLOWED_CHARACTERS, MAX_NESTING, RESULT_PRECISION
from app.projects.calculator.core.normalizer import normalize


class CalculationError(Exception):
    """Base class for expressions that cannot be evaluated."""


class InvalidExpression(CalculationError):
    """The raw input contains characters outside the calculator's set."""


class MalformedExpression(CalculationError):
    """The normalized input is not a well-formed arithmetic expression."""


_NUMBER = "number"
_OP = "op"
_END = "end"


def _tokenize(expr: str) -> list[tuple[str, object]]:
    tokens = []
    i = 0
    n = len(expr)
    while i < n:
        ch = expr[i]
        if ch.isspace():
            i += 1
            continue
        if ch.isdigit() or ch == ".":
            start = i
            seen_dot = False
            while i < n and (expr[i].isdigit() or expr[i] == "."):
                if expr[i] == ".":
                    if seen_dot:
                        raise MalformedExpression(f"Unexpected '.' at position {i}")
                    seen_dot = True
                i += 1
            text = expr[start:i]
            if text == ".":
                raise MalformedExpression(f"Unexpected '.' at position {start}")
            tokens.append((_NUMBER, float(text)))
            continue
        if ch in "+-*/()":
            tokens.append((_OP, ch))
            i += 1
            continue
        raise MalformedExpression(f"Unexpected '{ch}' at position {i}")
    tokens.append((_END, None))
    return tokens


def _divide(left: float, right: float) -> float:
    if right != 0:
        return left / right
    if left == 0 or math.isnan(left):
        return math.nan
    return math.copysign(math.inf, left) * math.copysign(1.0, right)


class _Parser:
    """Recursive-descent parser that evaluates while it parses."""

    def __init__(self, tokens):
        self.tokens = tokens
        self.pos = 0
        self.depth = 0

    def peek(self):
        return self.tokens[self.pos]

    def advance(self):
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def nest(self):
        self.depth += 1
        if self.depth > MAX_NESTING:
            raise MalformedExpression(f"Nested deeper than {MAX_NESTING} levels")

    def accept(self, *ops):
        kind, value = self.peek()
        if kind == _OP and value in ops:
            self.pos += 1
            return value
        return None

    def parse(self) -> float:
        if self.peek()[0] == _END:
            raise MalformedExpression("Expression is empty")
        value = self.expression()
        kind, token = self.peek()
        if kind != _END:
            raise MalformedExpression(f"Unexpected '{token}'")
        return value

    def expression(self) -> float:
        value = self.term()
        while True:
            op = self.accept("+", "-")
            if op is None:
                return value
            right = self.term()
            value = value + right if op == "+" else value - right

    def term(self) -> float:
        value = self.unary()
        while True:
            op = self.accept("*", "/")
            if op is None:
                return value
            right = self.unary()
            value = value * right if op == "*" else _divide(value, right)

    def unary(self) -> float:
        op = self.accept("-", "+")
        if op is None:
            return self.primary()
        self.nest()
        value = self.unary()
        self.depth -= 1
        return -value if op == "-" else value

    def primary(self) -> float:
        kind, value = self.advance()
        if kind == _NUMBER:
            return value
        if kind == _OP and value == "(":
            self.nest()
            inner = self.expression()
            if self.accept(")") is None:
                raise MalformedExpression("Missing ')'")
            self.depth -= 1
            return inner
        if kind == _END:
            raise MalformedExpression("Unexpected end of expression")
        raise MalformedExpression(f"Unexpected '{value}'")


def validate_characters(raw: str) -> None:
    """Raise InvalidExpression if raw holds anything outside the allowed set."""
    bad = sorted({ch for ch in raw if ch not in ALLOWED_CHARACTERS})
    if bad:
        raise InvalidExpression(f"Invalid characters: {''.join(bad)}")


def round_result(value: float) -> float:
    """Trim representation noise; integers and non-finite values pass through."""
    if not math.isfinite(value) or value.is_integer():
        return value
    return round(value, RESULT_PRECISION)


def evaluate(raw: str) -> float:
    """
    Evaluate display text.

    The character check runs on the untransformed input; parsing runs on the
    normalized form.
    """
    validate_characters(raw)
    tokens = _tokenize(normalize(raw))
    return round_result(_Parser(tokens).parse())


def format_result(value: float) -> str:
    """Render a result the way the display shows it."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        # shortest round-trip digits, zero-padded
        return str(int(Decimal(repr(value))))
    return repr(value)
