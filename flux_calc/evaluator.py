"""Arithmetic evaluator for Flux Calc.

Evaluates keypad expressions with a small recursive-descent parser:
- Standard precedence (* and / bind tighter than + and -)
- Parentheses and unary +/-
- Decimal numbers such as "1.", ".5" and "0.25"
- No eval(), no identifiers, no function calls

Every failure is raised as an EvaluationError with a kind, and
``evaluate`` collapses all of them into ``None`` for callers that only
care about success.
"""

import logging
import math
import re
from enum import Enum
from typing import List, Optional

from .sanitizer import sanitize


logger = logging.getLogger(__name__)

# Maximum parenthesis nesting accepted by the parser
MAX_DEPTH = 64

OPERATORS = frozenset("+-*/")

_NUMBER = re.compile(r"^(\d+\.?\d*|\.\d+)$")


class ErrorKind(str, Enum):
    """Why an expression could not be evaluated."""

    SANITIZATION_EMPTY = "sanitization_empty"
    SYNTAX = "syntax"
    NON_FINITE = "non_finite"


class EvaluationError(Exception):
    """Raised when an expression cannot be turned into a finite number."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


def tokenize(expression: str) -> List[str]:
    """Split a sanitized expression into numbers, operators and parentheses.

    Args:
        expression: Sanitized expression string.

    Returns:
        List of tokens.

    Raises:
        EvaluationError: If a number token is malformed (e.g. "1.2.3").
    """
    tokens = []
    i = 0
    while i < len(expression):
        ch = expression[i]
        if ch.isdigit() or ch == ".":
            j = i
            while j < len(expression) and (expression[j].isdigit() or expression[j] == "."):
                j += 1
            number = expression[i:j]
            if not _NUMBER.match(number):
                raise EvaluationError(ErrorKind.SYNTAX, f"Malformed number: {number!r}")
            tokens.append(number)
            i = j
        elif ch in OPERATORS or ch in "()":
            tokens.append(ch)
            i += 1
        else:
            raise EvaluationError(ErrorKind.SYNTAX, f"Unexpected character: {ch!r}")
    return tokens


class _Parser:
    """Recursive descent parser.

    Grammar:
        expression := term (('+' | '-') term)*
        term       := factor (('*' | '/') factor)*
        factor     := NUMBER | '(' expression ')' | ('+' | '-') factor
    """

    def __init__(self, tokens: List[str]):
        self.tokens = tokens
        self.pos = 0
        self.depth = 0

    def _peek(self) -> Optional[str]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def _consume(self) -> str:
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def _enter(self) -> None:
        self.depth += 1
        if self.depth > MAX_DEPTH:
            raise EvaluationError(ErrorKind.SYNTAX, "Expression nested too deeply")

    def parse(self) -> float:
        value = self.parse_expression()
        if self.pos < len(self.tokens):
            raise EvaluationError(
                ErrorKind.SYNTAX, f"Unexpected token: {self.tokens[self.pos]!r}"
            )
        return value

    def parse_expression(self) -> float:
        result = self._parse_term()
        while self._peek() in ("+", "-"):
            op = self._consume()
            right = self._parse_term()
            if op == "+":
                result = result + right
            else:
                result = result - right
        return result

    def _parse_term(self) -> float:
        result = self._parse_factor()
        while self._peek() in ("*", "/"):
            op = self._consume()
            right = self._parse_factor()
            if op == "*":
                result = result * right
            else:
                if right == 0:
                    raise EvaluationError(ErrorKind.NON_FINITE, "Division by zero")
                result = result / right
        return result

    def _parse_factor(self) -> float:
        token = self._peek()
        if token is None:
            raise EvaluationError(ErrorKind.SYNTAX, "Unexpected end of expression")

        # Unary chains ("--5") count toward the depth limit like parentheses
        if token in ("+", "-"):
            self._consume()
            self._enter()
            value = self._parse_factor()
            self.depth -= 1
            return value if token == "+" else -value

        if token == "(":
            self._consume()
            self._enter()
            value = self.parse_expression()
            if self._peek() != ")":
                raise EvaluationError(ErrorKind.SYNTAX, "Unmatched opening parenthesis")
            self._consume()
            self.depth -= 1
            return value

        if token == ")":
            raise EvaluationError(ErrorKind.SYNTAX, "Unmatched closing parenthesis")

        if token in OPERATORS:
            raise EvaluationError(ErrorKind.SYNTAX, f"Unexpected operator: {token!r}")

        self._consume()
        return float(token)


def evaluate_strict(expression: str) -> float:
    """Evaluate an expression, raising on any failure.

    Args:
        expression: Raw expression; it is sanitized first.

    Returns:
        Finite float result.

    Raises:
        EvaluationError: With kind SANITIZATION_EMPTY, SYNTAX or NON_FINITE.
    """
    sanitized = sanitize(expression)
    if not sanitized:
        raise EvaluationError(ErrorKind.SANITIZATION_EMPTY, "Nothing to evaluate")

    value = _Parser(tokenize(sanitized)).parse()

    if not math.isfinite(value):
        raise EvaluationError(ErrorKind.NON_FINITE, f"Result is not finite: {value}")
    return value


def evaluate(expression: str) -> Optional[float]:
    """Evaluate an expression.

    Returns:
        Finite float result, or None if the expression cannot be evaluated.
    """
    try:
        return evaluate_strict(expression)
    except EvaluationError as e:
        logger.debug("Failed to evaluate %r (%s): %s", expression, e.kind.value, e)
        return None
