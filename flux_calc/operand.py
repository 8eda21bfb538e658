"""Trailing-operand lookup for Flux Calc.

The trailing operand is the number currently being typed at the end of the
expression: an optional leading "-", digits, and at most one ".".
"""

import re
from typing import Optional


_TRAILING_NUMBER = re.compile(r"-?\d*\.?\d*$")


def trailing_operand(expression: str) -> str:
    """Return the right-most numeric token of an expression.

    Examples:
        "12+3.5" -> "3.5"
        "12*-4" -> "-4"
        "12*" -> ""
        "12-" -> "-"

    Args:
        expression: Expression being edited.

    Returns:
        The trailing operand, "" when the expression ends in an operator
        other than "-" or in "(".
    """
    match = _TRAILING_NUMBER.search(expression)
    return match.group(0) if match else ""


def is_placeholder(operand: str) -> bool:
    """Check whether an operand has no numeric content yet ("" or "-")."""
    return operand in ("", "-")


def operand_value(operand: str) -> Optional[float]:
    """Parse a trailing operand.

    Returns:
        The operand as a float, or None for placeholders and malformed
        tokens such as ".".
    """
    if is_placeholder(operand):
        return None
    try:
        return float(operand)
    except ValueError:
        return None


def replace_trailing_operand(expression: str, operand: str, replacement: str) -> str:
    """Swap the trailing operand of ``expression`` for ``replacement``."""
    start = len(expression) - len(operand)
    return expression[:start] + replacement
