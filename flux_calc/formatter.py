"""Number formatting for Flux Calc.

Two forms:
- Canonical: precision-limited, shortest decimal string. Stored as the
  computed result and in history, and fed back into expressions.
- Readable: thousands-grouped with bounded fractional digits, for display only.
"""

import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Optional


ERROR = "Error"

SIGNIFICANT_DIGITS = 12
MAX_FRACTION_DIGITS = 10

_DISPLAY_OPERATORS = str.maketrans({"*": "×", "/": "÷"})


def format_canonical(value: Optional[float], significant_digits: int = SIGNIFICANT_DIGITS) -> str:
    """Render a number in canonical form.

    The value is rounded to ``significant_digits`` significant digits to
    hide floating-point noise (0.1 + 0.2 -> "0.3"), then written out in
    positional notation with no trailing zeros.

    Args:
        value: Number to format.
        significant_digits: Precision limit.

    Returns:
        Canonical string, or "" if value is None or not finite.
    """
    if value is None or not math.isfinite(value):
        return ""

    rounded = float(f"{value:.{significant_digits}g}")
    if not math.isfinite(rounded):
        return ""
    if rounded == 0:
        return "0"

    # repr() gives the shortest string that round-trips the float
    return format(Decimal(repr(rounded)).normalize(), "f")


def format_readable(
    value: str,
    max_fraction_digits: int = MAX_FRACTION_DIGITS,
    grouping: bool = True,
) -> str:
    """Render a canonical numeric string for display.

    Args:
        value: Canonical number, "Error", or any other display string.
        max_fraction_digits: Fractional digits kept after rounding.
        grouping: Whether to insert "," thousands separators.

    Returns:
        Grouped number, "0" for an empty value, or ``value`` unchanged when it
        is not a finite number.
    """
    if not value:
        return "0"
    if value == ERROR:
        return value

    try:
        number = Decimal(value)
    except InvalidOperation:
        return value
    if not number.is_finite():
        return value

    with localcontext() as ctx:
        ctx.prec = max(28, number.adjusted() + max_fraction_digits + 2)
        quantum = Decimal(1).scaleb(-max_fraction_digits)
        number = number.quantize(quantum, rounding=ROUND_HALF_UP)

    text = f"{number:,f}" if grouping else f"{number:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_display_expression(expression: str) -> str:
    """Translate operators for display ("*" -> "×", "/" -> "÷")."""
    return expression.translate(_DISPLAY_OPERATORS)
