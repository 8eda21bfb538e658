"""Expression sanitizer for Flux Calc.

Reduces arbitrary text to the characters the evaluator understands:
digits, the four operators, parentheses and the decimal point.
"""

import re


ALLOWED_CHARACTERS = "0123456789+-*/()."

_DISALLOWED = re.compile(r"[^0-9+\-*/().]")


def sanitize(text: str) -> str:
    """Strip everything outside the arithmetic character set.

    Args:
        text: Any string, possibly empty.

    Returns:
        The allowed characters of ``text`` in their original order.
    """
    if not text:
        return ""
    return _DISALLOWED.sub("", text)
