"""Keypad layout for Flux Calc.

The 20 keys of the calculator in grid order (four columns), plus lookup of
keys from labels, raw values, command names and keyboard aliases.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from .editor import Event


class UnknownKeyError(ValueError):
    """Raised when a token does not name any keypad key."""


@dataclass(frozen=True)
class Key:
    """A keypad key."""

    label: str
    kind: str  # input, command
    variant: str  # primary, ghost, operator, accent
    value: Optional[str] = None
    command: Optional[str] = None
    span: int = 1

    @property
    def is_input(self) -> bool:
        return self.kind == "input"

    def to_event(self) -> Event:
        """Convert the key press into an editor event."""
        if self.is_input:
            return Event.from_input(self.value)
        return Event.from_command(self.command)


def _input(label: str, value: str, variant: str = "primary", span: int = 1) -> Key:
    return Key(label=label, kind="input", variant=variant, value=value, span=span)


def _command(label: str, command: str, variant: str = "ghost") -> Key:
    return Key(label=label, kind="command", variant=variant, command=command)


KEYPAD: List[Key] = [
    _command("AC", "clear"),
    _command("DEL", "delete"),
    _command("%", "percent"),
    _input("÷", "/", "operator"),
    _input("7", "7"),
    _input("8", "8"),
    _input("9", "9"),
    _input("×", "*", "operator"),
    _input("4", "4"),
    _input("5", "5"),
    _input("6", "6"),
    _input("−", "-", "operator"),
    _input("1", "1"),
    _input("2", "2"),
    _input("3", "3"),
    _input("+", "+", "operator"),
    _command("±", "negate"),
    _input("0", "0", span=2),
    _input(".", "."),
    _command("=", "equals", "accent"),
]

COLUMNS = 4

# Keyboard spellings accepted in addition to labels, values and commands
ALIASES: Dict[str, str] = {
    "c": "clear",
    "ac": "clear",
    "esc": "clear",
    "escape": "clear",
    "del": "delete",
    "backspace": "delete",
    "bs": "delete",
    "enter": "equals",
    "return": "equals",
    "neg": "negate",
    "pct": "percent",
    "x": "*",
    ":": "/",
}


def _build_index() -> Dict[str, Key]:
    index: Dict[str, Key] = {}
    for key in KEYPAD:
        index[key.label] = key
        if key.is_input:
            index[key.value] = key
        else:
            index[key.command] = key
    for alias, target in ALIASES.items():
        index[alias] = index[target]
    return index


_INDEX = _build_index()


def resolve_key(token: str) -> Key:
    """Find the key a token refers to.

    Args:
        token: Label ("×"), value ("*"), command ("clear") or alias ("esc").
            Word tokens are case-insensitive.

    Returns:
        The matching Key.

    Raises:
        UnknownKeyError: If nothing matches.
    """
    key = _INDEX.get(token) or _INDEX.get(token.strip().lower())
    if key is None:
        raise UnknownKeyError(f"Unknown key: {token!r}")
    return key


_TOKEN = re.compile(r"[A-Za-z]+|\S")


def tokenize_keys(text: str) -> List[str]:
    """Split typed key input into tokens.

    Single characters become one token each, runs of letters stay together
    so that "12+3=" and "AC 7 x 2 enter" both work.
    """
    return _TOKEN.findall(text)


def rows() -> List[List[Key]]:
    """Group the keypad into display rows, honoring double-width keys."""
    grid: List[List[Key]] = []
    row: List[Key] = []
    width = 0
    for key in KEYPAD:
        row.append(key)
        width += key.span
        if width >= COLUMNS:
            grid.append(row)
            row, width = [], 0
    if row:
        grid.append(row)
    return grid
