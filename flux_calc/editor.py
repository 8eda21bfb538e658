"""Expression editor state machine for Flux Calc.

Turns keypad events into the next editor state:
- Digits with leading-zero suppression
- Decimal points (one per operand, "0." synthesized when needed)
- Operators with collision collapsing ("+" then "*" -> "*")
- Delete, clear, sign toggle and percent on the trailing operand
- Equals, which evaluates and reports a commit for the history ledger

``apply`` is a pure function of (state, event); states are immutable.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, Optional

from .evaluator import OPERATORS, evaluate
from .formatter import (
    ERROR,
    SIGNIFICANT_DIGITS,
    format_canonical,
    format_display_expression,
)
from .operand import (
    is_placeholder,
    operand_value,
    replace_trailing_operand,
    trailing_operand,
)


COMMANDS = ("clear", "delete", "equals", "negate", "percent")


class Mode(str, Enum):
    """Whether the expression is being edited or holds a committed result."""

    EDITING = "editing"
    EVALUATED = "evaluated"


class EventKind(str, Enum):
    """Kinds of editor input."""

    DIGIT = "digit"
    DECIMAL = "decimal"
    OPERATOR = "operator"
    CLEAR = "clear"
    DELETE = "delete"
    NEGATE = "negate"
    PERCENT = "percent"
    EQUALS = "equals"


@dataclass(frozen=True)
class Event:
    """A single keypad event."""

    kind: EventKind
    value: str = ""

    @classmethod
    def from_input(cls, value: str) -> "Event":
        """Build an event from an input character ("0"-"9", operator or ".").

        Raises:
            ValueError: If value is not a single keypad character.
        """
        if len(value) == 1 and value.isdigit():
            return cls(EventKind.DIGIT, value)
        if value == ".":
            return cls(EventKind.DECIMAL, value)
        if value in OPERATORS:
            return cls(EventKind.OPERATOR, value)
        raise ValueError(f"Not a keypad input: {value!r}")

    @classmethod
    def from_command(cls, name: str) -> "Event":
        """Build an event from a command name (clear, delete, ...).

        Raises:
            ValueError: If name is not a known command.
        """
        if name not in COMMANDS:
            raise ValueError(f"Not a keypad command: {name!r}")
        return cls(EventKind(name))


@dataclass(frozen=True)
class EditorState:
    """Live editing state."""

    expression: str = ""
    computed_result: str = "0"
    mode: Mode = Mode.EDITING

    @property
    def just_evaluated(self) -> bool:
        return self.mode is Mode.EVALUATED


@dataclass(frozen=True)
class Commit:
    """A successful evaluation to be recorded in history."""

    raw_expression: str
    result: str


@dataclass(frozen=True)
class Transition:
    """Result of applying one event."""

    state: EditorState
    commit: Optional[Commit] = None


def _editing(state: EditorState, expression: str) -> EditorState:
    return replace(state, expression=expression, mode=Mode.EDITING)


def _fresh_base(state: EditorState) -> str:
    """Expression to build on for digit/decimal input."""
    return "" if state.just_evaluated else state.expression


def _on_digit(state: EditorState, event: Event, digits: int) -> Transition:
    base = _fresh_base(state)
    if event.value == "0" and trailing_operand(base) in ("0", "-0"):
        return Transition(_editing(state, base))
    return Transition(_editing(state, base + event.value))


def _on_decimal(state: EditorState, event: Event, digits: int) -> Transition:
    base = _fresh_base(state)
    current = trailing_operand(base)
    if "." in current:
        return Transition(_editing(state, base))
    if is_placeholder(current):
        return Transition(_editing(state, base + "0."))
    return Transition(_editing(state, base + "."))


def _on_operator(state: EditorState, event: Event, digits: int) -> Transition:
    base = state.expression
    if not base:
        return Transition(_editing(state, "-" if event.value == "-" else ""))
    if base[-1] in OPERATORS:
        return Transition(_editing(state, base[:-1] + event.value))
    return Transition(_editing(state, base + event.value))


def _on_clear(state: EditorState, event: Event, digits: int) -> Transition:
    return Transition(EditorState())


def _on_delete(state: EditorState, event: Event, digits: int) -> Transition:
    if not state.expression:
        return Transition(state)
    expression = state.expression[:-1]
    result = state.computed_result if expression else "0"
    return Transition(EditorState(expression, result, Mode.EDITING))


def _rewrite_operand(
    state: EditorState, transform: Callable[[float], float], digits: int
) -> Transition:
    current = trailing_operand(state.expression)
    value = operand_value(current)
    if value is None:
        return Transition(state)
    replacement = format_canonical(transform(value), digits)
    expression = replace_trailing_operand(state.expression, current, replacement)
    return Transition(_editing(state, expression))


def _on_negate(state: EditorState, event: Event, digits: int) -> Transition:
    return _rewrite_operand(state, lambda value: -value, digits)


def _on_percent(state: EditorState, event: Event, digits: int) -> Transition:
    return _rewrite_operand(state, lambda value: value / 100, digits)


def _on_equals(state: EditorState, event: Event, digits: int) -> Transition:
    if not state.expression:
        return Transition(state)

    canonical = format_canonical(evaluate(state.expression), digits)
    if not canonical:
        return Transition(replace(state, computed_result=ERROR, mode=Mode.EVALUATED))

    commit = Commit(raw_expression=state.expression, result=canonical)
    return Transition(EditorState(canonical, canonical, Mode.EVALUATED), commit)


_HANDLERS: Dict[EventKind, Callable[[EditorState, Event, int], Transition]] = {
    EventKind.DIGIT: _on_digit,
    EventKind.DECIMAL: _on_decimal,
    EventKind.OPERATOR: _on_operator,
    EventKind.CLEAR: _on_clear,
    EventKind.DELETE: _on_delete,
    EventKind.NEGATE: _on_negate,
    EventKind.PERCENT: _on_percent,
    EventKind.EQUALS: _on_equals,
}


def apply(
    state: EditorState, event: Event, significant_digits: int = SIGNIFICANT_DIGITS
) -> Transition:
    """Apply one event to an editor state.

    Args:
        state: Current state.
        event: Keypad event.
        significant_digits: Precision used for canonical results.

    Returns:
        Transition holding the next state and, for a successful equals,
        the commit to record.
    """
    return _HANDLERS[event.kind](state, event, significant_digits)


def preview(expression: str, significant_digits: int = SIGNIFICANT_DIGITS) -> str:
    """Compute the live preview for an expression.

    Returns:
        Canonical value, or "" while the expression is incomplete or invalid.
    """
    if not expression:
        return ""
    last = expression[-1]
    if last in OPERATORS or last in ".(":
        return ""
    return format_canonical(evaluate(expression), significant_digits)


def highlighted_value(state: EditorState, preview_value: str) -> str:
    """Pick the primary readout for a state.

    Priority: committed result, live preview, the operand being typed, the
    operator-translated expression, then "0".
    """
    if state.just_evaluated:
        return state.computed_result
    if preview_value:
        return preview_value
    current = trailing_operand(state.expression)
    if is_placeholder(current):
        return format_display_expression(state.expression) if state.expression else "0"
    return current
