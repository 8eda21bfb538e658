"""Calculator session for Flux Calc.

A session owns one editor state and one history ledger, feeds key presses
through the editor, records commits, and exposes what a presentation layer
needs to draw. Sessions share nothing, so each window or user gets its own.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from .config import CalcConfig
from .editor import EditorState, Event, Mode, apply, highlighted_value, preview
from .formatter import format_display_expression, format_readable
from .history import HistoryEntry, HistoryLedger
from .keypad import Key, resolve_key, tokenize_keys


logger = logging.getLogger(__name__)


@dataclass
class DisplaySnapshot:
    """Display-ready view of a session."""

    expression: str
    value: str
    preview: Optional[str]
    just_evaluated: bool
    history: List[HistoryEntry]

    @property
    def caption(self) -> str:
        """Line under the main readout."""
        if self.preview:
            return f"≈ {self.preview}"
        return "Result" if self.just_evaluated else "Live preview"


class CalculatorSession:
    """Interactive calculator state for a single user."""

    def __init__(self, config: Optional[CalcConfig] = None, ledger: Optional[HistoryLedger] = None):
        """Initialize a session.

        Args:
            config: Calculator configuration, defaults if omitted.
            ledger: History ledger; a new one sized from config by default.
        """
        # An empty ledger is falsy, so test for None explicitly
        self.config = config if config is not None else CalcConfig()
        if ledger is None:
            ledger = HistoryLedger(capacity=self.config.history_capacity)
        self.ledger = ledger
        self.state = EditorState()

    # --- Input ---

    def press(self, key: Union[Key, str]) -> "CalculatorSession":
        """Press a key, given as a Key or any token resolve_key accepts."""
        if isinstance(key, str):
            key = resolve_key(key)
        return self.dispatch(key.to_event())

    def press_many(self, keys: Iterable[Union[Key, str]]) -> "CalculatorSession":
        """Press keys in order."""
        for key in keys:
            self.press(key)
        return self

    def enter(self, text: str) -> "CalculatorSession":
        """Press every key in a typed key string such as "12*3=".

        All tokens are resolved before any key is pressed, so an unknown
        token leaves the session untouched.

        Raises:
            UnknownKeyError: If a token does not name a key.
        """
        return self.press_many([resolve_key(token) for token in tokenize_keys(text)])

    def input(self, value: str) -> "CalculatorSession":
        """Enter a digit, operator or decimal point."""
        return self.dispatch(Event.from_input(value))

    def command(self, name: str) -> "CalculatorSession":
        """Run a command: clear, delete, equals, negate or percent."""
        return self.dispatch(Event.from_command(name))

    def dispatch(self, event: Event) -> "CalculatorSession":
        """Apply an editor event and record any commit."""
        transition = apply(self.state, event, self.config.significant_digits)
        self.state = transition.state
        if transition.commit is not None:
            entry = self.ledger.append(
                transition.commit.raw_expression, transition.commit.result
            )
            logger.debug("Committed %s (id %s)", entry, entry.id)
        return self

    # --- History ---

    def recall(self, entry: Union[HistoryEntry, str]) -> "CalculatorSession":
        """Load a history entry back into the editor as a committed result."""
        raw_expression, result = self.ledger.recall(entry)
        self.state = EditorState(raw_expression, result, Mode.EVALUATED)
        return self

    def clear_history(self) -> None:
        """Empty the history ledger."""
        self.ledger.clear()

    @property
    def history_entries(self) -> List[HistoryEntry]:
        """History, most recent first."""
        return self.ledger.entries

    # --- Display ---

    @property
    def expression(self) -> str:
        return self.state.expression

    @property
    def computed_result(self) -> str:
        return self.state.computed_result

    @property
    def mode(self) -> Mode:
        return self.state.mode

    @property
    def just_evaluated(self) -> bool:
        return self.state.just_evaluated

    @property
    def preview(self) -> str:
        """Live preview of the expression, "" when there is none."""
        return preview(self.state.expression, self.config.significant_digits)

    @property
    def display_expression(self) -> str:
        return format_display_expression(self.state.expression)

    @property
    def highlighted_value(self) -> str:
        return highlighted_value(self.state, self.preview)

    @property
    def preview_annotation(self) -> Optional[str]:
        """Preview to show beside the readout, None after a commit."""
        if self.just_evaluated:
            return None
        return self.preview or None

    def _readable(self, value: str) -> str:
        return format_readable(
            value, self.config.max_fraction_digits, self.config.grouping
        )

    def snapshot(self) -> DisplaySnapshot:
        """Capture the display with readable number formatting."""
        annotation = self.preview_annotation
        return DisplaySnapshot(
            expression=self.display_expression,
            value=self._readable(self.highlighted_value),
            preview=self._readable(annotation) if annotation else None,
            just_evaluated=self.just_evaluated,
            history=self.history_entries,
        )
