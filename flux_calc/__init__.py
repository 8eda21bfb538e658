"""Flux Calc - keypad calculator engine.

An expression-editing calculator with:
- Incremental keypad input (operator collision, leading-zero and
  decimal-point rules)
- Live preview of the expression being typed
- Sign toggle and percent on the operand being edited
- Safe recursive-descent evaluation (no eval)
- Bounded, recallable calculation history
"""

__version__ = "1.0.0"
__author__ = "Morten Elmstroem Hansen"

from .evaluator import (
    ErrorKind,
    EvaluationError,
    evaluate,
    evaluate_strict,
)
from .formatter import (
    format_canonical,
    format_readable,
    format_display_expression,
)
from .editor import (
    EditorState,
    Event,
    EventKind,
    Mode,
    apply,
)
from .history import (
    HistoryEntry,
    HistoryLedger,
    IdSequence,
)
from .keypad import (
    KEYPAD,
    Key,
    UnknownKeyError,
    resolve_key,
)
from .session import (
    CalculatorSession,
    DisplaySnapshot,
)
from .config import (
    CalcConfig,
    load_calc_config,
)

__all__ = [
    # Evaluation
    "ErrorKind",
    "EvaluationError",
    "evaluate",
    "evaluate_strict",
    # Formatting
    "format_canonical",
    "format_readable",
    "format_display_expression",
    # Editing
    "EditorState",
    "Event",
    "EventKind",
    "Mode",
    "apply",
    # History
    "HistoryEntry",
    "HistoryLedger",
    "IdSequence",
    # Keypad
    "KEYPAD",
    "Key",
    "UnknownKeyError",
    "resolve_key",
    # Session
    "CalculatorSession",
    "DisplaySnapshot",
    # Config
    "CalcConfig",
    "load_calc_config",
]
