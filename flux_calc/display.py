"""Terminal rendering for Flux Calc.

Builds rich renderables for the calculator readout, the history list and
the keypad legend.
"""

from typing import List

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .formatter import MAX_FRACTION_DIGITS, format_readable
from .history import HistoryEntry
from .keypad import rows
from .session import DisplaySnapshot


VARIANT_STYLES = {
    "primary": "bold white",
    "ghost": "grey70",
    "operator": "bold magenta",
    "accent": "bold cyan",
}


def render_display(snapshot: DisplaySnapshot) -> Panel:
    """Render the calculator readout.

    Args:
        snapshot: Session display snapshot.

    Returns:
        Panel with expression line, main value and caption.
    """
    expression = Text(snapshot.expression or "Ready", style="dim", justify="right")
    value = Text(snapshot.value, style="bold", justify="right")
    caption_style = "magenta" if snapshot.preview else "dim"
    caption = Text(snapshot.caption, style=caption_style, justify="right")

    return Panel(Group(expression, value, caption), title="Flux Calculator", expand=False, width=40)


def render_history(
    entries: List[HistoryEntry],
    max_fraction_digits: int = MAX_FRACTION_DIGITS,
    grouping: bool = True,
) -> Table:
    """Render history entries as a table, most recent first.

    Args:
        entries: History entries.
        max_fraction_digits: Fractional digits shown for results.
        grouping: Whether results get thousands separators.
    """
    table = Table(title="History", show_header=True)
    table.add_column("Time", style="dim")
    table.add_column("Expression")
    table.add_column("Result", style="bold magenta", justify="right")

    if not entries:
        table.add_row("", "[dim]No calculations yet[/dim]", "")
        return table

    for entry in entries:
        table.add_row(
            entry.created_at.astimezone().strftime("%H:%M"),
            entry.display_expression,
            format_readable(entry.result, max_fraction_digits, grouping),
        )
    return table


def render_keypad() -> Table:
    """Render the keypad legend in its four-column grid."""
    table = Table(show_header=False, box=None, padding=(0, 1))
    for _ in range(4):
        table.add_column(justify="center")

    for row in rows():
        cells = []
        for key in row:
            cells.append(Text(f"[{key.label}]", style=VARIANT_STYLES[key.variant]))
            if key.span == 2:
                cells.append(Text(""))
        table.add_row(*cells)
    return table
