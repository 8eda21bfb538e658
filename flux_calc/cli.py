"""CLI interface for Flux Calc.

Commands:
- eval: Evaluate an expression and print the canonical result
- keys: Replay keypad presses and show the display
- repl: Interactive keypad session with history recall
- keypad: Show the keypad layout
"""

import logging
import sys

import click
import questionary
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .config import load_calc_config
from .evaluator import evaluate
from .formatter import format_canonical
from .keypad import UnknownKeyError
from .session import CalculatorSession
from .display import render_display, render_history, render_keypad


console = Console()

REPL_HELP = (
    "Type keys (e.g. [bold]12*3=[/bold], [bold]AC[/bold], [bold]del[/bold], [bold]neg[/bold], "
    "[bold]%[/bold]) or: history, recall, clear-history, keypad, quit"
)


def _setup_logging(verbose: bool) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _new_session(ctx: click.Context) -> CalculatorSession:
    return CalculatorSession(config=load_calc_config(ctx.obj["project_path"]))


def _print_history(session: CalculatorSession) -> None:
    config = session.config
    console.print(
        render_history(session.history_entries, config.max_fraction_digits, config.grouping)
    )


@click.group()
@click.version_option(version=__version__, prog_name="flux-calc")
@click.option(
    "--path",
    "-p",
    default=".",
    help="Directory containing .flux-calc/config.json (default: current directory)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def main(ctx, path: str, verbose: bool):
    """Flux Calc - keypad calculator with live preview and history.

    Build expressions key by key, preview results as you type, and
    recall recent calculations.
    """
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["project_path"] = path


# --- Eval Command ---


@main.command("eval")
@click.argument("expression")
@click.pass_context
def eval_command(ctx, expression: str):
    """Evaluate EXPRESSION and print the result."""
    config = load_calc_config(ctx.obj["project_path"])
    result = format_canonical(evaluate(expression), config.significant_digits)

    if not result:
        console.print("[red]Error[/red]")
        sys.exit(1)

    click.echo(result)


# --- Keys Command ---


@main.command()
@click.argument("tokens", nargs=-1, required=True)
@click.option("--history", "show_history", is_flag=True, help="Show the history table")
@click.option("--plain", is_flag=True, help="Print plain lines instead of a panel")
@click.pass_context
def keys(ctx, tokens, show_history: bool, plain: bool):
    """Replay key presses and show the resulting display.

    Example: flux-calc keys 7 + 3 =
    """
    session = _new_session(ctx)

    try:
        session.enter(" ".join(tokens))
    except UnknownKeyError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    snapshot = session.snapshot()
    if plain:
        click.echo(f"expression: {snapshot.expression}")
        click.echo(f"value: {snapshot.value}")
        click.echo(f"preview: {snapshot.preview or ''}")
        if show_history:
            for entry in snapshot.history:
                click.echo(f"history: {entry}")
        return

    console.print(render_display(snapshot))
    if show_history:
        _print_history(session)


# --- Keypad Command ---


@main.command()
def keypad():
    """Show the keypad layout."""
    console.print(render_keypad())


# --- REPL Command ---


def _recall_from_history(session: CalculatorSession) -> None:
    entries = session.history_entries
    if not entries:
        console.print("[yellow]No calculations in history.[/yellow]")
        return

    choice = questionary.select(
        "Recall calculation:",
        choices=[questionary.Choice(title=str(entry), value=entry.id) for entry in entries],
    ).ask()

    if choice:
        session.recall(choice)


@main.command()
@click.pass_context
def repl(ctx):
    """Start an interactive keypad session."""
    session = _new_session(ctx)
    console.print(render_keypad())
    console.print(REPL_HELP)
    console.print(render_display(session.snapshot()))

    while True:
        try:
            line = click.prompt("calc", default="", show_default=False, prompt_suffix="> ")
        except click.Abort:
            break

        command = line.strip().lower()
        if not command:
            continue
        if command in ("quit", "exit", "q"):
            break
        if command == "history":
            _print_history(session)
            continue
        if command == "keypad":
            console.print(render_keypad())
            continue
        if command == "clear-history":
            session.clear_history()
            console.print("[green]History cleared.[/green]")
            continue
        if command == "recall":
            _recall_from_history(session)
        else:
            try:
                session.enter(line)
            except UnknownKeyError as e:
                console.print(f"[red]Error: {e}[/red]")

        console.print(render_display(session.snapshot()))

    console.print("[dim]Bye.[/dim]")


if __name__ == "__main__":
    main()
