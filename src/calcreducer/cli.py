"""
Command-line interface for the calculator.

Provides commands for:
- Evaluating a key sequence
- An interactive keypad session
"""

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from calcreducer.config import settings
from calcreducer.core import Calculator
from calcreducer.exceptions import CalculatorError
from calcreducer.logging_config import configure_logging
from calcreducer.operations import format_number
from calcreducer.state import CalculatorState

app = typer.Typer(
    name="calcreducer",
    help="Keyboard-driven calculator engine",
    add_completion=False,
)

console = Console()

KEY_HELP = (
    "Keys: digits . + - * / ^ = % c (clear) n (sign); "
    "names in brackets: [Enter] [Backspace] [Escape] [CE] [sqrt] [sqr] [1/x] "
    "[MS] [MR] [M+] [M-] [MC] [CH]"
)


def render_state(state: CalculatorState, verbose: bool = False) -> None:
    """Print the display, or a full table of the state when verbose."""
    if not verbose:
        style = "bold red" if state.is_error else "bold"
        console.print(f"[{style}]{state.display_value}[/]")
        return

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("display", state.display_value)
    table.add_row("expression", state.expression or "-")
    table.add_row("memory", format_number(state.memory))
    table.add_row("phase", state.phase.value)
    for i, entry in enumerate(state.history, 1):
        table.add_row(f"history {i}", entry)
    console.print(table)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", "-l", help="Log level (default from CALC_LOG_LEVEL)"
    ),
):
    """Keyboard-driven calculator engine."""
    try:
        configure_logging(log_level or settings.log_level)
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/]")
        raise typer.Exit(code=2)


@app.command("eval")
def eval_keys(
    keys: str = typer.Argument(..., help="Key sequence, e.g. '7+3*2='"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show the full state"),
):
    """Press a sequence of keys and print the result."""
    calc = Calculator()
    try:
        calc.type_keys(keys)
    except CalculatorError as e:
        console.print("[red]Error:[/]", escape(str(e)))
        raise typer.Exit(code=1)

    render_state(calc.state, verbose=verbose)


@app.command()
def repl(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show the full state"),
):
    """Interactive keypad; each line is a key sequence. 'quit' exits, 'undo' steps back."""
    calc = Calculator()
    console.print("[bold green]calcreducer[/] - " + KEY_HELP)

    while True:
        try:
            line = console.input("[bold]> [/]")
        except (EOFError, KeyboardInterrupt):
            break

        command = line.strip()
        if command in ("quit", "exit"):
            break
        try:
            if command == "undo":
                calc.undo()
            else:
                calc.type_keys(line)
        except CalculatorError as e:
            console.print("[red]Error:[/]", escape(str(e)))
            continue

        render_state(calc.state, verbose=verbose)


if __name__ == "__main__":
    app()
