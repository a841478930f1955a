"""CLI for the calcengine expression engine.

Usage:
    python -m calcengine eval "2+3×4"               # Press "=" on a display text
    python -m calcengine eval --ascii "2+3*4"       # Type * / r for × ÷ √
    python -m calcengine eval -- "-5+3"             # Leading minus needs "--"
    python -m calcengine tokens "√(9)÷3"            # Token table
    python -m calcengine tree "2^3^2"               # Parse tree
    python -m calcengine -v eval "1÷(4)"            # Debug logging
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from calcengine.config import DEFAULT_MAX_DEPTH, Settings
from calcengine.display import OutcomeKind, press_equals
from calcengine.errors import CalcError, SemanticError
from calcengine.parser import parse_tokens
from calcengine.render import render_tokens, render_tree
from calcengine.tokenizer import normalize_ascii, tokenize

app = typer.Typer(
    name="calcengine",
    help="Expression engine for a display-text calculator",
    no_args_is_help=True,
)
console = Console(stderr=True)

EXIT_UNDEFINED = 1
EXIT_INVALID = 2


def _settings(max_depth: Optional[int]) -> Settings:
    """Environment settings with CLI overrides applied."""
    settings = Settings.from_env()
    if max_depth is not None:
        if max_depth < 1:
            console.print(f"[red]Invalid --max-depth: {max_depth}[/red]. Must be at least 1.")
            raise typer.Exit(EXIT_INVALID)
        settings = dataclasses.replace(settings, max_depth=max_depth)
    return settings


def _source(expression: str, ascii_input: bool) -> str:
    return normalize_ascii(expression) if ascii_input else expression


def _fail(e: CalcError) -> None:
    """Report an engine error and exit with the matching code."""
    if isinstance(e, SemanticError):
        console.print(f"[red]Undefined:[/red] {e}")
        raise typer.Exit(EXIT_UNDEFINED)
    console.print(f"[yellow]Invalid:[/yellow] {e}")
    raise typer.Exit(EXIT_INVALID)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Expression engine for a display-text calculator."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command("eval")
def cmd_eval(
    expression: str = typer.Argument(help="Display text, e.g. '2+3×4'"),
    ascii_input: bool = typer.Option(False, "--ascii", help="Accept * / r for × ÷ √"),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", help=f"Nesting limit (default: CALCENGINE_MAX_DEPTH or {DEFAULT_MAX_DEPTH})"),
) -> None:
    """Evaluate an expression as if "=" were pressed."""
    outcome = press_equals(_source(expression, ascii_input), _settings(max_depth))
    typer.echo(outcome.text)

    if outcome.kind is OutcomeKind.SUCCESS:
        return
    if outcome.kind is OutcomeKind.UNDEFINED:
        console.print(f"[red]Undefined:[/red] {outcome.error}")
        raise typer.Exit(EXIT_UNDEFINED)
    console.print(f"[yellow]Invalid:[/yellow] {outcome.error}")
    raise typer.Exit(EXIT_INVALID)


@app.command("tokens")
def cmd_tokens(
    expression: str = typer.Argument(help="Display text to tokenize"),
    ascii_input: bool = typer.Option(False, "--ascii", help="Accept * / r for × ÷ √"),
) -> None:
    """Show the tokens of an expression."""
    text = _source(expression, ascii_input)
    try:
        tokens = tokenize(text)
    except CalcError as e:
        _fail(e)
        return
    render_tokens(text, tokens, console)


@app.command("tree")
def cmd_tree(
    expression: str = typer.Argument(help="Display text to parse"),
    ascii_input: bool = typer.Option(False, "--ascii", help="Accept * / r for × ÷ √"),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", help=f"Nesting limit (default: CALCENGINE_MAX_DEPTH or {DEFAULT_MAX_DEPTH})"),
) -> None:
    """Show the parse tree of an expression."""
    text = _source(expression, ascii_input)
    try:
        tree = parse_tokens(tokenize(text), _settings(max_depth))
    except CalcError as e:
        _fail(e)
        return
    render_tree(text, tree, console)


if __name__ == "__main__":
    app()
