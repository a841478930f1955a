"""Rich renderers for tokens and parse trees, used by the CLI."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from calcengine.models import BinaryOp, Literal, Node, SquareRoot, Token, TokenKind, UnaryMinus, children

# Deeper trees print only their canonical text.
MAX_DRAWN_DEPTH = 64

_KIND_STYLES = {
    TokenKind.NUMBER: "cyan",
    TokenKind.LEFT_PAREN: "dim",
    TokenKind.RIGHT_PAREN: "dim",
}


def render_tokens(text: str, tokens: list[Token], console: Console) -> None:
    """Render a token table for one expression."""
    if not tokens:
        console.print(f"[yellow]No tokens in {text!r}[/yellow] (evaluates to 0)")
        return

    table = Table(title=f"Tokens: {text}", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind", min_width=12)
    table.add_column("Text", justify="center")
    table.add_column("Offset", justify="right")

    for i, tok in enumerate(tokens):
        style = _KIND_STYLES.get(tok.kind, "green")
        table.add_row(str(i), f"[{style}]{tok.kind.name}[/{style}]", tok.text, str(tok.position))

    console.print()
    console.print(table)
    console.print()


def _label(node: Node) -> str:
    if isinstance(node, Literal):
        return f"[cyan]Literal[/cyan] {node.to_text()}"
    if isinstance(node, BinaryOp):
        return f"[green]BinaryOp[/green] [bold]{node.op.value}[/bold] ({node.op.name})"
    if isinstance(node, UnaryMinus):
        return "[magenta]UnaryMinus[/magenta]"
    if isinstance(node, SquareRoot):
        return "[magenta]SquareRoot[/magenta]"
    return type(node).__name__


def tree_depth(node: Node) -> int:
    """Number of levels in the tree, counted without recursion."""
    deepest = 0
    pending = [(node, 1)]
    while pending:
        current, depth = pending.pop()
        deepest = max(deepest, depth)
        pending.extend((child, depth + 1) for child in children(current))
    return deepest


def build_tree(text: str, node: Node) -> Tree:
    """Build a Rich Tree mirroring the parse tree."""
    root = Tree(f"[bold]{text or '(empty)'}[/bold]")
    pending = [(root, node)]
    while pending:
        branch, current = pending.pop()
        added = branch.add(_label(current))
        # Reversed so the left operand is added first.
        for child in reversed(children(current)):
            pending.append((added, child))
    return root


def render_tree(text: str, node: Node, console: Console) -> None:
    """Render the parse tree and its canonical text."""
    depth = tree_depth(node)
    console.print()
    if depth > MAX_DRAWN_DEPTH:
        console.print(f"[yellow]Tree is {depth} levels deep, too deep to draw.[/yellow]")
    else:
        console.print(build_tree(text, node))
    console.print(f"  Canonical: [bold]{node.to_text()}[/bold]")
    console.print()
