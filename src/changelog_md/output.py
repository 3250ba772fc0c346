"""Terminal output helpers."""

from __future__ import annotations

import textwrap

from rich.console import Console
from rich.markup import escape
from rich.text import Text

console = Console(stderr=True, highlight=False, soft_wrap=True)


def output(message: str) -> None:
    """Print a status line; ``message`` may contain rich markup."""
    console.print(f"[dim]>[/dim] {message}")


def output_indented(text: str, *, highlight: str | None = None) -> None:
    """Print a block of changelog text indented, optionally emphasizing a line."""
    body = Text(textwrap.indent(text.rstrip("\n"), "    "))
    if highlight:
        body.highlight_words([highlight], style="bold green")
    console.print(body)


def error(message: str) -> None:
    console.print(f"[bold red]error:[/bold red] {escape(message)}")


def styled(value: object, style: str = "bold blue") -> str:
    """Wrap a value in rich markup, escaping any brackets it contains."""
    return f"[{style}]{escape(str(value))}[/{style}]"
