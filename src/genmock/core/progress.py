"""User-facing console output.

Generation progress and failures are printed to stdout through a shared rich
console; structured diagnostics stay in the structlog stream.
"""

from __future__ import annotations

from rich.console import Console

from genmock.core.logging import get_logger

_console = Console()

# Style prefixes
_STYLES = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]![/yellow] ",
    "info": "  ",
    "none": "",
}


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print a styled status message to stdout."""
    prefix = _STYLES.get(style, "")
    padding = " " * indent
    _console.print(f"{padding}{prefix}{message}", highlight=False, soft_wrap=True)

    get_logger("progress").debug("status", message=message, style=style)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return grammatically correct singular/plural form, e.g. "3 methods"."""
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"
