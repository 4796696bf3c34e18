"""Terminal output helpers.

User-facing progress lines go to ``console`` (stdout).  Error messages and
diagnostics logged via ``telemetry.get_logger`` go to ``err_console`` (stderr).
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.markup import escape

console = Console(highlight=False)
err_console = Console(stderr=True)


def log(message: str) -> None:
    """Print a plain message for the operator."""
    console.print(message, markup=False, soft_wrap=True)


def error(message: str) -> None:
    """Print a failure message for the operator on stderr."""
    err_console.print(f"[red]{escape(message)}[/red]", soft_wrap=True)


@contextmanager
def spinner(text: str) -> Iterator[None]:
    """Show a spinner while the block runs, then a success or failure mark.

    Exceptions raised inside the block are re-raised after the failure mark
    is printed.
    """
    try:
        with console.status(f"[bold cyan]{escape(text)}", spinner="dots"):
            yield
    except Exception:
        console.print(f"[red]✖[/red] {escape(text)}")
        raise
    console.print(f"[green]✔[/green] {escape(text)}")
