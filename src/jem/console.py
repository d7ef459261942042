"""Shared Rich consoles for jem CLI output."""

from rich.console import Console

console = Console()

err_console = Console(stderr=True)
"""Diagnostics go to stderr so rendered gemspecs can be piped from stdout"""


def success(message: str, console: Console = err_console) -> None:
    """Print a success message in green."""
    console.print(f"[green]{message}[/green]")


def warning(message: str, console: Console = err_console) -> None:
    """Print a warning message in yellow."""
    console.print(f"[yellow]{message}[/yellow]")
