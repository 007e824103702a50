# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""CLI utility functions for output formatting and error reporting."""

import sys
from typing import NoReturn

from rich.console import Console
from rich.markup import escape

from .constants import ExitCode

console = Console()


def error_exit(message: str, details: list[str] | None = None, code: int = ExitCode.USAGE) -> NoReturn:
    """Print error message and exit (defaults to EX_USAGE per BSD sysexits.h)."""
    console.print(f"[red]Error:[/red] {escape(message)}")

    if details:
        console.print("")
        for detail in details:
            console.print(f"  • {escape(detail)}")

    sys.exit(code)


def success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}")
