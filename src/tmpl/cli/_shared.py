"""Shared CLI utilities.

Standardized exit codes and console helpers for error reporting.
"""

from enum import IntEnum
from typing import Never

from rich.console import Console
from rich.text import Text

__all__ = [
    "ExitCode",
    "exit_with_error",
    "get_error_console",
]


class ExitCode(IntEnum):
    """Standard exit codes for the tmpl CLI."""

    SUCCESS = 0
    LOAD_ERROR = 1
    VALIDATION_ERROR = 2
    TEMPLATE_ERROR = 3
    IO_ERROR = 4
    INTERNAL_ERROR = 5
    ARCHIVE_ERROR = 6


def get_error_console() -> Console:
    """Get a Rich console configured for error output to stderr."""
    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.INTERNAL_ERROR,
    *,
    console: Console | None = None,
) -> Never:
    """Print an error message and exit with the specified code.

    Args:
        message: The error message to display.
        code: The exit code to use (defaults to INTERNAL_ERROR).
        console: Optional Rich console for output. If not provided,
            a new stderr console will be created.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    if console is None:
        console = get_error_console()

    # Template text in messages may contain square brackets, so no markup.
    console.print(Text.assemble(("Error:", "red"), " ", message), highlight=False)
    raise SystemExit(code)
