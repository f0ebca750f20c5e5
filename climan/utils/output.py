"""Output formatting utilities.

Generated pages go to stdout untouched; everything meant for a human
(confirmations, errors) goes through a Rich console on stderr so that
`climan generate app:cli > app.1` stays clean.

TTY detection (git-style):
- When stderr is a TTY: Rich formatting and colors
- When stderr redirected: Plain text, no colors
"""

import sys
from pathlib import Path
from typing import Any, Optional, Union

from rich.console import Console

from ..core.exceptions import ExitCode, format_json_error

_stderr_is_tty = sys.stderr.isatty()

# Stderr console - for status messages and diagnostics
stderr_console = Console(
    file=sys.stderr,
    force_terminal=_stderr_is_tty,
    no_color=not _stderr_is_tty,
)


def print_error(message: str) -> None:
    """Print error message."""
    stderr_console.print(f"[red]Error: {message}[/red]", highlight=False)


def print_success(message: str) -> None:
    """Print success message."""
    stderr_console.print(f"[green]✓ {message}[/green]", highlight=False)


def handle_error(
    exc: Exception,
    json_errors: bool = False,
    context: Optional[dict[str, Any]] = None,
) -> int:
    """Handle an exception with appropriate output format.

    Args:
        exc: The exception to handle
        json_errors: If True, output JSON format; otherwise Rich format
        context: Optional additional context (target, output path)

    Returns:
        Exit code to use for sys.exit()
    """
    if json_errors:
        print(format_json_error(exc, context))
    else:
        print_error(str(exc))

    if hasattr(exc, "exit_code"):
        return exc.exit_code
    return ExitCode.GENERAL_ERROR


def write_text_file(path: Union[Path, str], content: str) -> None:
    """Write text content to a file, creating parent directories.

    Args:
        path: Path to write to
        content: Text content to write
    """
    p = Path(path) if not isinstance(path, Path) else path
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content)
