"""Helpers for CLI commands."""

from glove80_flash.cli.helpers.output import (
    ConsoleObserver,
    format_size,
    print_header,
    print_run_summary,
)
from glove80_flash.cli.helpers.theme import ThemedConsole, get_themed_console


__all__ = [
    "ConsoleObserver",
    "ThemedConsole",
    "format_size",
    "get_themed_console",
    "print_header",
    "print_run_summary",
]
