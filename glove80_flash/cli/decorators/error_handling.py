"""Error handling decorators for CLI commands."""

import logging
import sys
import traceback
from collections.abc import Callable
from functools import wraps
from typing import Any

import typer

from glove80_flash.cli.helpers.theme import (
    get_icon_mode_from_context,
    get_themed_console,
    is_verbose_from_context,
)
from glove80_flash.core.errors import (
    ConfigError,
    FlashError,
    FlashInterruptedError,
    InvalidArgumentError,
)
from glove80_flash.core.structlog_logger import get_struct_logger


__all__ = [
    "EXIT_FAILURE",
    "EXIT_INTERRUPTED",
    "EXIT_USAGE",
    "handle_errors",
    "print_stack_trace_if_verbose",
]

logger = get_struct_logger(__name__)

EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to handle common exceptions in CLI commands.

    Each error is reported on the console and turned into an exit status:
    1 for configuration and flash failures, 2 for invalid arguments and 130
    when the operator interrupts the run.

    Args:
        func: The function to decorate

    Returns:
        Decorated function with error handling
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        ctx = kwargs.get("ctx")
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except InvalidArgumentError as e:
            logger.error("invalid_argument", flag=e.flag, error=str(e))
            _report(str(e), get_icon_mode_from_context(ctx))
            raise typer.Exit(EXIT_USAGE) from e
        except ConfigError as e:
            logger.error("configuration_error", error=str(e))
            _report(str(e), get_icon_mode_from_context(ctx))
            print_stack_trace_if_verbose(is_verbose_from_context(ctx))
            raise typer.Exit(EXIT_FAILURE) from e
        except FlashError as e:
            logger.error("flash_error", error=str(e))
            _report(str(e), get_icon_mode_from_context(ctx))
            print_stack_trace_if_verbose(is_verbose_from_context(ctx))
            raise typer.Exit(EXIT_FAILURE) from e
        except (KeyboardInterrupt, FlashInterruptedError) as e:
            # No cleanup: a half may be left mounted or mid-write
            logger.warning("flash_interrupted")
            _report(str(FlashInterruptedError()), get_icon_mode_from_context(ctx))
            raise typer.Exit(EXIT_INTERRUPTED) from e
        except Exception as e:
            exc_info = logging.getLogger(__name__).isEnabledFor(logging.DEBUG)
            logger.error("unexpected_error", error=str(e), exc_info=exc_info)
            _report(f"Unexpected error: {e}", get_icon_mode_from_context(ctx))
            print_stack_trace_if_verbose(is_verbose_from_context(ctx))
            raise typer.Exit(EXIT_FAILURE) from e

    return wrapper


def _report(message: str, icon_mode: str) -> None:
    get_themed_console(use_emoji=icon_mode == "emoji").print_error(message)


def print_stack_trace_if_verbose(verbose: bool) -> None:
    """Print stack trace if verbose/debug mode is enabled."""
    if verbose:
        print("\nStack trace:", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
