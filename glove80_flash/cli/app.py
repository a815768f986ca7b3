"""Command line entry point for glove80-flash."""

import logging
import signal
import sys
from importlib.metadata import distribution
from pathlib import Path
from types import FrameType
from typing import Annotated

import typer

from glove80_flash.cli.decorators.error_handling import (
    EXIT_FAILURE,
    handle_errors,
    print_stack_trace_if_verbose,
)
from glove80_flash.cli.helpers.output import (
    ConsoleObserver,
    print_header,
    print_run_summary,
)
from glove80_flash.cli.helpers.theme import get_themed_console
from glove80_flash.config.settings import load_settings
from glove80_flash.core.errors import ConfigError, InvalidArgumentError
from glove80_flash.core.logging import setup_logging
from glove80_flash.flash.sequencer import create_flash_sequencer
from glove80_flash.models.half import HalfName


__all__ = ["AppContext", "app", "main", "__version__"]


__version__ = distribution("glove80-flash").version

logger = logging.getLogger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        print(f"glove80-flash v{__version__}")
        raise typer.Exit()


class AppContext:
    """CLI state for one invocation, kept on the typer context."""

    def __init__(self, icon_mode: str = "emoji", verbose: bool = False) -> None:
        self.icon_mode = icon_mode
        self.verbose = verbose


app = typer.Typer(
    name="glove80-flash",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def resolve_halves(right: bool, left: bool, both: bool) -> list[HalfName]:
    """Turn the selection flags into the halves to flash.

    Raises:
        InvalidArgumentError: If more than one selection flag is given
    """
    selected = [
        flag
        for flag, given in (("--right", right), ("--left", left), ("--both", both))
        if given
    ]
    if len(selected) > 1:
        raise InvalidArgumentError(
            " ".join(selected), "use only one of --right, --left or --both"
        )
    if right:
        return [HalfName.RIGHT]
    if left:
        return [HalfName.LEFT]
    return list(HalfName)


def resolve_log_level(verbose: int, debug: bool) -> int:
    """Log level requested on the command line."""
    if debug or verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


@app.command()
@handle_errors
def flash(
    ctx: typer.Context,
    right: Annotated[
        bool, typer.Option("--right", help="Flash only the right half")
    ] = False,
    left: Annotated[
        bool, typer.Option("--left", help="Flash only the left half")
    ] = False,
    both: Annotated[
        bool, typer.Option("--both", help="Flash both halves (default)")
    ] = False,
    firmware: Annotated[
        Path | None,
        typer.Option(
            "--firmware",
            "-f",
            help="UF2 firmware image [default: result/glove80.uf2]",
            show_default=False,
        ),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option(
            "--timeout",
            "-t",
            help="Seconds to wait for each half to appear [default: 60]",
            show_default=False,
        ),
    ] = None,
    poll_interval: Annotated[
        float | None,
        typer.Option(
            "--poll-interval",
            help="Seconds between device detection rounds [default: 2]",
            show_default=False,
        ),
    ] = None,
    settle_delay: Annotated[
        float | None,
        typer.Option(
            "--settle-delay",
            help="Seconds to wait between detection and mounting [default: 3]",
            show_default=False,
        ),
    ] = None,
    removal_timeout: Annotated[
        float | None,
        typer.Option(
            "--removal-timeout",
            help="Seconds to wait for a flashed half to reboot [default: no limit]",
            show_default=False,
        ),
    ] = None,
    config_file: Annotated[
        str | None,
        typer.Option("-c", "--config", help="Path to configuration file"),
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity (-v=INFO, -vv=DEBUG)",
        ),
    ] = 0,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging (equivalent to -vv)"),
    ] = False,
    log_file: Annotated[
        str | None, typer.Option("--log-file", help="Also write JSON logs to file")
    ] = None,
    no_emoji: Annotated[
        bool,
        typer.Option("--no-emoji", help="Disable emoji icons in output"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Flash UF2 firmware to the halves of a Glove80 keyboard.

    Each half is put into bootloader mode by hand, detected by its volume
    label, mounted and sent the image. The right half is flashed first.

    Examples:

      glove80-flash                              # both halves

      glove80-flash --left                       # left half only

      glove80-flash --firmware build/glove80.uf2  # another image

      glove80-flash --timeout 120                # wait longer per half
    """
    ctx.obj = AppContext(
        icon_mode="text" if no_emoji else "emoji",
        verbose=bool(verbose or debug),
    )
    half_names = resolve_halves(right, left, both)

    # Log at the CLI level while settings load, then apply the configured level
    setup_logging(level=resolve_log_level(verbose, debug), log_file=log_file)
    settings = load_settings(config_file)
    if not verbose and not debug:
        setup_logging(level=settings.get_log_level_int(), log_file=log_file)

    console = get_themed_console(use_emoji=not no_emoji)
    print_header(console)

    config = settings.to_flash_config(
        firmware_path=firmware,
        device_timeout=timeout,
        poll_interval=poll_interval,
        settle_delay=settle_delay,
        removal_timeout=removal_timeout,
    )
    try:
        halves = config.select_halves(half_names)
    except KeyError as e:
        raise ConfigError(str(e.args[0])) from e

    sequencer = create_flash_sequencer(config, observer=ConsoleObserver(console))
    result = sequencer.flash_all(halves)

    print_run_summary(console, result)
    if not result.success:
        raise typer.Exit(EXIT_FAILURE)


def _raise_interrupt(signum: int, frame: FrameType | None) -> None:
    raise KeyboardInterrupt


def main() -> int:
    """Main CLI entry point."""
    # SIGTERM ends the run the same way Ctrl-C does
    signal.signal(signal.SIGTERM, _raise_interrupt)

    try:
        app()
        exit_code = 0
    except SystemExit as e:
        exit_code = e.code if isinstance(e.code, int) else 0
    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        print_stack_trace_if_verbose(logger.isEnabledFor(logging.INFO))
        exit_code = 1

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
