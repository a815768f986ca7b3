"""Helper functions for CLI output formatting with Rich integration."""

from rich.rule import Rule

from glove80_flash.cli.helpers.theme import (
    Colors,
    Icons,
    PanelStyles,
    ThemedConsole,
    get_themed_console,
)
from glove80_flash.flash.events import FlashEvent, FlashEventType, Severity
from glove80_flash.models.results import FlashRunResult


SIZE_UNITS = ["B", "KiB", "MiB", "GiB"]

FINAL_EVENTS = (
    FlashEventType.HALF_FAILED,
    FlashEventType.RUN_SUCCEEDED,
    FlashEventType.RUN_FAILED,
)


def format_size(size: int) -> str:
    """Format a byte count with IEC units, e.g. ``1.2 MiB``."""
    value = float(size)
    for unit in SIZE_UNITS[:-1]:
        if value < 1024:
            return f"{size} B" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} {SIZE_UNITS[-1]}"


class ConsoleObserver:
    """Render flash notifications on a themed console."""

    def __init__(self, console: ThemedConsole | None = None) -> None:
        self.themed = console or get_themed_console()

    def notify(self, event: FlashEvent) -> None:
        if event.event == FlashEventType.RUN_STARTED:
            self._print_firmware(event)
        elif event.event == FlashEventType.HALF_STARTED:
            self._print_half_banner(event)
        elif event.event in FINAL_EVENTS:
            # Printed by the command once the run returns
            return
        else:
            self._print_by_severity(event)

    def _print_by_severity(self, event: FlashEvent) -> None:
        if event.severity == Severity.SUCCESS:
            self.themed.print_success(event.message)
        elif event.severity == Severity.WARNING:
            self.themed.print_warning(event.message)
        elif event.severity == Severity.ERROR:
            self.themed.print_error(event.message)
        elif event.severity == Severity.PROGRESS:
            self.themed.print_progress(event.message)
        else:
            self.themed.print_info(event.message)

    def _print_firmware(self, event: FlashEvent) -> None:
        icon_mode = self.themed.icon_mode
        firmware = f"Firmware: {event.details['firmware']}"
        size = f"Size: {format_size(event.details['size'])}"
        self.themed.console.print(
            Icons.format_with_icon("FIRMWARE", firmware, icon_mode),
            style=Colors.PRIMARY,
            markup=False,
        )
        self.themed.console.print(
            Icons.format_with_icon("FOLDER", size, icon_mode),
            style=Colors.MUTED,
            markup=False,
        )

    def _print_half_banner(self, event: FlashEvent) -> None:
        half = event.half.display_name if event.half else ""
        self.themed.console.print()
        self.themed.console.print(Rule(f"{half} half", style=Colors.SECONDARY))
        instructions = event.details.get("instructions")
        if instructions:
            self.themed.console.print(
                PanelStyles.create_instructions_panel(
                    f"Put the {half.lower()} half into bootloader mode: {instructions}",
                    title="Bootloader",
                    icon_mode=self.themed.icon_mode,
                )
            )


def print_header(console: ThemedConsole) -> None:
    """Print the banner shown before anything else."""
    console.console.print(
        PanelStyles.create_header_panel(
            "Glove80 Firmware Flasher",
            subtitle="Flashes the right half first, then the left half",
            icon="FLASH",
            icon_mode=console.icon_mode,
        )
    )


def print_run_summary(console: ThemedConsole, result: FlashRunResult) -> None:
    """Print the final outcome of a run."""
    console.console.print()
    if result.success:
        for message in result.messages:
            console.print_success(message)
        return

    for error in result.errors:
        console.print_error(error)
    if result.completed_halves:
        flashed = ", ".join(half.display_name for half in result.completed_halves)
        console.print_list_item(f"Already flashed: {flashed}")
