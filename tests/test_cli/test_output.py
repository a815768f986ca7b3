"""Tests for CLI output helpers."""

import io

import pytest
from rich.console import Console

from glove80_flash.cli.helpers.output import ConsoleObserver, format_size, print_run_summary
from glove80_flash.cli.helpers.theme import GLOVE80_FLASH_THEME, Icons, ThemedConsole
from glove80_flash.core.errors import DeviceTimeoutError
from glove80_flash.flash.events import FlashEvent, FlashEventType, Severity
from glove80_flash.models.half import HalfName
from glove80_flash.models.results import FlashOutcome, FlashRunResult


@pytest.fixture
def themed():
    themed = ThemedConsole(icon_mode="text")
    themed.console = Console(
        file=io.StringIO(), theme=GLOVE80_FLASH_THEME, width=120, color_system=None
    )
    return themed


def rendered(themed: ThemedConsole) -> str:
    return themed.console.file.getvalue()


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (0, "0 B"),
        (512, "512 B"),
        (1024, "1.0 KiB"),
        (1536, "1.5 KiB"),
        (1258291, "1.2 MiB"),
        (3 * 1024**3, "3.0 GiB"),
    ],
)
def test_format_size(size, expected):
    assert format_size(size) == expected


class TestIcons:
    def test_text_mode_fallbacks(self):
        assert Icons.get_icon("SUCCESS", "text") == "[OK]"
        assert Icons.format_with_icon("FLASH", "Glove80", "text") == "Glove80"

    def test_emoji_mode(self):
        assert Icons.format_with_icon("SUCCESS", "done") == "✅ done"

    def test_every_icon_has_text_fallback(self):
        names = [n for n in vars(Icons) if n.isupper() and not n.startswith("_")]

        assert sorted(names) == sorted(Icons._TEXT_FALLBACKS)


class TestConsoleObserver:
    def test_severity_mapping(self, themed):
        observer = ConsoleObserver(themed)

        observer.notify(
            FlashEvent(FlashEventType.LABEL_FALLBACK, Severity.WARNING, "odd label")
        )
        observer.notify(
            FlashEvent(FlashEventType.COPYING, Severity.PROGRESS, "Copying firmware...")
        )

        output = rendered(themed)
        assert "[WARN] odd label" in output
        assert "... Copying firmware..." in output

    def test_run_started_shows_firmware_and_size(self, themed):
        ConsoleObserver(themed).notify(
            FlashEvent(
                FlashEventType.RUN_STARTED,
                Severity.INFO,
                "Firmware: result/glove80.uf2",
                details={"firmware": "result/glove80.uf2", "size": 1258291},
            )
        )

        output = rendered(themed)
        assert "Firmware: result/glove80.uf2" in output
        assert "Size: 1.2 MiB" in output

    def test_half_banner_shows_instructions(self, themed):
        ConsoleObserver(themed).notify(
            FlashEvent(
                FlashEventType.HALF_STARTED,
                Severity.INFO,
                "Flashing LEFT half",
                half=HalfName.LEFT,
                details={"instructions": "Magic+Esc (on left half)"},
            )
        )

        output = rendered(themed)
        assert "Left half" in output
        assert "Magic+Esc (on left half)" in output

    def test_final_events_left_to_summary(self, themed):
        observer = ConsoleObserver(themed)

        for event_type in (
            FlashEventType.HALF_FAILED,
            FlashEventType.RUN_FAILED,
            FlashEventType.RUN_SUCCEEDED,
        ):
            observer.notify(FlashEvent(event_type, Severity.ERROR, "final"))

        assert rendered(themed) == ""


class TestRunSummary:
    def test_success(self, themed):
        result = FlashRunResult(success=True, messages=["Both halves flashed successfully!"])

        print_run_summary(themed, result)

        assert "[OK] Both halves flashed successfully!" in rendered(themed)

    def test_failure_lists_completed_halves(self, themed):
        result = FlashRunResult(success=True)
        result.record(FlashOutcome(success=True, half=HalfName.RIGHT))
        left = FlashOutcome(success=True, half=HalfName.LEFT)
        left.fail(DeviceTimeoutError("LEFT", 60))
        result.record(left)

        print_run_summary(themed, result)

        output = rendered(themed)
        assert "[ERROR] Timeout: LEFT half not detected within 60 seconds." in output
        assert "Already flashed: Right" in output
