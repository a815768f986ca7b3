"""Core test fixtures for the glove80-flash project."""

import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

from glove80_flash.config.models import FlashConfig
from glove80_flash.flash.events import RecordingObserver
from glove80_flash.flash.sequencer import FlashSequencer, create_flash_sequencer


class FakeClock:
    """Sleep replacement that advances a virtual clock."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeBlockDevices:
    """In-memory BlockDeviceProtocol driven by a FakeClock.

    Devices become visible at their ``at`` time. A device that received a
    firmware file disappears ``reboot_delay`` seconds after the write, the way
    a half reboots once it has accepted the image.
    """

    def __init__(self, clock: FakeClock, mount_root: Path) -> None:
        self.clock = clock
        self.mount_root = mount_root
        self.scheduled: list[tuple[float, str, str]] = []
        self.mounted: dict[str, str] = {}
        self.written_at: dict[str, float] = {}
        self.removed: set[str] = set()
        self.reboot_delay = 1.0
        self.reboots = True
        self.mount_fails: set[str] = set()
        self.copy_error: OSError | None = None
        self.sync_error: OSError | None = None
        self.calls: list[tuple[str, ...]] = []

    def attach(self, device: str, label: str, at: float = 0.0) -> None:
        self.scheduled.append((at, device, label))

    def mount_externally(self, device: str) -> Path:
        mount_point = self.mount_root / "preexisting" / device.rsplit("/", 1)[-1]
        mount_point.mkdir(parents=True)
        self.mounted[device] = str(mount_point)
        return mount_point

    def _visible(self) -> list[tuple[str, str]]:
        visible = []
        for at, device, label in self.scheduled:
            if at <= self.clock.now and device not in self.removed:
                if self._rebooted(device):
                    continue
                visible.append((device, label))
        return visible

    def _rebooted(self, device: str) -> bool:
        if not self.reboots or device not in self.written_at:
            return False
        if self.clock.now >= self.written_at[device] + self.reboot_delay:
            self.removed.add(device)
            self.mounted.pop(device, None)
            return True
        return False

    def list_labelled_devices(self) -> list[tuple[str, str]]:
        self.calls.append(("list",))
        return self._visible()

    def device_exists(self, device: str) -> bool:
        self.calls.append(("exists", device))
        return any(found == device for found, _label in self._visible())

    def get_mount_point(self, device: str) -> str | None:
        self.calls.append(("info", device))
        return self.mounted.get(device)

    def mount(self, device: str) -> str | None:
        self.calls.append(("mount", device))
        if device in self.mount_fails:
            return None
        mount_point = self.mount_root / device.rsplit("/", 1)[-1]
        mount_point.mkdir(parents=True, exist_ok=True)
        self.mounted[device] = str(mount_point)
        return str(mount_point)

    def copy_file(self, source: Path, destination_dir: Path) -> Path:
        self.calls.append(("copy", str(destination_dir)))
        if self.copy_error is not None:
            raise self.copy_error
        target = destination_dir / source.name
        target.write_bytes(source.read_bytes())
        for device, mount_point in self.mounted.items():
            if Path(mount_point) == destination_dir:
                self.written_at[device] = self.clock.now
        return target

    def sync(self) -> None:
        self.calls.append(("sync",))
        if self.sync_error is not None:
            raise self.sync_error

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def block_devices(clock: FakeClock, tmp_path: Path) -> FakeBlockDevices:
    return FakeBlockDevices(clock, tmp_path / "media")


@pytest.fixture
def firmware_file(tmp_path: Path) -> Path:
    """A small, non-empty UF2 image."""
    path = tmp_path / "result" / "glove80.uf2"
    path.parent.mkdir(parents=True)
    path.write_bytes(b"UF2\n" + b"\x00" * 2044)
    return path


@pytest.fixture
def flash_config(firmware_file: Path) -> FlashConfig:
    return FlashConfig(firmware_path=firmware_file)


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def sequencer(
    flash_config: FlashConfig,
    observer: RecordingObserver,
    block_devices: FakeBlockDevices,
    clock: FakeClock,
) -> FlashSequencer:
    """Sequencer wired to the fake block devices and clock."""
    return create_flash_sequencer(
        flash_config,
        observer=observer,
        block_devices=block_devices,
        sleep=clock.sleep,
    )


@pytest.fixture
def isolated_env(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Run in an empty directory with no config files or GLOVE80_FLASH_ variables."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for name in list(os.environ):
        if name.startswith("GLOVE80_FLASH_"):
            monkeypatch.delenv(name)
    return workdir
