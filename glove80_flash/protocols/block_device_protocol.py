"""Protocol definition for operating system block-device operations."""

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class BlockDeviceProtocol(Protocol):
    """Operating system facilities the flash sequencer orchestrates."""

    def list_labelled_devices(self) -> list[tuple[str, str]]:
        """Snapshot attached block devices that carry a volume label.

        Returns:
            ``(device_path, label)`` pairs, e.g. ``("/dev/sda", "GLV80RHBOOT")``

        Raises:
            BlockDeviceError: If the device registry cannot be queried
        """
        ...

    def get_mount_point(self, device: str) -> str | None:
        """Return where ``device`` is currently mounted, if anywhere.

        Raises:
            BlockDeviceError: If the mount state cannot be queried
        """
        ...

    def mount(self, device: str) -> str | None:
        """Mount ``device`` and return the assigned mount point.

        Returns:
            The mount point, or None if the mount reported no usable path

        Raises:
            BlockDeviceError: If the mount request fails
        """
        ...

    def copy_file(self, source: Path, destination_dir: Path) -> Path:
        """Copy ``source`` into ``destination_dir`` keeping its file name.

        Returns:
            Path of the written file

        Raises:
            OSError: If the copy fails
        """
        ...

    def sync(self) -> None:
        """Flush all pending filesystem writes to stable storage."""
        ...

    def device_exists(self, device: str) -> bool:
        """Check whether ``device`` is still attached."""
        ...
