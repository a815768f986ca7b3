"""Linux block-device adapter built on udev and udisks2."""

import logging
import os
import re
import shutil
import subprocess
from pathlib import Path

import pyudev

from glove80_flash.core.errors import BlockDeviceError
from glove80_flash.protocols.block_device_protocol import BlockDeviceProtocol


logger = logging.getLogger(__name__)

UDISKSCTL = "udisksctl"
MOUNT_TIMEOUT = 10
INFO_TIMEOUT = 5


class LinuxBlockDeviceAdapter:
    """Block-device operations using pyudev for discovery and udisksctl for mounts."""

    def __init__(self, context: pyudev.Context | None = None) -> None:
        self._context = context

    @property
    def context(self) -> pyudev.Context:
        """Get or create the udev context."""
        if self._context is None:
            self._context = pyudev.Context()
        return self._context

    def list_labelled_devices(self) -> list[tuple[str, str]]:
        """Snapshot block devices carrying a filesystem label."""
        devices = []
        try:
            for device in self.context.list_devices(subsystem="block"):
                label = device.properties.get("ID_FS_LABEL", "")
                if device.device_node and label:
                    devices.append((device.device_node, label))
        except OSError as e:
            raise BlockDeviceError("list_labelled_devices", "all", str(e)) from e

        logger.debug("Found %d labelled block devices", len(devices))
        return devices

    def device_exists(self, device: str) -> bool:
        """Check whether ``device`` is in the current block-device snapshot."""
        try:
            return any(
                udev_device.device_node == device
                for udev_device in self.context.list_devices(subsystem="block")
            )
        except OSError as e:
            raise BlockDeviceError("device_exists", device, str(e)) from e

    def get_mount_point(self, device: str) -> str | None:
        """Get the mount point reported by ``udisksctl info``."""
        result = self._run_udisksctl(["info", "-b", device], device, INFO_TIMEOUT)
        if result.returncode != 0:
            logger.debug(
                "udisksctl info exited with %d for %s", result.returncode, device
            )
            return None
        return self._extract_mount_point_from_info(result.stdout)

    def mount(self, device: str) -> str | None:
        """Mount ``device`` with udisksctl and return the assigned mount point."""
        result = self._run_udisksctl(
            ["mount", "--no-user-interaction", "-b", device], device, MOUNT_TIMEOUT
        )

        if result.returncode == 0:
            mount_point = self._extract_mount_point_from_output(result.stdout)
            if not mount_point:
                logger.warning(
                    "Could not parse mount point from udisksctl output: %s",
                    result.stdout.strip(),
                )
            return mount_point

        stderr = result.stderr.lower()
        if "already mounted" in stderr:
            return self.get_mount_point(device)
        if "not authorized" in stderr:
            raise BlockDeviceError("mount", device, "authorization failed")

        logger.warning(
            "udisksctl mount failed for %s: %s", device, result.stderr.strip()
        )
        return None

    def copy_file(self, source: Path, destination_dir: Path) -> Path:
        """Copy the firmware file into the mounted volume."""
        dest_path = destination_dir / source.name
        logger.info("Copying %s to %s", source, dest_path)
        shutil.copy2(source, dest_path)
        return dest_path

    def sync(self) -> None:
        """Flush every pending write on the system."""
        os.sync()
        logger.debug("sync completed")

    def _run_udisksctl(
        self, args: list[str], device: str, timeout: int
    ) -> subprocess.CompletedProcess[str]:
        operation = args[0]
        if not shutil.which(UDISKSCTL):
            raise BlockDeviceError(
                operation,
                device,
                "`udisksctl` command not found. Please install udisks2.",
            )

        try:
            return subprocess.run(
                [UDISKSCTL, *args],
                capture_output=True,
                text=True,
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            exc_info = logger.isEnabledFor(logging.DEBUG)
            logger.error(
                "Timeout running udisksctl %s on %s",
                operation,
                device,
                exc_info=exc_info,
            )
            raise BlockDeviceError(operation, device, "timed out") from e
        except OSError as e:
            raise BlockDeviceError(operation, device, str(e)) from e

    def _extract_mount_point_from_output(self, output: str) -> str | None:
        """Extract mount point from udisksctl mount output."""
        # Example output: "Mounted /dev/sda at /run/media/user/GLV80RHBOOT"
        match = re.search(r"Mounted \S+ at (.+)", output)
        if match:
            return match.group(1).strip().rstrip(".")
        return None

    def _extract_mount_point_from_info(self, output: str) -> str | None:
        """Extract mount point from udisksctl info output."""
        match = re.search(r"^\s*MountPoints?:\s*(/\S+)", output, re.MULTILINE)
        if match:
            return match.group(1).strip()

        # MountPoints may list its value on the following line
        lines = output.splitlines()
        for i, line in enumerate(lines):
            if "MountPoints:" in line and i + 1 < len(lines):
                possible_mount = lines[i + 1].strip()
                if possible_mount.startswith("/"):
                    return possible_mount

        return None


def create_block_device_adapter(
    context: pyudev.Context | None = None,
) -> BlockDeviceProtocol:
    """Factory function to create the block-device adapter for this system."""
    adapter: BlockDeviceProtocol = LinuxBlockDeviceAdapter(context=context)
    return adapter
