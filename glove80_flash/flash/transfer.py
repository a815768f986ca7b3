"""Copy the firmware image onto a mounted volume."""

from pathlib import Path

from glove80_flash.core.errors import BlockDeviceError, CopyError
from glove80_flash.core.structlog_logger import get_struct_logger
from glove80_flash.models.device import MountResult
from glove80_flash.models.firmware import FirmwareImage
from glove80_flash.protocols.block_device_protocol import BlockDeviceProtocol


logger = get_struct_logger(__name__)


class TransferExecutor:
    """Write the firmware and force it to stable storage."""

    def __init__(self, block_devices: BlockDeviceProtocol) -> None:
        self.block_devices = block_devices

    def copy_firmware(self, firmware: FirmwareImage, mount: MountResult) -> Path:
        """Copy ``firmware`` into the mount point under the same file name.

        Raises:
            CopyError: If the copy fails for any reason (no space, I/O error,
                volume gone)
        """
        device = mount.handle.device
        try:
            target = self.block_devices.copy_file(firmware.path, mount.mount_point)
        except OSError as e:
            raise CopyError(device, str(mount.mount_point), str(e)) from e

        logger.info(
            "firmware_copied",
            device=device,
            target=str(target),
            size=firmware.size,
        )
        return target

    def flush(self, mount: MountResult) -> None:
        """Flush every pending write on the system.

        The flush is global rather than per device: the half reboots as soon
        as it sees the complete file, so nothing may still be buffered.

        Raises:
            CopyError: If the flush fails
        """
        try:
            self.block_devices.sync()
        except (OSError, BlockDeviceError) as e:
            raise CopyError(mount.handle.device, str(mount.mount_point), str(e)) from e
        logger.debug("filesystem_synced", device=mount.handle.device)
