"""Make sure a detected bootloader volume is mounted."""

from pathlib import Path

from glove80_flash.core.errors import BlockDeviceError, MountError
from glove80_flash.core.structlog_logger import get_struct_logger
from glove80_flash.models.device import DeviceHandle, MountResult
from glove80_flash.protocols.block_device_protocol import BlockDeviceProtocol


logger = get_struct_logger(__name__)


class MountManager:
    """Mount devices, reusing an existing mount when there is one."""

    def __init__(self, block_devices: BlockDeviceProtocol) -> None:
        self.block_devices = block_devices

    def ensure_mounted(self, handle: DeviceHandle) -> MountResult:
        """Return the mount point of ``handle``, mounting it if needed.

        Raises:
            MountError: If neither the mount-state query nor a mount request
                yields a path
        """
        device = handle.device
        try:
            mount_point = self.block_devices.get_mount_point(device)
            if mount_point:
                logger.debug("device_already_mounted", device=device, path=mount_point)
                return MountResult(
                    handle=handle, mount_point=Path(mount_point), already_mounted=True
                )

            mount_point = self.block_devices.mount(device)
        except BlockDeviceError as e:
            raise MountError(device, str(e)) from e

        if not mount_point:
            raise MountError(device)

        logger.info("device_mounted", device=device, path=mount_point)
        return MountResult(handle=handle, mount_point=Path(mount_point))
