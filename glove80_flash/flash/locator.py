"""Find bootloader volumes by label."""

from glove80_flash.core.structlog_logger import get_struct_logger
from glove80_flash.protocols.block_device_protocol import BlockDeviceProtocol


logger = get_struct_logger(__name__)


class DeviceLocator:
    """Single-snapshot lookups against the block-device registry."""

    def __init__(self, block_devices: BlockDeviceProtocol) -> None:
        self.block_devices = block_devices

    def find_device_by_label(self, label: str) -> str | None:
        """Return the first device whose volume label is exactly ``label``."""
        for device, device_label in self.block_devices.list_labelled_devices():
            if device_label == label:
                logger.debug("device_label_matched", label=label, device=device)
                return device
        return None

    def exists(self, device: str) -> bool:
        """Whether ``device`` still resolves to an attached block device."""
        return self.block_devices.device_exists(device)
