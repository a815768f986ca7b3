"""Wait for a flashed half to reboot out of bootloader mode."""

import time
from collections.abc import Callable

from glove80_flash.core.errors import RemovalTimeoutError
from glove80_flash.core.structlog_logger import get_struct_logger
from glove80_flash.flash.locator import DeviceLocator
from glove80_flash.models.device import DeviceHandle


logger = get_struct_logger(__name__)


class RemovalWaiter:
    """Poll until a device handle no longer resolves.

    The device disappearing is the only sign that the half accepted the
    firmware. With ``timeout`` left as None the wait never ends on its own.
    """

    def __init__(
        self,
        locator: DeviceLocator,
        poll_interval: float = 1.0,
        timeout: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.locator = locator
        self.poll_interval = poll_interval
        self.timeout = timeout
        self._sleep = sleep

    def wait_for_removal(self, handle: DeviceHandle) -> None:
        """Block until ``handle.device`` is gone.

        Raises:
            RemovalTimeoutError: If a timeout is set and the device outlives it
        """
        elapsed = 0.0
        while self.locator.exists(handle.device):
            if self.timeout is not None and elapsed >= self.timeout:
                logger.warning(
                    "removal_wait_timeout",
                    half=handle.half.value,
                    device=handle.device,
                    timeout=self.timeout,
                )
                raise RemovalTimeoutError(
                    handle.half.value, handle.device, self.timeout
                )
            self._sleep(self.poll_interval)
            elapsed += self.poll_interval

        logger.info(
            "device_removed", half=handle.half.value, device=handle.device, elapsed=elapsed
        )
