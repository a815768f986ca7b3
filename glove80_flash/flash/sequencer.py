"""Flash sequencer: drive each requested half through detect, mount, copy and reboot."""

import time
from collections.abc import Callable, Sequence

from glove80_flash.config.models import FlashConfig
from glove80_flash.core.errors import FirmwareNotFoundError, FlashError
from glove80_flash.core.structlog_logger import StructlogMixin
from glove80_flash.flash.device_wait import DeviceWaiter
from glove80_flash.flash.events import FlashEvent, FlashEventType, NullObserver, Severity
from glove80_flash.flash.locator import DeviceLocator
from glove80_flash.flash.mount import MountManager
from glove80_flash.flash.removal import RemovalWaiter
from glove80_flash.flash.transfer import TransferExecutor
from glove80_flash.models.firmware import FirmwareImage
from glove80_flash.models.half import HalfName, HalfSpec
from glove80_flash.models.results import FlashOutcome, FlashRunResult
from glove80_flash.protocols.block_device_protocol import BlockDeviceProtocol
from glove80_flash.protocols.observer_protocol import FlashObserverProtocol


def canonical_order(halves: Sequence[HalfSpec]) -> list[HalfSpec]:
    """Order halves right before left, dropping repeats."""
    unique: dict[HalfName, HalfSpec] = {}
    for half in halves:
        unique.setdefault(half.name, half)
    return sorted(unique.values(), key=lambda half: half.name.rank)


def success_message(halves: Sequence[HalfName]) -> str:
    """Final message for a run that flashed ``halves``."""
    if len(halves) == 1:
        return f"{halves[0].display_name} half flashed successfully!"
    if len(halves) == len(HalfName):
        return "Both halves flashed successfully!"
    return "All requested halves flashed successfully!"


class FlashSequencer(StructlogMixin):
    """Flash halves one at a time, stopping at the first failure.

    Only one device is handled at a time: both halves can present the same
    label, so overlapping them could write to the wrong half.
    """

    def __init__(
        self,
        config: FlashConfig,
        device_waiter: DeviceWaiter,
        mount_manager: MountManager,
        transfer: TransferExecutor,
        removal_waiter: RemovalWaiter,
        observer: FlashObserverProtocol | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        super().__init__()
        self.config = config
        self.device_waiter = device_waiter
        self.mount_manager = mount_manager
        self.transfer = transfer
        self.removal_waiter = removal_waiter
        self.observer = observer or NullObserver()
        self._sleep = sleep

    def _notify(
        self,
        event: FlashEventType,
        severity: Severity,
        message: str,
        half: HalfName | None = None,
        **details: object,
    ) -> None:
        self.observer.notify(
            FlashEvent(
                event=event,
                severity=severity,
                message=message,
                half=half,
                details=dict(details),
            )
        )

    def load_firmware(self) -> FirmwareImage:
        """Validate the configured firmware image.

        Raises:
            FirmwareNotFoundError: If the image is missing or empty
        """
        return FirmwareImage.load(self.config.firmware_path)

    def flash_half(
        self, half: HalfSpec, firmware: FirmwareImage | None = None
    ) -> FlashOutcome:
        """Flash one half.

        Steps run in a fixed order: wait for the device, settle, mount, copy,
        flush, wait for the device to disappear. The first failing step ends
        the attempt.

        Args:
            half: The half to flash
            firmware: Validated image; loaded from the config when omitted

        Returns:
            The outcome, failed with a classified reason if any step failed
        """
        name = half.name
        outcome = FlashOutcome(success=True, half=name)
        log = self.log_operation("flash_half", half=name.value)

        self._notify(
            FlashEventType.HALF_STARTED,
            Severity.INFO,
            f"Flashing {name.value} half",
            half=name,
            instructions=half.bootloader_instructions,
        )

        try:
            if firmware is None:
                firmware = self.load_firmware()

            handle = self.device_waiter.wait_for_device(
                half, self.config.device_timeout, self.config.poll_interval
            )
            outcome.device = handle.device
            outcome.found_label = handle.found_label
            if handle.used_fallback:
                outcome.add_warning(
                    f"{name.display_name} half detected with label "
                    f"{handle.found_label} instead of {half.label}"
                )

            if self.config.settle_delay > 0:
                self._notify(
                    FlashEventType.SETTLING,
                    Severity.PROGRESS,
                    "Waiting for device to settle...",
                    half=name,
                    delay=self.config.settle_delay,
                )
                self._sleep(self.config.settle_delay)

            mount = self.mount_manager.ensure_mounted(handle)
            outcome.mount_point = mount.mount_point
            self._notify(
                FlashEventType.MOUNTED,
                Severity.INFO,
                f"Mounted at {mount.mount_point}",
                half=name,
                mount_point=str(mount.mount_point),
                already_mounted=mount.already_mounted,
            )

            self._notify(
                FlashEventType.COPYING,
                Severity.PROGRESS,
                f"Copying firmware to {name.value} half...",
                half=name,
            )
            outcome.firmware_target = self.transfer.copy_firmware(firmware, mount)
            self.transfer.flush(mount)
            self._notify(
                FlashEventType.SYNCED,
                Severity.INFO,
                f"Firmware written to {outcome.firmware_target}",
                half=name,
            )

            self._notify(
                FlashEventType.WAITING_FOR_REMOVAL,
                Severity.PROGRESS,
                f"Firmware copied, waiting for {name.value} half to reboot...",
                half=name,
            )
            self.removal_waiter.wait_for_removal(handle)

        except FlashError as e:
            outcome.fail(e)
            log.error("half_flash_failed", reason=str(outcome.reason), error=str(e))
            self._notify(
                FlashEventType.HALF_FAILED,
                Severity.ERROR,
                str(e),
                half=name,
                reason=outcome.reason,
            )
            return outcome

        outcome.add_message(f"{name.display_name} half flashed from {firmware.path}")
        log.info("half_flashed", device=outcome.device)
        self._notify(
            FlashEventType.HALF_FLASHED,
            Severity.SUCCESS,
            f"{name.value} half flashed successfully!",
            half=name,
        )
        return outcome

    def flash_all(self, requested: Sequence[HalfSpec]) -> FlashRunResult:
        """Flash every requested half, right before left.

        The firmware image is validated before any device is queried. The run
        stops at the first failed half; halves flashed before it stay flashed.
        """
        ordered = canonical_order(requested)
        result = FlashRunResult(success=True, requested=[half.name for half in ordered])
        log = self.log_operation(
            "flash_all", halves=[half.name.value for half in ordered]
        )

        try:
            firmware = self.load_firmware()
        except FirmwareNotFoundError as e:
            result.fail(e)
            log.error("firmware_not_found", path=str(e.path))
            self._notify(FlashEventType.RUN_FAILED, Severity.ERROR, str(e))
            return result

        result.firmware = firmware
        log.info("flash_run_started", firmware=str(firmware.path), size=firmware.size)
        self._notify(
            FlashEventType.RUN_STARTED,
            Severity.INFO,
            f"Firmware: {firmware.path}",
            firmware=str(firmware.path),
            size=firmware.size,
        )

        for half in ordered:
            outcome = self.flash_half(half, firmware)
            result.record(outcome)
            if not outcome.success:
                log.error("flash_run_aborted", failed_half=half.name.value)
                self._notify(
                    FlashEventType.RUN_FAILED,
                    Severity.ERROR,
                    f"Flashing stopped after {half.name.value} half failed",
                    half=half.name,
                )
                return result

        message = success_message(result.requested)
        result.add_message(message)
        log.info("flash_run_succeeded")
        self._notify(FlashEventType.RUN_SUCCEEDED, Severity.SUCCESS, message)
        return result


def create_flash_sequencer(
    config: FlashConfig,
    observer: FlashObserverProtocol | None = None,
    block_devices: BlockDeviceProtocol | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> FlashSequencer:
    """Create a FlashSequencer wired to the system's block devices.

    Args:
        config: Run configuration
        observer: Receives progress notifications
        block_devices: OS collaborator; defaults to the Linux adapter
        sleep: Sleep function used by every wait

    Returns:
        Configured FlashSequencer instance
    """
    if block_devices is None:
        from glove80_flash.adapters.block_device_adapter import (
            create_block_device_adapter,
        )

        block_devices = create_block_device_adapter()

    locator = DeviceLocator(block_devices)
    return FlashSequencer(
        config=config,
        device_waiter=DeviceWaiter(locator, observer=observer, sleep=sleep),
        mount_manager=MountManager(block_devices),
        transfer=TransferExecutor(block_devices),
        removal_waiter=RemovalWaiter(
            locator,
            poll_interval=config.removal_poll_interval,
            timeout=config.removal_timeout,
            sleep=sleep,
        ),
        observer=observer,
        sleep=sleep,
    )
