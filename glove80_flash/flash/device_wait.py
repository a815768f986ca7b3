"""Wait for a keyboard half to appear in bootloader mode."""

import time
from collections.abc import Callable

from glove80_flash.core.errors import DeviceTimeoutError
from glove80_flash.core.structlog_logger import get_struct_logger
from glove80_flash.flash.events import FlashEvent, FlashEventType, NullObserver, Severity
from glove80_flash.flash.locator import DeviceLocator
from glove80_flash.models.device import DeviceHandle
from glove80_flash.models.half import HalfSpec
from glove80_flash.protocols.observer_protocol import FlashObserverProtocol


logger = get_struct_logger(__name__)

# Absorbs float error in timeout / poll_interval, e.g. 0.3 / 0.1
ROUND_TOLERANCE = 1e-9


class DeviceWaiter:
    """Poll the device locator until a half's label shows up."""

    def __init__(
        self,
        locator: DeviceLocator,
        observer: FlashObserverProtocol | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.locator = locator
        self.observer = observer or NullObserver()
        self._sleep = sleep

    def wait_for_device(
        self, half: HalfSpec, timeout: float, poll_interval: float
    ) -> DeviceHandle:
        """Wait for ``half`` to present its bootloader volume.

        Each round queries the expected label, then the fallback label when
        the half has one. Elapsed time is the sum of the sleeps between
        rounds. Rounds run while it does not exceed ``timeout``, so a round
        runs at exactly ``timeout`` when the interval divides it.

        Args:
            half: The half to wait for
            timeout: Seconds of polling before giving up
            poll_interval: Seconds to sleep between unsuccessful rounds

        Returns:
            Handle for the detected device

        Raises:
            DeviceTimeoutError: If no round found a matching label
        """
        self.observer.notify(
            FlashEvent(
                event=FlashEventType.WAITING_FOR_DEVICE,
                severity=Severity.PROGRESS,
                message=f"Waiting for {half.name.value} half ({half.label})...",
                half=half.name,
                details={"labels": list(half.labels), "timeout": timeout},
            )
        )
        logger.info(
            "waiting_for_device",
            half=half.name.value,
            labels=list(half.labels),
            timeout=timeout,
            poll_interval=poll_interval,
        )

        # Rounds run at 0, poll_interval, ... up to and including timeout
        last_round = int(timeout / poll_interval + ROUND_TOLERANCE)
        for round_no in range(last_round + 1):
            if round_no:
                self._sleep(poll_interval)

            handle = self._poll_once(half)
            if handle is not None:
                self._report_found(half, handle, round_no * poll_interval)
                return handle

        logger.warning("device_wait_timeout", half=half.name.value, timeout=timeout)
        raise DeviceTimeoutError(half.name.value, timeout)

    def _poll_once(self, half: HalfSpec) -> DeviceHandle | None:
        for label in half.labels:
            device = self.locator.find_device_by_label(label)
            if device:
                return DeviceHandle(
                    half=half.name,
                    device=device,
                    found_label=label,
                    used_fallback=half.is_fallback_match(label),
                )
        return None

    def _report_found(self, half: HalfSpec, handle: DeviceHandle, elapsed: float) -> None:
        logger.info(
            "device_found",
            half=half.name.value,
            device=handle.device,
            label=handle.found_label,
            elapsed=elapsed,
        )

        if handle.used_fallback:
            self.observer.notify(
                FlashEvent(
                    event=FlashEventType.LABEL_FALLBACK,
                    severity=Severity.WARNING,
                    message=(
                        f"{half.name.display_name} half detected with label "
                        f"{handle.found_label} instead of {half.label}. "
                        "This is a known issue."
                    ),
                    half=half.name,
                    details={
                        "expected_label": half.label,
                        "found_label": handle.found_label,
                    },
                )
            )

        self.observer.notify(
            FlashEvent(
                event=FlashEventType.DEVICE_FOUND,
                severity=Severity.INFO,
                message=f"Found {half.name.value} half at {handle.device}",
                half=half.name,
                details={"device": handle.device, "label": handle.found_label},
            )
        )
