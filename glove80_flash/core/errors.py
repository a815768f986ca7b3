"""Error hierarchy for glove80-flash.

Every failure the flash run can hit is a subclass of ``Glove80FlashError``.
Device-side failures derive from ``FlashError`` so the sequencer can turn any
of them into a failed outcome without catching unrelated exceptions.
"""

from pathlib import Path


class Glove80FlashError(Exception):
    """Base exception for all glove80-flash errors."""


class ConfigError(Glove80FlashError):
    """Raised when configuration cannot be loaded or is invalid."""


class InvalidArgumentError(Glove80FlashError):
    """Raised when the command line combines options that cannot be combined."""

    def __init__(self, flag: str, reason: str = "") -> None:
        self.flag = flag
        message = f"Invalid argument: {flag}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class FlashInterruptedError(Glove80FlashError):
    """Raised when the operator interrupts a flash run."""

    def __init__(self, message: str = "Flashing interrupted.") -> None:
        super().__init__(message)


class FlashError(Glove80FlashError):
    """Base exception for failures while acquiring or writing a device."""


class FirmwareNotFoundError(FlashError):
    """Raised when the firmware image is missing or empty."""

    def __init__(self, path: Path, reason: str = "not found") -> None:
        self.path = path
        super().__init__(f"Firmware file {reason} at {path}")


class DeviceTimeoutError(FlashError):
    """Raised when a half never shows up in bootloader mode."""

    def __init__(self, half: str, timeout: float) -> None:
        self.half = half
        self.timeout = timeout
        super().__init__(
            f"Timeout: {half} half not detected within {timeout:g} seconds."
        )


class MountError(FlashError):
    """Raised when a detected device cannot be mounted."""

    def __init__(self, device: str, reason: str = "") -> None:
        self.device = device
        message = f"Failed to mount device {device}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class CopyError(FlashError):
    """Raised when the firmware image cannot be written to the mounted volume."""

    def __init__(self, device: str, path: str, reason: str = "") -> None:
        self.device = device
        self.path = path
        message = f"Failed to copy firmware to {path} ({device})"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class RemovalTimeoutError(FlashError):
    """Raised when a flashed half does not reboot within the removal timeout."""

    def __init__(self, half: str, device: str, timeout: float) -> None:
        self.half = half
        self.device = device
        self.timeout = timeout
        super().__init__(
            f"Timeout: {half} half at {device} did not reboot within "
            f"{timeout:g} seconds."
        )


class BlockDeviceError(FlashError):
    """Raised when an operating system block-device operation fails."""

    def __init__(self, operation: str, device: str, reason: str) -> None:
        self.operation = operation
        self.device = device
        super().__init__(
            f"Block device operation '{operation}' failed on '{device}': {reason}"
        )


__all__ = [
    "BlockDeviceError",
    "ConfigError",
    "CopyError",
    "DeviceTimeoutError",
    "FirmwareNotFoundError",
    "FlashError",
    "FlashInterruptedError",
    "Glove80FlashError",
    "InvalidArgumentError",
    "MountError",
    "RemovalTimeoutError",
]
