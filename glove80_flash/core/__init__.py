from .errors import (
    BlockDeviceError,
    ConfigError,
    CopyError,
    DeviceTimeoutError,
    FirmwareNotFoundError,
    FlashError,
    FlashInterruptedError,
    Glove80FlashError,
    InvalidArgumentError,
    MountError,
    RemovalTimeoutError,
)
from .logging import get_logger, setup_logging


__all__ = [
    "setup_logging",
    "get_logger",
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
