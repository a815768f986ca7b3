"""Adapters package for external system interfaces."""

from glove80_flash.protocols import BlockDeviceProtocol

from .block_device_adapter import LinuxBlockDeviceAdapter, create_block_device_adapter


__all__ = [
    "BlockDeviceProtocol",
    "LinuxBlockDeviceAdapter",
    "create_block_device_adapter",
]
