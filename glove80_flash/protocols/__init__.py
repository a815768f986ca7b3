"""Protocol definitions for glove80-flash collaborators."""

from .block_device_protocol import BlockDeviceProtocol
from .observer_protocol import FlashObserverProtocol


__all__ = [
    "BlockDeviceProtocol",
    "FlashObserverProtocol",
]
