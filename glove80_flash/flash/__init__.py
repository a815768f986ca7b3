"""Flash workflow: locate, wait, mount, copy and sequence both halves."""

from .device_wait import DeviceWaiter
from .events import FlashEvent, FlashEventType, NullObserver, RecordingObserver, Severity
from .locator import DeviceLocator
from .mount import MountManager
from .removal import RemovalWaiter
from .sequencer import FlashSequencer, canonical_order, create_flash_sequencer
from .transfer import TransferExecutor


__all__ = [
    "DeviceLocator",
    "DeviceWaiter",
    "FlashEvent",
    "FlashEventType",
    "FlashSequencer",
    "MountManager",
    "NullObserver",
    "RecordingObserver",
    "RemovalWaiter",
    "Severity",
    "TransferExecutor",
    "canonical_order",
    "create_flash_sequencer",
]
