"""Progress notifications emitted while flashing."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from glove80_flash.models.half import HalfName


class Severity(str, Enum):
    """How a display layer should present a notification."""

    INFO = "info"
    PROGRESS = "progress"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class FlashEventType(str, Enum):
    """What happened."""

    RUN_STARTED = "run_started"
    HALF_STARTED = "half_started"
    WAITING_FOR_DEVICE = "waiting_for_device"
    DEVICE_FOUND = "device_found"
    LABEL_FALLBACK = "label_fallback"
    SETTLING = "settling"
    MOUNTED = "mounted"
    COPYING = "copying"
    SYNCED = "synced"
    WAITING_FOR_REMOVAL = "waiting_for_removal"
    HALF_FLASHED = "half_flashed"
    HALF_FAILED = "half_failed"
    RUN_SUCCEEDED = "run_succeeded"
    RUN_FAILED = "run_failed"


@dataclass(frozen=True)
class FlashEvent:
    """One notification for the observer stream."""

    event: FlashEventType
    severity: Severity
    message: str
    half: HalfName | None = None
    details: dict[str, Any] = field(default_factory=dict)


class NullObserver:
    """Observer that discards every notification."""

    def notify(self, event: FlashEvent) -> None:
        pass


class RecordingObserver:
    """Observer that keeps every notification in order."""

    def __init__(self) -> None:
        self.events: list[FlashEvent] = []

    def notify(self, event: FlashEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: FlashEventType) -> list[FlashEvent]:
        return [event for event in self.events if event.event == event_type]

    def with_severity(self, severity: Severity) -> list[FlashEvent]:
        return [event for event in self.events if event.severity == severity]

