"""Protocol definition for flash progress observers."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from glove80_flash.flash.events import FlashEvent


@runtime_checkable
class FlashObserverProtocol(Protocol):
    """Receives progress, status, warning and error notifications."""

    def notify(self, event: "FlashEvent") -> None:
        """Handle one notification."""
        ...
