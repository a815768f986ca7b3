"""glove80-flash - flash UF2 firmware to both halves of a Glove80 keyboard."""

from importlib.metadata import distribution

from .models.results import FlashOutcome, FlashRunResult


__version__ = distribution("glove80-flash").version

__all__ = [
    "FlashOutcome",
    "FlashRunResult",
    "__version__",
]

# Import CLI after setting __version__ to avoid circular imports
from .cli import app, main


__all__ += ["app", "main"]
