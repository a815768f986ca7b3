"""Configuration for glove80-flash."""

from .defaults import LEFT_HALF, RIGHT_HALF, default_halves
from .models import FlashConfig
from .settings import FlashSettings, load_settings


__all__ = [
    "FlashConfig",
    "FlashSettings",
    "LEFT_HALF",
    "RIGHT_HALF",
    "default_halves",
    "load_settings",
]
