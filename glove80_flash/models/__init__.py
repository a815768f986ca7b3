"""Data models shared across glove80-flash."""

from .base import Glove80BaseModel
from .device import DeviceHandle, MountResult
from .firmware import FirmwareImage
from .half import HalfName, HalfSpec
from .results import BaseResult, FailureReason, FlashOutcome, FlashRunResult


__all__ = [
    "BaseResult",
    "DeviceHandle",
    "FailureReason",
    "FirmwareImage",
    "FlashOutcome",
    "FlashRunResult",
    "Glove80BaseModel",
    "HalfName",
    "HalfSpec",
    "MountResult",
]
