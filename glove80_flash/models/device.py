"""Transient models describing a detected and mounted bootloader volume."""

from pathlib import Path

from pydantic import ConfigDict

from glove80_flash.models.base import Glove80BaseModel
from glove80_flash.models.half import HalfName


class DeviceHandle(Glove80BaseModel):
    """A detected block device, valid for a single half's flash cycle."""

    model_config = ConfigDict(frozen=True)

    half: HalfName
    device: str
    found_label: str
    used_fallback: bool = False


class MountResult(Glove80BaseModel):
    """Where a device handle is mounted."""

    model_config = ConfigDict(frozen=True)

    handle: DeviceHandle
    mount_point: Path
    already_mounted: bool = False
