"""Built-in Glove80 defaults."""

from pathlib import Path

from glove80_flash.models.half import HalfName, HalfSpec


RIGHT_LABEL = "GLV80RHBOOT"
LEFT_LABEL = "GLV80LHBOOT"

DEFAULT_FIRMWARE_PATH = Path("result/glove80.uf2")
DEFAULT_DEVICE_TIMEOUT = 60.0
DEFAULT_POLL_INTERVAL = 2.0
DEFAULT_REMOVAL_POLL_INTERVAL = 1.0
DEFAULT_SETTLE_DELAY = 3.0

RIGHT_HALF = HalfSpec(
    name=HalfName.RIGHT,
    label=RIGHT_LABEL,
    bootloader_instructions="Magic+' (on both halves)",
)

# The left half's bootloader sometimes reports the right half's label
LEFT_HALF = HalfSpec(
    name=HalfName.LEFT,
    label=LEFT_LABEL,
    bootloader_instructions="Magic+Esc (on left half)",
    fallback_label=RIGHT_LABEL,
)


def default_halves() -> list[HalfSpec]:
    return [RIGHT_HALF, LEFT_HALF]
