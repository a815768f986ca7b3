"""Immutable run configuration handed to the flash sequencer."""

from pathlib import Path

from pydantic import ConfigDict, Field, field_validator

from glove80_flash.config.defaults import (
    DEFAULT_DEVICE_TIMEOUT,
    DEFAULT_FIRMWARE_PATH,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_REMOVAL_POLL_INTERVAL,
    DEFAULT_SETTLE_DELAY,
    default_halves,
)
from glove80_flash.models.base import Glove80BaseModel
from glove80_flash.models.half import HalfName, HalfSpec


class FlashConfig(Glove80BaseModel):
    """Labels, timeouts and intervals for one flash run."""

    model_config = ConfigDict(frozen=True)

    firmware_path: Path = Field(
        default=DEFAULT_FIRMWARE_PATH, description="UF2 image copied to each half"
    )
    device_timeout: float = Field(
        default=DEFAULT_DEVICE_TIMEOUT,
        gt=0,
        description="Seconds to wait for a half to enter bootloader mode",
    )
    poll_interval: float = Field(
        default=DEFAULT_POLL_INTERVAL,
        gt=0,
        description="Seconds between device detection rounds",
    )
    removal_poll_interval: float = Field(
        default=DEFAULT_REMOVAL_POLL_INTERVAL,
        gt=0,
        description=(
            "Seconds between checks that a flashed half has rebooted. Keep it "
            "at or below poll_interval; the two are not cross-checked"
        ),
    )
    settle_delay: float = Field(
        default=DEFAULT_SETTLE_DELAY,
        ge=0,
        description="Seconds to let udisks settle between detection and mounting",
    )
    removal_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds to wait for a flashed half to reboot (None waits forever)",
    )
    halves: tuple[HalfSpec, ...] = Field(
        default_factory=lambda: tuple(default_halves()),
        min_length=1,
    )

    @field_validator("halves")
    @classmethod
    def validate_unique_halves(
        cls, v: tuple[HalfSpec, ...]
    ) -> tuple[HalfSpec, ...]:
        """Each physical half may be described only once."""
        names = [half.name for half in v]
        if len(names) != len(set(names)):
            raise ValueError("Each half may only be configured once")
        return v

    def get_half(self, name: HalfName | str) -> HalfSpec:
        """Return the configuration of half ``name``.

        Raises:
            KeyError: If the half is not configured
        """
        half_name = HalfName(name.upper() if isinstance(name, str) else name)
        for half in self.halves:
            if half.name == half_name:
                return half
        raise KeyError(f"Half {half_name.value} is not configured")

    def select_halves(self, names: list[HalfName]) -> list[HalfSpec]:
        """Return the half configurations for ``names``, in order.

        Raises:
            KeyError: If any requested half is not configured
        """
        return [self.get_half(name) for name in names]
