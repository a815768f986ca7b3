"""Keyboard half models."""

from enum import Enum

from pydantic import ConfigDict, Field, field_validator

from glove80_flash.models.base import Glove80BaseModel


class HalfName(str, Enum):
    """Physical keyboard halves, declared in the order they are flashed."""

    RIGHT = "RIGHT"
    LEFT = "LEFT"

    @property
    def rank(self) -> int:
        """Position of this half in the canonical flash order."""
        return list(HalfName).index(self)

    @property
    def display_name(self) -> str:
        """Human-readable name, e.g. ``Right``."""
        return self.value.capitalize()


class HalfSpec(Glove80BaseModel):
    """Immutable description of one keyboard half.

    Attributes:
        name: Which half this is
        label: Volume label the half reports in bootloader mode
        bootloader_instructions: Key combination that enters bootloader mode
        fallback_label: Extra label accepted for this half only. Set for the
            half whose bootloader sometimes reports the other half's label;
            clear it once the bootloader is fixed.
    """

    model_config = ConfigDict(frozen=True)

    name: HalfName
    label: str = Field(min_length=1, max_length=11)
    bootloader_instructions: str = ""
    fallback_label: str | None = Field(default=None, min_length=1, max_length=11)

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, v: object) -> object:
        """Accept half names in any case (``left``, ``Left``)."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @property
    def labels(self) -> tuple[str, ...]:
        """Labels to query on each poll round, expected label first."""
        if self.fallback_label and self.fallback_label != self.label:
            return (self.label, self.fallback_label)
        return (self.label,)

    def is_fallback_match(self, found_label: str) -> bool:
        """Whether ``found_label`` matched only through the fallback label."""
        return found_label != self.label and found_label == self.fallback_label
