"""Firmware image model."""

from pathlib import Path

from pydantic import ConfigDict, Field

from glove80_flash.core.errors import FirmwareNotFoundError
from glove80_flash.models.base import Glove80BaseModel


class FirmwareImage(Glove80BaseModel):
    """A UF2 image shared by both halves."""

    model_config = ConfigDict(frozen=True)

    path: Path
    size: int = Field(gt=0)

    @property
    def name(self) -> str:
        return self.path.name

    @classmethod
    def load(cls, path: str | Path) -> "FirmwareImage":
        """Validate that ``path`` is a non-empty regular file.

        Raises:
            FirmwareNotFoundError: If the file is missing, not a file, or empty
        """
        firmware_path = Path(path)
        if not firmware_path.is_file():
            raise FirmwareNotFoundError(firmware_path)

        size = firmware_path.stat().st_size
        if size == 0:
            raise FirmwareNotFoundError(firmware_path, reason="is empty")

        return cls(path=firmware_path, size=size)
