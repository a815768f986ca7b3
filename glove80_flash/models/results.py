"""Result models for flash runs."""

from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import Field, model_validator

from glove80_flash.core.errors import (
    CopyError,
    DeviceTimeoutError,
    FirmwareNotFoundError,
    FlashError,
    MountError,
    RemovalTimeoutError,
)
from glove80_flash.core.structlog_logger import get_struct_logger
from glove80_flash.models.base import Glove80BaseModel
from glove80_flash.models.firmware import FirmwareImage
from glove80_flash.models.half import HalfName


logger = get_struct_logger(__name__)


class FailureReason(str, Enum):
    """Classified cause of a failed flash run."""

    FIRMWARE_NOT_FOUND = "firmware_not_found"
    DEVICE_TIMEOUT = "device_timeout"
    MOUNT_FAILURE = "mount_failure"
    COPY_FAILURE = "copy_failure"
    REMOVAL_TIMEOUT = "removal_timeout"
    DEVICE_ERROR = "device_error"

    @classmethod
    def from_error(cls, error: FlashError) -> "FailureReason":
        """Classify a flash error."""
        if isinstance(error, FirmwareNotFoundError):
            return cls.FIRMWARE_NOT_FOUND
        if isinstance(error, DeviceTimeoutError):
            return cls.DEVICE_TIMEOUT
        if isinstance(error, MountError):
            return cls.MOUNT_FAILURE
        if isinstance(error, CopyError):
            return cls.COPY_FAILURE
        if isinstance(error, RemovalTimeoutError):
            return cls.REMOVAL_TIMEOUT
        return cls.DEVICE_ERROR


class BaseResult(Glove80BaseModel):
    """Base class for operation results."""

    success: bool
    timestamp: datetime = Field(default_factory=datetime.now)
    messages: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_success_consistency(self) -> "BaseResult":
        """A result carrying errors is never successful."""
        if self.errors and self.success:
            logger.warning("result_success_mismatch", error_count=len(self.errors))
            # Bypass validate_assignment to avoid re-entering this validator
            object.__setattr__(self, "success", False)
        return self

    def add_message(self, message: str) -> None:
        """Add an informational message."""
        self.messages.append(message)

    def add_warning(self, warning: str) -> None:
        """Add a warning that does not fail the operation."""
        self.warnings.append(warning)
        logger.warning("result_warning_added", warning=warning)

    def add_error(self, error: str) -> None:
        """Add an error message and mark the result as failed."""
        self.errors.append(error)
        self.success = False


class FlashOutcome(BaseResult):
    """Result of flashing one half."""

    half: HalfName
    device: str | None = None
    found_label: str | None = None
    mount_point: Path | None = None
    firmware_target: Path | None = None
    reason: FailureReason | None = None

    def fail(self, error: FlashError) -> None:
        """Record ``error`` as the reason this half failed."""
        self.reason = FailureReason.from_error(error)
        self.add_error(str(error))


class FlashRunResult(BaseResult):
    """Aggregated result of a run over the requested halves."""

    requested: list[HalfName] = Field(default_factory=list)
    outcomes: list[FlashOutcome] = Field(default_factory=list)
    firmware: FirmwareImage | None = None
    failed_half: HalfName | None = None
    reason: FailureReason | None = None

    @property
    def completed_halves(self) -> list[HalfName]:
        """Halves that were flashed before the run stopped."""
        return [outcome.half for outcome in self.outcomes if outcome.success]

    @property
    def all_warnings(self) -> list[str]:
        """Run-level warnings followed by each half's warnings."""
        collected = list(self.warnings)
        for outcome in self.outcomes:
            collected.extend(outcome.warnings)
        return collected

    def outcome_for(self, half: HalfName) -> FlashOutcome | None:
        """Return the outcome of ``half`` if it was attempted."""
        for outcome in self.outcomes:
            if outcome.half == half:
                return outcome
        return None

    def record(self, outcome: FlashOutcome) -> None:
        """Append a half's outcome, failing the run if the half failed."""
        self.outcomes.append(outcome)
        if not outcome.success:
            self.failed_half = outcome.half
            self.reason = outcome.reason
            for error in outcome.errors:
                self.add_error(error)

    def fail(self, error: FlashError) -> None:
        """Fail the run before any half was attempted."""
        self.reason = FailureReason.from_error(error)
        self.add_error(str(error))
