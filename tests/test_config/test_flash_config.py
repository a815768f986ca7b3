"""Tests for FlashConfig."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from glove80_flash.config.defaults import LEFT_HALF, RIGHT_HALF
from glove80_flash.config.models import FlashConfig
from glove80_flash.models.half import HalfName


class TestFlashConfigDefaults:
    def test_defaults(self):
        config = FlashConfig()

        assert config.firmware_path == Path("result/glove80.uf2")
        assert config.device_timeout == 60
        assert config.poll_interval == 2
        assert config.removal_poll_interval == 1
        assert config.settle_delay == 3
        assert config.removal_timeout is None
        assert config.halves == (RIGHT_HALF, LEFT_HALF)

    def test_frozen(self):
        config = FlashConfig()

        with pytest.raises(ValidationError):
            config.device_timeout = 5  # type: ignore[misc]


class TestFlashConfigValidation:
    @pytest.mark.parametrize(
        "field",
        ["device_timeout", "poll_interval", "removal_poll_interval", "removal_timeout"],
    )
    @pytest.mark.parametrize("value", [0, -1])
    def test_intervals_must_be_positive(self, field, value):
        with pytest.raises(ValidationError):
            FlashConfig(**{field: value})

    def test_settle_delay_may_be_zero(self):
        assert FlashConfig(settle_delay=0).settle_delay == 0

    def test_default_removal_polling_is_faster_than_detection(self):
        config = FlashConfig()

        assert config.removal_poll_interval <= config.poll_interval

    def test_intervals_are_not_cross_checked(self):
        config = FlashConfig(poll_interval=0.5)

        assert config.removal_poll_interval == 1
        schema = FlashConfig.model_json_schema()["properties"]
        assert "poll_interval" in schema["removal_poll_interval"]["description"]

    def test_duplicate_halves_rejected(self):
        with pytest.raises(ValidationError, match="only be configured once"):
            FlashConfig(halves=(LEFT_HALF, LEFT_HALF))

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            FlashConfig(retries=3)  # type: ignore[call-arg]


class TestHalfSelection:
    def test_get_half_accepts_names(self):
        config = FlashConfig()

        assert config.get_half(HalfName.LEFT) == LEFT_HALF
        assert config.get_half("right") == RIGHT_HALF

    def test_select_halves(self):
        config = FlashConfig()

        assert config.select_halves([HalfName.LEFT, HalfName.RIGHT]) == [
            LEFT_HALF,
            RIGHT_HALF,
        ]

    def test_unconfigured_half_raises(self):
        config = FlashConfig(halves=(RIGHT_HALF,))

        with pytest.raises(KeyError, match="LEFT"):
            config.select_halves([HalfName.RIGHT, HalfName.LEFT])
