"""Tests for logging setup."""

import json
import logging

import pytest
import structlog

from glove80_flash.core.logging import NOISY_LOGGERS, setup_logging
from glove80_flash.core.structlog_logger import StructlogMixin, get_struct_logger


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestSetupLogging:
    def test_console_handler_only(self):
        setup_logging(level=logging.INFO)

        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)

    def test_log_file_receives_json(self, tmp_path):
        log_file = tmp_path / "logs" / "flash.log"
        setup_logging(level=logging.DEBUG, log_file=log_file)

        get_struct_logger("glove80_flash.test").info("device_found", device="/dev/sda")
        for handler in logging.getLogger().handlers:
            handler.flush()

        records = [json.loads(line) for line in log_file.read_text().splitlines()]
        assert records[-1]["event"] == "device_found"
        assert records[-1]["device"] == "/dev/sda"
        assert records[-1]["level"] == "info"

    def test_noisy_loggers_quieted(self):
        setup_logging(level=logging.DEBUG)

        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING


class TestStructlogMixin:
    def test_logger_bound_to_service(self):
        class Service(StructlogMixin):
            pass

        service = Service()

        assert service.logger is service.logger
        bound = service.log_operation("flash_half", half="LEFT")
        assert bound is not service.logger
