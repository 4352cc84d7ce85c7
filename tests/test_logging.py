"""Tests for logging configuration."""

import json
import logging

import pytest

from amp_validator.utils.logging import (
    UserFacingConsoleFilter,
    configure_logging,
    get_logger,
)


def _record(message: str, level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord("test", level, __file__, 1, message, None, None)


class TestUserFacingConsoleFilter:
    def test_passes_user_facing_events(self):
        assert UserFacingConsoleFilter().filter(_record("validation_completed"))

    def test_drops_internal_events(self):
        assert not UserFacingConsoleFilter().filter(_record("scan_completed"))

    def test_always_passes_errors(self):
        record = _record("rule_engine_failed", logging.ERROR)

        assert UserFacingConsoleFilter().filter(record)

    def test_verbose_passes_everything(self):
        assert UserFacingConsoleFilter(verbose=True).filter(_record("scan_completed"))


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def reset_logging(self):
        yield
        configure_logging()

    def test_json_log_file(self, temp_dir):
        log_file = temp_dir / "logs" / "amp-validator.log"
        configure_logging(log_level="WARNING", log_file=log_file)

        get_logger("test").info("scan_completed", tags_processed=3)
        for handler in logging.getLogger().handlers:
            handler.flush()

        entries = [
            json.loads(line)
            for line in log_file.read_text(encoding="utf-8").splitlines()
        ]
        scan = next(e for e in entries if e["event"] == "scan_completed")
        assert scan["tags_processed"] == 3
        assert scan["level"] == "info"

    def test_reconfigure_replaces_handlers(self, temp_dir):
        configure_logging(log_file=temp_dir / "a.log")
        count = len(logging.getLogger().handlers)

        configure_logging(log_file=temp_dir / "b.log")

        assert len(logging.getLogger().handlers) == count
