"""Unit tests for logging setup."""

import json
import logging
import sys
from pathlib import Path

from token_studio.token_logging import (
    ROOT_LOGGER_NAME,
    JSONFormatter,
    LogCategory,
    debug_context,
    get_category_logger,
    get_logger,
    setup_logging,
)


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_default_setup(self, tmp_path: Path) -> None:
        """Test basic logging setup with a log file."""
        log_file = tmp_path / "test.log"
        logger = setup_logging(log_file=log_file)

        logger.info("Test message")

        assert logger.name == ROOT_LOGGER_NAME
        assert "Test message" in log_file.read_text()

    def test_creates_log_directory(self, tmp_path: Path) -> None:
        """Test the log file's parent directory is created."""
        log_file = tmp_path / "nested" / "dir" / "studio.log"

        setup_logging(log_file=log_file)
        get_logger().info("hello")

        assert log_file.exists()

    def test_json_format(self, tmp_path: Path) -> None:
        """Test JSON log format."""
        log_file = tmp_path / "json.log"
        setup_logging(log_file=log_file, log_format="json")

        get_category_logger(LogCategory.GENERATOR).info(
            "Generated tokens", extra={"operation": "palette", "token_count": 217}
        )

        entry = json.loads(log_file.read_text().strip().split("\n")[-1])
        assert entry["message"] == "Generated tokens"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "token_studio.generator"
        assert entry["operation"] == "palette"
        assert entry["token_count"] == 217

    def test_quiet_has_no_console_handler(self) -> None:
        """Test quiet mode only keeps file handlers."""
        logger = setup_logging(quiet=True)

        assert not any(
            isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
            for h in logger.handlers
        )

    def test_verbose_console_level(self) -> None:
        """Test verbose mode lowers the console level to DEBUG."""
        logger = setup_logging(verbose=True)

        assert logger.handlers[0].level == logging.DEBUG

    def test_level_parameter(self) -> None:
        """Test the configured level applies to the console."""
        logger = setup_logging(level="warning")

        assert logger.handlers[0].level == logging.WARNING

    def test_file_captures_debug(self, tmp_path: Path) -> None:
        """Test the file handler records debug messages."""
        log_file = tmp_path / "debug.log"
        setup_logging(log_file=log_file)

        get_category_logger(LogCategory.SYNC).debug("Diff computed")

        assert "Diff computed" in log_file.read_text()


class TestCategoryLoggers:
    """Tests for category loggers."""

    def test_category_logger_names(self) -> None:
        """Test category loggers are children of the package logger."""
        for category in LogCategory:
            logger = get_category_logger(category)
            assert logger.name == f"{ROOT_LOGGER_NAME}.{category.value}"

    def test_debug_context_restores_level(self) -> None:
        """Test debug_context temporarily enables DEBUG."""
        logger = get_logger()
        logger.setLevel(logging.WARNING)

        with debug_context() as debug_logger:
            assert debug_logger.level == logging.DEBUG

        assert logger.level == logging.WARNING


class TestJSONFormatter:
    """Tests for the JSON formatter."""

    def test_format_includes_exception(self) -> None:
        """Test exceptions are serialized."""
        formatter = JSONFormatter()
        try:
            raise ValueError("bad value")
        except ValueError:
            record = logging.LogRecord(
                "token_studio", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )

        entry = json.loads(formatter.format(record))

        assert entry["message"] == "failed"
        assert "ValueError: bad value" in entry["exception"]

    def test_extra_fields_only_when_present(self) -> None:
        """Test absent extra fields are omitted."""
        record = logging.LogRecord(
            "token_studio", logging.INFO, __file__, 1, "plain", None, None
        )

        entry = json.loads(JSONFormatter().format(record))

        assert "operation" not in entry
