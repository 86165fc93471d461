"""
Tests for logging setup.
"""

import logging
from pathlib import Path

from clangprebuilts.core.observability.logging_config import (
    _parse_level,
    cli_log_level,
    setup_logging,
)


class TestSetupLogging:
    def test_console_level(self):
        setup_logging(level="INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert root.handlers[0].level == logging.INFO

    def test_file_handler(self, tmp_path: Path):
        log_file = tmp_path / "resolve.log"
        setup_logging(level="WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert len(root.handlers) == 2
        assert root.level == logging.DEBUG

        logging.getLogger("clangprebuilts.test").debug("resolved libFuzzer")
        for handler in root.handlers:
            handler.flush()
        assert "resolved libFuzzer" in log_file.read_text()

    def test_third_party_quieted(self):
        setup_logging(level="INFO")
        assert logging.getLogger("yaml").level == logging.WARNING


class TestParseLevel:
    def test_names(self):
        assert _parse_level("debug") == logging.DEBUG
        assert _parse_level("ERROR") == logging.ERROR

    def test_fallback(self):
        assert _parse_level(None) == logging.WARNING
        assert _parse_level("chatty") == logging.WARNING


class TestCliLogLevel:
    def test_flags_win(self):
        env = {"CLANGPREBUILTS_LOG_LEVEL": "ERROR"}
        assert cli_log_level(debug=True, environ=env) == "DEBUG"
        assert cli_log_level(verbose=True, environ=env) == "INFO"
        assert cli_log_level(quiet=True, environ={}) == "ERROR"

    def test_environment(self):
        assert cli_log_level(environ={"CLANGPREBUILTS_LOG_LEVEL": "INFO"}) == "INFO"

    def test_default(self):
        assert cli_log_level(environ={}) == "WARNING"
