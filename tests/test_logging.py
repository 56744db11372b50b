"""Tests for rjy/utils/logging.py"""

import logging

from rjy.utils.logging import SUCCESS_LEVEL, get_logger, is_debug_mode, set_debug_mode


class TestGetLogger:
    """Test logger naming and levels"""

    def test_name_forced_under_rjy(self):
        assert get_logger("tests.something").name == "rjy.tests.something"
        assert get_logger("rjy.core.store").name == "rjy.core.store"

    def test_success_level(self, caplog):
        logger = get_logger("rjy.test")
        with caplog.at_level(logging.DEBUG, logger="rjy"):
            logger.success("Created new session myhost:8888.", console_output=False)

        record = caplog.records[-1]
        assert record.levelno == SUCCESS_LEVEL
        assert record.getMessage() == "Created new session myhost:8888."

    def test_console_output(self, capsys):
        get_logger("rjy.test").info("Connection has already closed.")
        assert "Connection has already closed." in capsys.readouterr().out

    def test_error_includes_exception(self, caplog):
        logger = get_logger("rjy.test")
        with caplog.at_level(logging.ERROR, logger="rjy"):
            logger.error("Save failed", exc=OSError("disk full"), console_output=False)
        assert "Save failed: disk full" in caplog.text


class TestDebugMode:
    """Test debug toggling"""

    def test_env_var_enables_debug(self, monkeypatch):
        monkeypatch.setenv("RJY_DEBUG", "1")
        assert is_debug_mode() is True

    def test_set_debug_mode(self, monkeypatch):
        monkeypatch.delenv("RJY_DEBUG", raising=False)
        set_debug_mode(True)
        assert is_debug_mode() is True
        set_debug_mode(False)
        assert is_debug_mode() is False
