"""Tests for logging setup."""

import logging
from unittest.mock import patch

import pytest

from indy_tool.utils import WrappingFormatter, setup_logging
from indy_tool.utils.logger import CONCURRENT_LOG_FORMAT, DEFAULT_LOG_FORMAT


class TestSetupLogging:
    """Test setup_logging verbosity levels."""

    @pytest.mark.parametrize(
        "verbosity, level",
        [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (3, logging.DEBUG)],
    )
    @patch("indy_tool.utils.logger.logging.basicConfig")
    def test_levels(self, mock_basic_config, verbosity, level):
        """Test the root level per verbosity."""
        setup_logging(verbosity)
        mock_basic_config.assert_called_once_with(level=level, format=DEFAULT_LOG_FORMAT)

    @patch("indy_tool.utils.logger.logging.basicConfig")
    def test_concurrent_format(self, mock_basic_config):
        """Test worker thread names are logged in concurrent mode."""
        setup_logging(1, concurrent=True)
        mock_basic_config.assert_called_once_with(level=logging.INFO, format=CONCURRENT_LOG_FORMAT)

    @patch("indy_tool.utils.logger.logging.basicConfig")
    def test_http_logs(self, mock_basic_config):
        """Test httpx request logs only show at the highest verbosity."""
        setup_logging(2)
        assert logging.getLogger("httpx").level == logging.WARNING
        setup_logging(3)
        assert logging.getLogger("httpx").level == logging.DEBUG

    def test_wrapping_handler(self):
        """Test the wrapping formatter is installed on request."""
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            setup_logging(1, use_wrapping=True)
            assert isinstance(root.handlers[0].formatter, WrappingFormatter)
            assert root.level == logging.INFO
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)


class TestWrappingFormatter:
    """Test WrappingFormatter."""

    def test_short_message_untouched(self):
        """Test short lines are not wrapped."""
        formatter = WrappingFormatter(fmt="%(message)s", width=40)
        record = logging.LogRecord("t", logging.INFO, "", 0, "short message", None, None)
        assert formatter.format(record) == "short message"

    def test_long_message_wrapped(self):
        """Test long lines wrap on word boundaries without splitting words."""
        formatter = WrappingFormatter(fmt="%(message)s", width=20)
        url = "http://indy.example.com/api/content/maven/hosted/build-1/x.jar"
        record = logging.LogRecord("t", logging.INFO, "", 0, f"Downloading {url} now", None, None)

        lines = formatter.format(record).split("\n")
        assert lines == ["Downloading", url, "now"]
