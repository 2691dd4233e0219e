"""
Tests for handler factories.
"""

import logging
from logging.handlers import RotatingFileHandler

from api_client.core.logging.filters import CorrelationIdFilter
from api_client.core.logging.formatters import JSONFormatter
from api_client.core.logging.logger import create_console_handler, create_file_handler


def test_console_handler():
    handler = create_console_handler(logging.DEBUG, JSONFormatter(), [CorrelationIdFilter()])
    assert isinstance(handler, logging.StreamHandler)
    assert handler.level == logging.DEBUG
    assert isinstance(handler.formatter, JSONFormatter)
    assert len(handler.filters) == 1


def test_file_handler_creates_directory(tmp_path):
    log_file = tmp_path / "nested" / "dir" / "client.log"
    handler = create_file_handler(
        file_path=str(log_file),
        level=logging.INFO,
        formatter=JSONFormatter(),
        max_bytes=1024,
        backup_count=2,
    )
    try:
        assert isinstance(handler, RotatingFileHandler)
        assert log_file.parent.exists()
        assert handler.maxBytes == 1024
        assert handler.backupCount == 2
    finally:
        handler.close()
