"""
Tests for log formatters.
"""

import json
import logging

import pytest

from api_client.core.logging.formatters import (
    JSONFormatter,
    TextFormatter,
    get_formatter,
    record_extras,
)


def make_record(message="Request completed", **extra):
    record = logging.LogRecord("api_client", logging.INFO, __file__, 10, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestRecordExtras:
    """record_extras."""

    def test_only_custom_fields(self):
        record = make_record(method="GET", status_code=200)
        assert record_extras(record) == {"method": "GET", "status_code": 200}

    def test_empty(self):
        assert record_extras(make_record()) == {}


class TestJSONFormatter:
    """JSONFormatter."""

    def test_output_is_json(self):
        output = JSONFormatter().format(make_record(method="GET", status_code=200))
        data = json.loads(output)

        assert data["level"] == "INFO"
        assert data["logger"] == "api_client"
        assert data["message"] == "Request completed"
        assert data["method"] == "GET"
        assert data["status_code"] == 200
        assert data["timestamp"].endswith("+00:00")

    def test_non_serializable_values(self):
        output = JSONFormatter().format(make_record(obj=object()))
        assert "object" in json.loads(output)["obj"]

    def test_exception_info(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            import sys
            record = logging.LogRecord(
                "api_client", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )

        data = json.loads(JSONFormatter().format(record))
        assert "RuntimeError: boom" in data["exception"]


class TestTextFormatter:
    """TextFormatter."""

    def test_key_value_extras(self):
        output = TextFormatter().format(make_record(method="GET", status_code=200))
        assert "[INFO] [api_client] Request completed" in output
        assert output.endswith("method=GET status_code=200")

    def test_without_extras(self):
        output = TextFormatter().format(make_record())
        assert output.endswith("Request completed")


class TestGetFormatter:
    """get_formatter."""

    def test_by_name(self):
        assert isinstance(get_formatter("json"), JSONFormatter)
        assert isinstance(get_formatter("TEXT"), TextFormatter)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown format"):
            get_formatter("xml")
