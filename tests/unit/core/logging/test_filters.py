"""
Tests for logging filters.
"""

import asyncio
import logging

import pytest

from api_client.core.logging.filters import (
    CorrelationIdFilter,
    ExtraFieldsFilter,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)


def make_record():
    return logging.LogRecord("test", logging.INFO, __file__, 1, "message", None, None)


class TestCorrelationId:
    """Correlation id context."""

    def test_default_is_none(self):
        assert get_correlation_id() is None

    def test_set_and_reset(self):
        token = set_correlation_id("req-12345")
        assert get_correlation_id() == "req-12345"
        reset_correlation_id(token)
        assert get_correlation_id() is None

    def test_nested(self):
        outer = set_correlation_id("outer")
        inner = set_correlation_id("inner")
        reset_correlation_id(inner)
        assert get_correlation_id() == "outer"
        reset_correlation_id(outer)

    @pytest.mark.asyncio
    async def test_isolated_between_tasks(self):
        """Каждая asyncio задача видит свой id."""
        async def worker(name):
            token = set_correlation_id(name)
            await asyncio.sleep(0.01)
            seen = get_correlation_id()
            reset_correlation_id(token)
            return seen

        assert await asyncio.gather(worker("a"), worker("b")) == ["a", "b"]


class TestCorrelationIdFilter:
    """CorrelationIdFilter."""

    def test_adds_id(self):
        token = set_correlation_id("req-1")
        try:
            record = make_record()
            assert CorrelationIdFilter().filter(record) is True
            assert record.correlation_id == "req-1"
        finally:
            reset_correlation_id(token)

    def test_no_id_outside_request(self):
        record = make_record()
        CorrelationIdFilter().filter(record)
        assert not hasattr(record, "correlation_id")


class TestExtraFieldsFilter:
    """ExtraFieldsFilter."""

    def test_adds_fields(self):
        record = make_record()
        ExtraFieldsFilter({"service": "crm", "env": "test"}).filter(record)
        assert record.service == "crm"
        assert record.env == "test"

    def test_does_not_overwrite(self):
        record = make_record()
        record.service = "own"
        ExtraFieldsFilter({"service": "crm"}).filter(record)
        assert record.service == "own"
