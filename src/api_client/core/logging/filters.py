"""
Log filters: correlation id and static extra fields.

The correlation id lives in a ContextVar so concurrent requests running as
separate asyncio tasks each see their own id.
"""

import logging
from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

_correlation_id: ContextVar[Optional[str]] = ContextVar("api_client_correlation_id", default=None)


def set_correlation_id(correlation_id: str) -> Token:
    """
    Set correlation id for the current context.

    Returns:
        Token for reset_correlation_id()

    Example:
        >>> token = set_correlation_id("req-12345")
        >>> get_correlation_id()
        'req-12345'
        >>> reset_correlation_id(token)
    """
    return _correlation_id.set(correlation_id)


def get_correlation_id() -> Optional[str]:
    """Correlation id of the current context, or None."""
    return _correlation_id.get()


def reset_correlation_id(token: Token) -> None:
    """Restore the value that was current before set_correlation_id()."""
    _correlation_id.reset(token)


class CorrelationIdFilter(logging.Filter):
    """Adds ``correlation_id`` to records emitted inside a request."""

    def filter(self, record: logging.LogRecord) -> bool:
        correlation_id = get_correlation_id()
        if correlation_id and not hasattr(record, "correlation_id"):
            record.correlation_id = correlation_id
        return True


class ExtraFieldsFilter(logging.Filter):
    """
    Adds static fields (service, environment, version) to every record.

    Fields already present on the record are not overwritten.
    """

    def __init__(self, extra_fields: Dict[str, Any]):
        super().__init__()
        self.extra_fields = dict(extra_fields)

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self.extra_fields.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
