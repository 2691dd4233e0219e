"""Utility functions for API Client."""

from .sanitizer import (
    REDACTED,
    add_sensitive_keys,
    is_sensitive_key,
    mask_headers,
    mask_sensitive_data,
    mask_url,
)
from .serialization import is_json_response, parse_response_body, serialize_body

__all__ = [
    "REDACTED",
    "add_sensitive_keys",
    "is_sensitive_key",
    "mask_headers",
    "mask_sensitive_data",
    "mask_url",
    "is_json_response",
    "parse_response_body",
    "serialize_body",
]
