"""
Body serialization utilities.

Request bodies are sent as text; response bodies are decoded by content type.
"""

import json
from typing import Any, Optional, Union

import httpx

JSON_CONTENT_MARKER = "application/json"


def serialize_body(body: Any) -> Optional[Union[str, bytes]]:
    """
    Convert a request body to text.

    Args:
        body: Structured value, str or bytes

    Returns:
        str/bytes unchanged, anything else as JSON text, None for None

    Example:
        >>> serialize_body({"name": "Test"})
        '{"name": "Test"}'
        >>> serialize_body("raw")
        'raw'
    """
    if body is None:
        return None
    if isinstance(body, (str, bytes)):
        return body
    return json.dumps(body)


def is_json_response(response: httpx.Response) -> bool:
    """True if the content-type header declares JSON."""
    content_type = response.headers.get("content-type", "")
    return JSON_CONTENT_MARKER in content_type.lower()


def parse_response_body(response: httpx.Response) -> Any:
    """
    Decode response body by declared content type.

    JSON content types are parsed into Python values, everything else
    is returned as text. An empty JSON body decodes to None.

    Raises:
        ValueError: If the body declares JSON but is not valid JSON
    """
    if is_json_response(response):
        if not response.content:
            return None
        return response.json()
    return response.text
