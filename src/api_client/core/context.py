"""Request descriptor passed through request interceptors."""

import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Union


@dataclass
class RequestDescriptor:
    """Outgoing request description, built once per request() call.

    Attributes:
        method: HTTP method (GET, POST, etc.)
        path: Path relative to base_url
        headers: Merged headers (config defaults, then per-call)
        body: Serialized body, or None (never set for GET)
        timeout: Per-attempt timeout in seconds
        retries: Additional attempts after the first
        retry_delay: Backoff seed in seconds
        extra: Transport passthrough options (params, cookies, ...)
        request_id: Unique identifier, used as log correlation id

    Example:
        >>> desc = RequestDescriptor('GET', '/users', timeout=30.0, retries=3, retry_delay=1.0)
        >>> desc = desc.with_headers({'Authorization': 'Bearer abc'})
    """

    method: str
    path: str
    timeout: float
    retries: int
    retry_delay: float
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Union[str, bytes]] = None
    extra: Dict[str, Any] = field(default_factory=dict)
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def copy(self) -> 'RequestDescriptor':
        """Create a copy of this descriptor."""
        return replace(
            self,
            headers=dict(self.headers),
            extra=dict(self.extra),
        )

    def with_headers(self, headers: Dict[str, str]) -> 'RequestDescriptor':
        """New descriptor with headers merged over the current ones."""
        merged = dict(self.headers)
        merged.update(headers)
        new = self.copy()
        new.headers = merged
        return new
