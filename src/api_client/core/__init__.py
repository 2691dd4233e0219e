"""Core components of API Client."""

from .client import ApiClient
from .config import ApiClientConfig
from .context import RequestDescriptor
from .exceptions import ApiError, NO_RESPONSE
from .fallback import DataSource, FallbackPolicy, FallbackProvider
from .interceptors import InterceptorChain, RequestInterceptor, ResponseInterceptor
from .retry_engine import RetryEngine, get_backoff_delay

__all__ = [
    "ApiClient",
    "ApiClientConfig",
    "RequestDescriptor",
    "ApiError",
    "NO_RESPONSE",
    "DataSource",
    "FallbackPolicy",
    "FallbackProvider",
    "InterceptorChain",
    "RequestInterceptor",
    "ResponseInterceptor",
    "RetryEngine",
    "get_backoff_delay",
]
