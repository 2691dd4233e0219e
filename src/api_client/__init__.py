"""API Client - async HTTP client with timeouts, retries and interceptors."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.client import ApiClient
from .core.config import ApiClientConfig
from .core.context import RequestDescriptor
from .core.exceptions import ApiError, NO_RESPONSE
from .core.fallback import DataSource, FallbackPolicy, FallbackProvider
from .core.interceptors import InterceptorChain, RequestInterceptor, ResponseInterceptor
from .core.logging import LoggingConfig
from .core.env_config import (
    ApiClientSettings,
    ConfigFileLoader,
    ConfigValidationError,
    is_api_configured,
    load_from_env,
)

# NullHandler: библиотека молчит, пока приложение не настроит logging
logging.getLogger('api_client').addHandler(logging.NullHandler())

try:
    __version__ = version("api-client-core")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__all__ = [
    # Core
    "ApiClient",
    "ApiClientConfig",
    "RequestDescriptor",

    # Errors
    "ApiError",
    "NO_RESPONSE",

    # Interceptors
    "InterceptorChain",
    "RequestInterceptor",
    "ResponseInterceptor",

    # Fallback
    "DataSource",
    "FallbackPolicy",
    "FallbackProvider",

    # Configuration
    "LoggingConfig",
    "ApiClientSettings",
    "ConfigFileLoader",
    "ConfigValidationError",
    "load_from_env",
    "is_api_configured",
]
