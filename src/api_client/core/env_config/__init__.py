"""
Environment configuration system for API Client.

Load configuration from .env files, environment variables and config files.

Example:
    >>> from api_client.core.env_config import load_from_env
    >>>
    >>> # Load from .env
    >>> config = load_from_env()
    >>>
    >>> # Load with overrides
    >>> config = load_from_env(base_url="https://custom.api.com", retries=0)
"""

from .loader import load_from_env, load_settings, is_api_configured
from .validator import ApiClientSettings
from .file_loader import ConfigFileLoader, ConfigValidationError, CONFIG_FILE_ENV_VAR

__all__ = [
    # Loader
    "load_from_env",
    "load_settings",
    "is_api_configured",
    # Settings
    "ApiClientSettings",
    # Files
    "ConfigFileLoader",
    "ConfigValidationError",
    "CONFIG_FILE_ENV_VAR",
]
