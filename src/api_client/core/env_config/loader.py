"""
Configuration loader from environment variables and .env files.
"""

from typing import Any, Dict, Optional

from ..config import ApiClientConfig, DEFAULT_BASE_URL
from ..logging.config import LoggingConfig
from .validator import ApiClientSettings


def load_settings(env_file: Optional[str] = None, **overrides: Any) -> ApiClientSettings:
    """
    Read and validate ApiClientSettings.

    Overrides are passed as init arguments, so they take priority over
    environment variables and the .env file and are validated the same way.
    """
    settings_fields = set(ApiClientSettings.model_fields)
    init_kwargs = {k: v for k, v in overrides.items() if k in settings_fields}

    if env_file is not None:
        return ApiClientSettings(_env_file=env_file, **init_kwargs)
    return ApiClientSettings(**init_kwargs)


def load_from_env(
    env_file: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
    **overrides: Any
) -> ApiClientConfig:
    """
    Load ApiClientConfig from environment variables.

    Priority (highest to lowest):
    1. **overrides - explicit parameters
    2. Environment variables (API_CLIENT_*)
    3. .env file
    4. Defaults

    Args:
        env_file: Custom .env file path
        headers: Default headers (not read from the environment)
        **overrides: ApiClientSettings field overrides

    Returns:
        ApiClientConfig instance

    Example:
        >>> config = load_from_env()
        >>> config = load_from_env(env_file=".env.production", retries=5)
    """
    settings = load_settings(env_file, **overrides)

    logging_config = None
    if settings.logging_enabled:
        logging_config = LoggingConfig.create(
            level=settings.log_level,
            format=settings.log_format,
            enable_console=settings.log_enable_console,
            enable_file=settings.log_enable_file,
            file_path=settings.log_file_path,
        )

    return ApiClientConfig.create(
        base_url=settings.base_url or DEFAULT_BASE_URL,
        timeout=settings.timeout,
        retries=settings.retries,
        retry_delay=settings.retry_delay,
        backoff_max=settings.backoff_max,
        headers=headers,
        logging=logging_config,
    )


def is_api_configured(settings: Optional[ApiClientSettings] = None) -> bool:
    """
    True if a real API is configured (vs serving mock data).

    A base URL must be set explicitly and mock data must not be forced.
    """
    if settings is None:
        settings = load_settings()
    return bool(settings.base_url) and not settings.use_mock_data
