"""
Pydantic settings for environment configuration.
"""

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiClientSettings(BaseSettings):
    """
    API Client configuration from environment variables.

    Reads from:
    1. Environment variables (API_CLIENT_*)
    2. .env file
    3. Defaults

    Example .env file:
        API_CLIENT_BASE_URL=https://api.example.com
        API_CLIENT_TIMEOUT=10
        API_CLIENT_RETRIES=2
        API_CLIENT_RETRY_DELAY=0.5
        API_CLIENT_USE_MOCK_DATA=false
        API_CLIENT_LOG_LEVEL=DEBUG
        API_CLIENT_LOG_ENABLE_CONSOLE=true
    """

    model_config = SettingsConfigDict(
        env_prefix='API_CLIENT_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    # None = не настроен (используется дефолт "/api")
    base_url: Optional[str] = Field(default=None, description="Base URL for all requests")

    timeout: float = Field(default=30.0, gt=0, description="Per-attempt timeout in seconds")
    retries: int = Field(default=3, ge=0, le=10, description="Retries after the first attempt")
    retry_delay: float = Field(default=1.0, ge=0, description="Backoff seed in seconds")
    backoff_max: float = Field(default=30.0, ge=0, description="Backoff cap in seconds")

    use_mock_data: bool = Field(default=False, description="Serve fallback data instead of calling the API")

    # Logging (выключено, пока не включён хотя бы один handler)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "text"] = Field(default="text")
    log_enable_console: bool = Field(default=False)
    log_enable_file: bool = Field(default=False)
    log_file_path: Optional[str] = Field(default=None, validate_default=True)

    @field_validator('base_url')
    @classmethod
    def validate_base_url(cls, v: Optional[str]) -> Optional[str]:
        """Empty string means "not configured"."""
        if v is not None and not v.strip():
            return None
        return v

    @field_validator('log_file_path')
    @classmethod
    def validate_file_path(cls, v: Optional[str], info) -> Optional[str]:
        """file_path is required when log_enable_file=True."""
        if info.data.get('log_enable_file') and not v:
            raise ValueError("log_file_path is required when log_enable_file=True")
        return v

    @property
    def logging_enabled(self) -> bool:
        return self.log_enable_console or self.log_enable_file
