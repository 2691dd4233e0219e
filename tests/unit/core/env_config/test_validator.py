"""
Tests for ApiClientSettings.
"""

import pytest
from pydantic import ValidationError

from api_client.core.env_config.validator import ApiClientSettings


class TestApiClientSettings:
    """Test ApiClientSettings validation."""

    def test_defaults(self):
        settings = ApiClientSettings()
        assert settings.base_url is None
        assert settings.timeout == 30.0
        assert settings.retries == 3
        assert settings.retry_delay == 1.0
        assert settings.use_mock_data is False
        assert settings.logging_enabled is False

    def test_reads_env(self, monkeypatch):
        monkeypatch.setenv("API_CLIENT_BASE_URL", "https://api.example.com")
        monkeypatch.setenv("API_CLIENT_TIMEOUT", "10")
        monkeypatch.setenv("API_CLIENT_RETRIES", "1")
        monkeypatch.setenv("API_CLIENT_USE_MOCK_DATA", "true")

        settings = ApiClientSettings()
        assert settings.base_url == "https://api.example.com"
        assert settings.timeout == 10.0
        assert settings.retries == 1
        assert settings.use_mock_data is True

    def test_blank_base_url_is_unset(self, monkeypatch):
        monkeypatch.setenv("API_CLIENT_BASE_URL", "   ")
        assert ApiClientSettings().base_url is None

    @pytest.mark.parametrize("field,value", [
        ("timeout", 0),
        ("retries", -1),
        ("retries", 11),
        ("retry_delay", -1),
    ])
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            ApiClientSettings(**{field: value})

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            ApiClientSettings(log_level="VERBOSE")

    def test_file_logging_requires_path(self):
        with pytest.raises(ValidationError):
            ApiClientSettings(log_enable_file=True)

    def test_file_logging_with_path(self, tmp_path):
        settings = ApiClientSettings(log_enable_file=True, log_file_path=str(tmp_path / "a.log"))
        assert settings.logging_enabled is True
