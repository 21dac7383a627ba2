import pytest
from unittest.mock import patch
from pydantic import HttpUrl, ValidationError

from propconnect_admin.core.config import (
    Settings,
    get_settings,
    parse_comma_separated_origins,
)


class TestSettings:
    """Test the Settings class."""

    def test_settings_defaults(self):
        """Test the defaults of every optional field."""
        settings = Settings(PROPCONNECT_API_BASE_URL="http://localhost:8080")
        assert settings.REQUEST_TIMEOUT_SECONDS == 15.0
        assert settings.SESSION_STORAGE_KEY == "propconnect_admin_auth"
        assert settings.DASHBOARD_REFRESH_SECONDS == 30.0
        assert settings.ENVIRONMENT == "development"

    def test_api_base_url_has_no_trailing_slash(self):
        settings = Settings(PROPCONNECT_API_BASE_URL="https://api.propconnect.in/")
        assert settings.api_base_url == "https://api.propconnect.in"

    def test_settings_invalid_base_url(self):
        with pytest.raises(ValidationError):
            Settings(PROPCONNECT_API_BASE_URL="not a url")

    @patch.dict("os.environ", {}, clear=True)
    def test_settings_missing_base_url_raises_error(self):
        """Test that the backend URL is required."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_settings_with_extra_fields_ignored(self):
        """Test that extra fields are ignored due to extra='ignore' config."""
        settings = Settings(
            PROPCONNECT_API_BASE_URL="http://localhost:8080",
            UNKNOWN_FIELD="should be ignored",
        )
        assert not hasattr(settings, "UNKNOWN_FIELD")

    def test_settings_model_config(self):
        """Test that model_config is properly set."""
        assert Settings.model_config["env_file_encoding"] == "utf-8"
        assert Settings.model_config["env_file"] == ".env"
        assert Settings.model_config["extra"] == "ignore"


class TestParseOrigins:
    def test_empty(self):
        assert parse_comma_separated_origins("") == []

    def test_multiple_origins(self):
        origins = parse_comma_separated_origins(
            "http://localhost:3000, https://admin.propconnect.in,"
        )
        assert len(origins) == 2
        assert isinstance(origins[0], HttpUrl)

    def test_invalid_origin(self):
        with pytest.raises(ValueError, match="not-a-valid-url"):
            parse_comma_separated_origins("not-a-valid-url")


class TestGetSettings:
    """Test the get_settings function."""

    @patch.dict("os.environ", {
        "PROPCONNECT_API_BASE_URL": "http://backend.internal:8080",
        "DASHBOARD_REFRESH_SECONDS": "0",
        "REQUEST_TIMEOUT_SECONDS": "5",
    })
    def test_get_settings_from_environment(self):
        """Test that get_settings reads from environment variables."""
        get_settings.cache_clear()
        try:
            settings = get_settings()
            assert settings.api_base_url == "http://backend.internal:8080"
            assert settings.DASHBOARD_REFRESH_SECONDS == 0
            assert settings.REQUEST_TIMEOUT_SECONDS == 5
        finally:
            get_settings.cache_clear()

    def test_get_settings_caching(self):
        """Test that get_settings uses LRU cache."""
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()
