import os
from unittest.mock import patch

from qiniu_adapter.utils import env_config
from qiniu_adapter.utils.env_config import AppSettings, get_env_bool, get_env_float, get_settings, reload_settings

QINIU_ENV_VARS = [
    "ENVIRONMENT",
    "QINIU_ACCESS_KEY",
    "QINIU_SECRET_KEY",
    "QINIU_BUCKET",
    "QINIU_DOMAIN",
    "QINIU_ALLOW_REMOTE_STREAMS",
    "QINIU_HTTP_TIMEOUT",
    "LOG_LEVEL",
    "LOG_JSON_FORMAT",
]


class TestAppSettings:
    """Test suite for AppSettings class."""

    def test_app_settings_default_values(self) -> None:
        """Test that AppSettings has correct default values."""
        clean_env = {key: value for key, value in os.environ.items() if key not in QINIU_ENV_VARS}

        with patch.dict(os.environ, clean_env, clear=True):
            settings = AppSettings()

            assert settings.environment == "development"
            assert settings.qiniu_access_key is None
            assert settings.qiniu_secret_key is None
            assert settings.qiniu_bucket is None
            assert settings.qiniu_domain is None
            assert settings.qiniu_allow_remote_streams is True
            assert settings.qiniu_http_timeout == 30.0
            assert settings.log_level == "INFO"
            assert settings.log_json_format is False

    def test_app_settings_from_env_vars(self) -> None:
        """Test that AppSettings correctly reads from environment variables."""
        env_vars = {
            "QINIU_ACCESS_KEY": "test-access-key",
            "QINIU_SECRET_KEY": "test-secret-key",
            "QINIU_BUCKET": "test-bucket",
            "QINIU_DOMAIN": "cdn.example.com",
            "QINIU_ALLOW_REMOTE_STREAMS": "false",
            "QINIU_HTTP_TIMEOUT": "12.5",
            "LOG_LEVEL": "DEBUG",
            "LOG_JSON_FORMAT": "yes",
        }

        with patch.dict(os.environ, env_vars):
            settings = AppSettings()

            assert settings.qiniu_access_key == "test-access-key"
            assert settings.qiniu_secret_key == "test-secret-key"
            assert settings.qiniu_bucket == "test-bucket"
            assert settings.qiniu_domain == "cdn.example.com"
            assert settings.qiniu_allow_remote_streams is False
            assert settings.qiniu_http_timeout == 12.5
            assert settings.log_level == "DEBUG"
            assert settings.log_json_format is True

    def test_invalid_timeout_falls_back(self) -> None:
        with patch.dict(os.environ, {"QINIU_HTTP_TIMEOUT": "-3"}):
            assert AppSettings().qiniu_http_timeout == 30.0

    def test_get_storage_config(self) -> None:
        """Test get_storage_config maps settings onto adapter fields."""
        env_vars = {
            "QINIU_ACCESS_KEY": "ak",
            "QINIU_SECRET_KEY": "sk",
            "QINIU_BUCKET": "bucket",
            "QINIU_DOMAIN": "domain.com",
            "QINIU_ALLOW_REMOTE_STREAMS": "true",
            "QINIU_HTTP_TIMEOUT": "10",
        }

        with patch.dict(os.environ, env_vars):
            config = AppSettings().get_storage_config()

        assert config == {
            "access_key": "ak",
            "secret_key": "sk",
            "bucket": "bucket",
            "domain": "domain.com",
            "allow_remote_streams": True,
            "http_timeout": 10.0,
        }


class TestEnvHelpers:
    """Test suite for environment helpers."""

    def test_get_env_bool(self) -> None:
        with patch.dict(os.environ, {"FLAG_ON": "On", "FLAG_OFF": "no"}):
            assert get_env_bool("FLAG_ON") is True
            assert get_env_bool("FLAG_OFF", True) is False
            assert get_env_bool("FLAG_MISSING_FOR_TEST", True) is True

    def test_get_env_float_invalid(self) -> None:
        with patch.dict(os.environ, {"NOT_A_FLOAT": "abc"}):
            assert get_env_float("NOT_A_FLOAT", 1.5) == 1.5


class TestGlobalSettings:
    """Test suite for the global settings instance."""

    def test_get_settings_is_cached(self) -> None:
        with patch.object(env_config, "_settings", None):
            assert get_settings() is get_settings()

    def test_reload_settings(self) -> None:
        with patch.object(env_config, "_settings", None):
            first = get_settings()
            with patch.dict(os.environ, {"QINIU_BUCKET": "reloaded-bucket"}):
                reloaded = reload_settings()

            assert reloaded is not first
            assert reloaded.qiniu_bucket == "reloaded-bucket"
            assert get_settings() is reloaded
