"""
Environment-based configuration for the Qiniu adapter.

Settings are read from environment variables, optionally seeded from a
``.env`` file in the working directory.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load environment variables from .env file
env_file = Path.cwd() / ".env"
if env_file.exists():
    load_dotenv(env_file, override=True)
    logger.info(f"Loaded environment variables from: {env_file}")


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean value from environment variable."""
    value = os.getenv(key, "").lower()
    return value in ("true", "1", "yes", "on") if value else default


def get_env_float(key: str, default: float = 0.0) -> float:
    """Get float value from environment variable."""
    try:
        return float(os.getenv(key, str(default)))
    except ValueError:
        return default


@dataclass
class AppSettings:
    """Adapter settings from environment variables."""

    # Environment
    environment: str = field(default_factory=lambda: os.getenv("ENVIRONMENT", "development"))

    # Qiniu Configuration
    qiniu_access_key: Optional[str] = field(default_factory=lambda: os.getenv("QINIU_ACCESS_KEY"))
    qiniu_secret_key: Optional[str] = field(default_factory=lambda: os.getenv("QINIU_SECRET_KEY"))
    qiniu_bucket: Optional[str] = field(default_factory=lambda: os.getenv("QINIU_BUCKET"))
    qiniu_domain: Optional[str] = field(default_factory=lambda: os.getenv("QINIU_DOMAIN"))
    qiniu_allow_remote_streams: bool = field(default_factory=lambda: get_env_bool("QINIU_ALLOW_REMOTE_STREAMS", True))
    qiniu_http_timeout: float = field(default_factory=lambda: get_env_float("QINIU_HTTP_TIMEOUT", 30.0))

    # Logging Configuration
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_json_format: bool = field(default_factory=lambda: get_env_bool("LOG_JSON_FORMAT", False))

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.qiniu_http_timeout <= 0:
            logger.warning(f"Invalid QINIU_HTTP_TIMEOUT {self.qiniu_http_timeout}, using 30 seconds")
            self.qiniu_http_timeout = 30.0

        if self.environment == "production":
            if not self.qiniu_access_key or not self.qiniu_secret_key:
                logger.warning("Qiniu credentials not provided for production environment")
            if not self.qiniu_domain:
                logger.warning("Qiniu domain not provided for production environment")

    def get_storage_config(self) -> dict:
        """Get adapter configuration as a dictionary."""
        return {
            "access_key": self.qiniu_access_key,
            "secret_key": self.qiniu_secret_key,
            "bucket": self.qiniu_bucket,
            "domain": self.qiniu_domain,
            "allow_remote_streams": self.qiniu_allow_remote_streams,
            "http_timeout": self.qiniu_http_timeout,
        }


# Global settings instance
_settings: Optional[AppSettings] = None


def get_settings() -> AppSettings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
        logger.info(f"Loaded settings for environment: {_settings.environment}")
    return _settings


def reload_settings() -> AppSettings:
    """Reload the global settings."""
    global _settings
    if env_file.exists():
        load_dotenv(env_file, override=True)
    _settings = AppSettings()
    logger.info(f"Reloaded settings for environment: {_settings.environment}")
    return _settings
