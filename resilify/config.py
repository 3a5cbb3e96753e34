import logging
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _optional_float(name: str, default: Optional[float]) -> Optional[float]:
    """Read a float env var; empty or 'none' means no limit."""
    raw = os.getenv(name)
    if raw is None:
        return default
    if raw.strip().lower() in ('', 'none'):
        return None
    return float(raw)


def _optional_int(name: str, default: Optional[int]) -> Optional[int]:
    """Read an int env var; empty or 'none' means no limit."""
    raw = os.getenv(name)
    if raw is None:
        return default
    if raw.strip().lower() in ('', 'none'):
        return None
    return int(raw)


class Config:
    """Base configuration."""
    SPOTIFY_CLIENT_ID = os.getenv('SPOTIFY_CLIENT_ID')
    SPOTIFY_CLIENT_SECRET = os.getenv('SPOTIFY_CLIENT_SECRET')
    SPOTIFY_REDIRECT_URI = os.getenv('SPOTIFY_REDIRECT_URI')

    # Retry configuration
    RETRY_MAX_RETRIES = _optional_int('RETRY_MAX_RETRIES', 4)
    RETRY_BASE_DELAY = float(os.getenv('RETRY_BASE_DELAY', 2))  # seconds
    RETRY_MAX_DELAY = _optional_float('RETRY_MAX_DELAY', 16)  # seconds
    RETRY_MAX_TOTAL_WAIT = _optional_float('RETRY_MAX_TOTAL_WAIT', None)
    RETRY_DEFAULT_RETRY_AFTER = float(
        os.getenv('RETRY_DEFAULT_RETRY_AFTER', 1)
    )

    # Transport settings
    REQUEST_TIMEOUT = int(os.getenv('REQUEST_TIMEOUT', 10))

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    DEBUG = False
    TESTING = False


class ProductionConfig(Config):
    """Production configuration."""
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'WARNING')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    LOG_LEVEL = 'DEBUG'


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    RETRY_BASE_DELAY = 0.0
    RETRY_MAX_DELAY = 0.0
    RETRY_DEFAULT_RETRY_AFTER = 0.0


# Dictionary for easy config selection
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(name: Optional[str] = None) -> type:
    """
    Select a configuration class by name.

    Falls back to the RESILIFY_ENV environment variable, then to the
    default configuration for unknown names.
    """
    name = name or os.getenv('RESILIFY_ENV', 'default')
    return config.get(name, config['default'])


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for scripts using this package."""
    logging.basicConfig(
        level=(level or Config.LOG_LEVEL).upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
