"""
Configuration module for the pronunciation coach.
Manages all configuration settings with environment variable support.
"""
import os
from typing import List, Optional


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    return int(value) if value not in (None, '') else None


class Config:
    """Base configuration class."""

    # Flask Configuration
    FLASK_HOST = os.getenv('FLASK_HOST', '0.0.0.0')
    FLASK_PORT = int(os.getenv('FLASK_PORT', 5000))
    FLASK_DEBUG = os.getenv('FLASK_DEBUG', 'False').lower() == 'true'

    # Request limits
    MAX_TEXT_LENGTH = int(os.getenv('MAX_TEXT_LENGTH', 1000))
    MAX_FILE_SIZE_MB = int(os.getenv('MAX_FILE_SIZE_MB', 10))
    MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024
    ALLOWED_EXTENSIONS = {'wav', 'mp3', 'flac', 'ogg', 'm4a', 'webm'}

    # Session history
    HISTORY_CAPACITY = int(os.getenv('HISTORY_CAPACITY', 50))
    RECENT_SCORES_WINDOW = int(os.getenv('RECENT_SCORES_WINDOW', 10))

    # Phrase selection; set for reproducible phrase order
    PHRASE_SEED = _optional_int('PHRASE_SEED')

    # Speech-to-text collaborator
    TRANSCRIPTION_SERVICE_URL = os.getenv('TRANSCRIPTION_SERVICE_URL', '')
    TRANSCRIPTION_TIMEOUT_SECONDS = float(os.getenv('TRANSCRIPTION_TIMEOUT_SECONDS', 10))

    # Prometheus Metrics Configuration
    ENABLE_PROMETHEUS = os.getenv('ENABLE_PROMETHEUS', 'True').lower() == 'true'
    METRICS_BUCKETS: List[float] = [0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, float("inf")]

    # Logging Configuration
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    @classmethod
    def validate(cls):
        """Validate configuration settings."""
        if cls.MAX_TEXT_LENGTH <= 0:
            raise ValueError("MAX_TEXT_LENGTH must be positive")
        if cls.MAX_FILE_SIZE_MB <= 0:
            raise ValueError("MAX_FILE_SIZE_MB must be positive")
        if cls.HISTORY_CAPACITY <= 0:
            raise ValueError("HISTORY_CAPACITY must be positive")
        if not 0 < cls.RECENT_SCORES_WINDOW <= cls.HISTORY_CAPACITY:
            raise ValueError("RECENT_SCORES_WINDOW must be between 1 and HISTORY_CAPACITY")
        if cls.TRANSCRIPTION_TIMEOUT_SECONDS <= 0:
            raise ValueError("TRANSCRIPTION_TIMEOUT_SECONDS must be positive")


class DevelopmentConfig(Config):
    """Development environment configuration."""
    FLASK_DEBUG = True
    LOG_LEVEL = 'DEBUG'


class ProductionConfig(Config):
    """Production environment configuration."""
    FLASK_DEBUG = False
    LOG_LEVEL = 'WARNING'


class TestConfig(Config):
    """Test environment configuration."""
    FLASK_DEBUG = True
    LOG_LEVEL = 'DEBUG'
    ENABLE_PROMETHEUS = False
    PHRASE_SEED = 1234
    TRANSCRIPTION_SERVICE_URL = ''


def get_config() -> Config:
    """Get configuration based on environment."""
    env = os.getenv('FLASK_ENV', 'production').lower()

    config_map = {
        'development': DevelopmentConfig,
        'production': ProductionConfig,
        'test': TestConfig,
    }

    config_class = config_map.get(env, ProductionConfig)
    config_class.validate()
    return config_class
