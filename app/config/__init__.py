"""
Configuration package for the pronunciation coach.
Environment-specific settings are selected with FLASK_ENV.
"""
from app.config.settings import (
    Config,
    DevelopmentConfig,
    ProductionConfig,
    TestConfig,
    get_config
)

__all__ = [
    'Config',
    'DevelopmentConfig',
    'ProductionConfig',
    'TestConfig',
    'get_config'
]
